import logging

import rolebot.__main__ as main


def test_console_logging_remains_verbose(monkeypatch):
    """Ensure raising LOG_LEVEL does not disable INFO logs for rolebot."""

    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    main.configure_logging()

    log = logging.getLogger("rolebot.test_console")
    assert log.isEnabledFor(logging.INFO)

    # Restore default configuration for subsequent tests.
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    main.configure_logging()


def test_configure_logging_adds_one_console_handler():
    main.configure_logging()
    main.configure_logging()
    root = logging.getLogger()
    assert root.handlers.count(main._console_handler) == 1
