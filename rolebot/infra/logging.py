"""Standardized logging utilities for rolebot."""
from __future__ import annotations

import logging
from typing import Any


def structured_log(
    logger: logging.Logger,
    level: int,
    message: str,
    **fields: Any,
) -> None:
    """Log a message with structured key=value fields appended.

    Example::

        structured_log(log, logging.WARNING, "Role commit failed",
                      guild_id=1, user_id=2, status=403)
        # Logs: "Role commit failed guild_id=1 user_id=2 status=403"
    """
    if fields:
        field_str = " ".join(f"{k}={v}" for k, v in fields.items())
        message = f"{message} {field_str}"
    logger.log(level, message)
