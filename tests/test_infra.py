"""Tests for infrastructure modules."""
from __future__ import annotations

import asyncio
import logging
from types import SimpleNamespace

import pytest

from rolebot import db
from rolebot.infra import (
    CogConfig,
    PoolAwareCog,
    RolesConfig,
    get_config,
    log_errors,
    reset_config,
    set_config,
)
from rolebot.infra.logging import structured_log


# --- Logging Tests ---


def test_structured_log(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("rolebot.test_structured")
    with caplog.at_level(logging.INFO):
        structured_log(logger, logging.INFO, "Role commit", guild_id=1, user_id=2)
    assert "Role commit guild_id=1 user_id=2" in caplog.text


# --- Configuration Tests ---


def test_roles_config_defaults() -> None:
    config = RolesConfig()
    assert config.reply_delete_seconds == 10.0
    assert config.error_delete_seconds == 5.0
    assert config.delete_messages is True


def test_roles_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROLE_REPLY_DELETE_SECONDS", "2.5")
    monkeypatch.setenv("ROLE_ERROR_DELETE_SECONDS", "-3")
    monkeypatch.setenv("ROLE_DELETE_MESSAGES", "off")
    config = RolesConfig.from_env()
    assert config.reply_delete_seconds == 2.5
    assert config.error_delete_seconds == 0.0
    assert config.delete_messages is False


def test_roles_config_invalid_env_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROLE_REPLY_DELETE_SECONDS", "soon")
    assert RolesConfig.from_env().reply_delete_seconds == 10.0


def test_global_config_override() -> None:
    custom = CogConfig(roles=RolesConfig(reply_delete_seconds=1))
    set_config(custom)
    assert get_config() is custom
    reset_config()
    assert get_config() is not custom


# --- Cog base tests ---


def test_log_errors_logs_and_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    @log_errors("Boom happened")
    async def explode() -> str:
        raise ValueError("boom")

    with caplog.at_level(logging.ERROR):
        assert asyncio.run(explode()) is None
    assert "Boom happened in explode" in caplog.text


def test_pool_aware_cog_without_database(monkeypatch: pytest.MonkeyPatch) -> None:
    async def no_pool():
        raise RuntimeError("PG_DSN is missing")

    monkeypatch.setattr(db, "get_pool", no_pool)
    cog = PoolAwareCog(SimpleNamespace())  # type: ignore[arg-type]
    asyncio.run(cog.cog_load())
    assert cog.pool is None


def test_pool_aware_cog_with_database(monkeypatch: pytest.MonkeyPatch) -> None:
    pool = object()

    async def fake_pool():
        return pool

    monkeypatch.setattr(db, "get_pool", fake_pool)
    cog = PoolAwareCog(SimpleNamespace())  # type: ignore[arg-type]
    asyncio.run(cog.cog_load())
    assert cog.pool is pool
    asyncio.run(cog.cog_unload())
    assert cog.pool is None


# --- Database pool ---


def test_get_pool_requires_dsn(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("PG_DSN", "DATABASE_URL", "PG_USER", "PG_PASSWORD", "PG_DB"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(db, "_pool", None)
    with pytest.raises(RuntimeError):
        asyncio.run(db.get_pool())


def test_get_pool_reuses_pool(monkeypatch: pytest.MonkeyPatch) -> None:
    created = []

    class DummyPool:
        def is_closing(self):
            return False

    async def fake_create_pool(url, *args, **kwargs):
        created.append(url)
        return DummyPool()

    monkeypatch.setattr(db.asyncpg, "create_pool", fake_create_pool)
    monkeypatch.setattr(db, "_pool", None)
    monkeypatch.setenv("PG_DSN", "postgresql://u:p@localhost/db")

    async def run_test():
        first = await db.get_pool()
        second = await db.get_pool()
        assert first is second

    asyncio.run(run_test())
    assert created == ["postgresql://u:p@localhost/db"]
