"""Shared Postgres connection pool for rolebot."""
from __future__ import annotations

import logging

import asyncpg

from .util import build_db_url

log = logging.getLogger(f"rolebot.{__name__}")

_pool: asyncpg.Pool | None = None


async def get_pool() -> asyncpg.Pool:
    """Return a global asyncpg pool, creating it if needed.

    Raises:
        RuntimeError: no database URL is configured.
    """
    global _pool
    if _pool:
        # A pool closed elsewhere is rebuilt instead of handed out again.
        if not _pool.is_closing():
            return _pool
        _pool = None
    url = build_db_url()
    if not url:
        raise RuntimeError("PG_DSN is missing")
    _pool = await asyncpg.create_pool(url)
    log.info("Postgres pool created")
    return _pool


async def close_pool() -> None:
    """Close the global pool if it exists."""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None
