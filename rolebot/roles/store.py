"""Postgres persistence for per-guild role channel settings."""
from __future__ import annotations

import json
import logging
from typing import Any

import asyncpg

from ..util import rows_from_tag
from .catalog import RoleCatalog
from .interfaces import GuildRoleConfig

log = logging.getLogger(f"rolebot.{__name__}")

TABLE = "guild_role_config"

CREATE_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    guild_id BIGINT PRIMARY KEY,
    role_channel BIGINT,
    role_config JSONB,
    role_enabled BOOLEAN NOT NULL DEFAULT TRUE,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


def _decode_groups(value: Any) -> Any:
    # asyncpg hands JSONB back as text unless a codec is registered
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


class PostgresRoleConfigStore:
    """Role channel settings keyed by guild id."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool

    async def ensure_schema(self) -> None:
        await self.pool.execute(CREATE_SQL)

    async def get(self, guild_id: int) -> GuildRoleConfig | None:
        row = await self.pool.fetchrow(
            f"SELECT role_channel, role_config, role_enabled FROM {TABLE} WHERE guild_id=$1",
            guild_id,
        )
        if row is None:
            return None
        return GuildRoleConfig(
            guild_id=guild_id,
            channel_id=row["role_channel"],
            enabled=bool(row["role_enabled"]),
            groups=_decode_groups(row["role_config"]),
        )

    async def set_channel(self, guild_id: int, channel_id: int | None) -> None:
        tag = await self.pool.execute(
            f"""
            INSERT INTO {TABLE} (guild_id, role_channel)
            VALUES ($1, $2)
            ON CONFLICT (guild_id) DO UPDATE SET role_channel=$2, updated_at=now()
            """,
            guild_id,
            channel_id,
        )
        log.info("Role channel for guild %s set to %s (%d row)", guild_id, channel_id, rows_from_tag(tag))

    async def set_groups(self, guild_id: int, config: Any) -> RoleCatalog:
        """Validate and store the role groups for *guild_id*.

        Raises:
            CatalogError: the groups are malformed or ambiguous; nothing
                is stored.
        """
        catalog = RoleCatalog.from_config(config)
        payload = json.dumps(catalog.to_config())
        tag = await self.pool.execute(
            f"""
            INSERT INTO {TABLE} (guild_id, role_config)
            VALUES ($1, $2::jsonb)
            ON CONFLICT (guild_id) DO UPDATE SET role_config=$2::jsonb, updated_at=now()
            """,
            guild_id,
            payload,
        )
        log.info(
            "Stored %d roles for guild %s (%d row)", len(catalog), guild_id, rows_from_tag(tag)
        )
        return catalog

    async def set_enabled(self, guild_id: int, enabled: bool) -> None:
        await self.pool.execute(
            f"""
            INSERT INTO {TABLE} (guild_id, role_enabled)
            VALUES ($1, $2)
            ON CONFLICT (guild_id) DO UPDATE SET role_enabled=$2, updated_at=now()
            """,
            guild_id,
            enabled,
        )
