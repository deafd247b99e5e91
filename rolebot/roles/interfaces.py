"""Collaborators the role channel depends on."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

import discord

from .catalog import RoleCatalog


@dataclass(frozen=True)
class GuildRoleConfig:
    """A guild's stored role channel settings."""

    guild_id: int
    channel_id: int | None = None
    enabled: bool = True
    groups: Any = None

    @property
    def active(self) -> bool:
        return self.enabled and self.channel_id is not None and self.groups is not None

    def catalog(self) -> RoleCatalog:
        """Build the catalog; raises ``CatalogError`` for bad stored data."""
        return RoleCatalog.from_config(self.groups)


class RoleConfigStore(Protocol):
    async def get(self, guild_id: int) -> GuildRoleConfig | None:  # pragma: no cover - structural typing
        ...

    async def set_channel(self, guild_id: int, channel_id: int | None) -> None:  # pragma: no cover - structural typing
        ...

    async def set_groups(self, guild_id: int, config: Any) -> RoleCatalog:  # pragma: no cover - structural typing
        ...

    async def set_enabled(self, guild_id: int, enabled: bool) -> None:  # pragma: no cover - structural typing
        ...


class GuildMembershipGateway(Protocol):
    async def get_member_roles(self, guild: discord.Guild, user_id: int) -> set[int]:  # pragma: no cover - structural typing
        ...

    async def set_member_roles(
        self, guild: discord.Guild, user_id: int, role_ids: Iterable[int]
    ) -> None:  # pragma: no cover - structural typing
        ...
