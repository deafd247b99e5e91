"""discord.py implementation of the member role gateway."""
from __future__ import annotations

import logging
from typing import Iterable

import discord

from ..util import guild_name

log = logging.getLogger(f"rolebot.{__name__}")


class DiscordMembershipGateway:
    """Read and replace a member's roles through the Discord API."""

    def __init__(self, reason: str = "Self-assigned roles") -> None:
        self.reason = reason

    async def _get_member(self, guild: discord.Guild, user_id: int) -> discord.Member:
        """Return a member from cache or fetch if missing."""
        member = guild.get_member(user_id)
        if member:
            return member
        log.debug("Member %s not cached in %s; fetching", user_id, guild_name(guild))
        return await guild.fetch_member(user_id)

    async def get_member_roles(self, guild: discord.Guild, user_id: int) -> set[int]:
        member = await self._get_member(guild, user_id)
        # the @everyone role shares the guild's id and cannot be assigned
        return {role.id for role in member.roles if role.id != guild.id}

    async def set_member_roles(
        self, guild: discord.Guild, user_id: int, role_ids: Iterable[int]
    ) -> None:
        """Replace the member's roles.

        Raises:
            discord.HTTPException: Discord rejected the edit.
        """
        member = await self._get_member(guild, user_id)
        await member.edit(
            roles=[discord.Object(id=rid) for rid in sorted(role_ids)],
            reason=self.reason,
        )
