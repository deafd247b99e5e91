"""Self-assigned roles in a dedicated channel.
================================
Members type commands into the guild's role channel:

  - ``+red +big blue`` adds roles
  - ``-red`` removes a role
  - ``clear`` / ``reset`` removes every self-assignable role

The bot replies with what changed, then deletes both the command and its
reply after a short delay so the channel stays empty. The channel and the
role groups are configured per guild with ``/roles`` (see role_config_cog).
"""
from __future__ import annotations

import asyncio
import logging

import discord
from discord.ext import commands

from ..infra import PoolAwareCog, RolesConfig, get_config, log_errors, structured_log
from ..roles import (
    COMMIT_FAILED_TEXT,
    CatalogError,
    GuildMembershipGateway,
    GuildRoleConfig,
    RoleConfigStore,
    process_role_message,
    usage_examples,
)
from ..roles.gateway import DiscordMembershipGateway
from ..roles.store import PostgresRoleConfigStore
from ..util import chan_name, guild_name, user_name

log = logging.getLogger(f"rolebot.{__name__}")


class SelfRolesCog(PoolAwareCog):
    """Applies ``+role`` / ``-role`` messages posted in the role channel."""

    def __init__(
        self,
        bot: commands.Bot,
        *,
        store: RoleConfigStore | None = None,
        gateway: GuildMembershipGateway | None = None,
        config: RolesConfig | None = None,
    ) -> None:
        super().__init__(bot)
        self.store = store
        self.gateway = gateway or DiscordMembershipGateway()
        self.config = config or get_config().roles

    async def cog_load(self) -> None:
        if self.store is not None:
            return
        await super().cog_load()
        if not self.pool:
            log.warning("Role channel disabled: no database for role config")
            return
        store = PostgresRoleConfigStore(self.pool)
        await store.ensure_schema()
        self.store = store

    @log_errors("Failed to load role config")
    async def _load_config(
        self, store: RoleConfigStore, guild_id: int
    ) -> GuildRoleConfig | None:
        return await store.get(guild_id)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        guild, store = message.guild, self.store
        if message.author.bot or guild is None or store is None:
            return
        config = await self._load_config(store, guild.id)
        if config is None or not config.active or message.channel.id != config.channel_id:
            return

        try:
            reply = await self.handle_role_message(message, guild, config)
        except CatalogError as exc:
            log.error("Invalid role config in %s: %s", guild_name(guild), exc)
            return
        except Exception:
            log.exception(
                "Failed to handle role message from %s in %s",
                user_name(message.author),
                chan_name(message.channel),
            )
            await self._discard_failed(message)
            return

        await self._reply_and_clean_up(message, reply)

    async def handle_role_message(
        self, message: discord.Message, guild: discord.Guild, config: GuildRoleConfig
    ) -> str:
        """Apply the message to the author's roles and return the reply.

        Raises:
            CatalogError: the stored role config is unusable.
        """
        catalog = config.catalog()
        held = await self.gateway.get_member_roles(guild, message.author.id)
        outcome = process_role_message(message.content, catalog, held)

        if outcome.is_help:
            examples = usage_examples(catalog)
            return f"{outcome.reply}\n{examples}" if examples else outcome.reply

        role_ids = outcome.role_ids
        if role_ids is None:
            return outcome.reply

        try:
            await self.gateway.set_member_roles(guild, message.author.id, role_ids)
        except discord.HTTPException as exc:
            structured_log(
                log,
                logging.WARNING,
                "Failed to edit member roles",
                guild_id=guild.id,
                user_id=message.author.id,
                status=getattr(exc, "status", None),
                role_ids=sorted(role_ids),
                error=exc,
            )
            return COMMIT_FAILED_TEXT

        log.info(
            "Updated roles for %s in %s: %s",
            user_name(message.author),
            guild_name(guild),
            outcome.reply.replace("\n", " | "),
        )
        return outcome.reply

    async def _reply_and_clean_up(self, message: discord.Message, reply: str) -> None:
        try:
            sent = await message.channel.send(reply)
        except discord.HTTPException as exc:
            log.warning("Failed to send role message %r: %s", reply, exc)
            sent = None

        if not self.config.delete_messages:
            return
        await asyncio.sleep(self.config.reply_delete_seconds)

        if sent is None:
            await self._delete_quietly(message, "received")
            return

        # Delete both together; one failing must not keep the other around.
        received_res, sent_res = await asyncio.gather(
            message.delete(), sent.delete(), return_exceptions=True
        )
        if isinstance(received_res, Exception):
            log.warning("Failed to delete received message %s: %s", message.id, received_res)
        if isinstance(sent_res, Exception):
            log.warning("Failed to delete sent message %r: %s", reply, sent_res)

    async def _discard_failed(self, message: discord.Message) -> None:
        if not self.config.delete_messages:
            return
        await asyncio.sleep(self.config.error_delete_seconds)
        await self._delete_quietly(message, "received")

    async def _delete_quietly(self, message: discord.Message, label: str) -> None:
        try:
            await message.delete()
        except discord.HTTPException as exc:
            log.warning("Failed to delete %s message %s: %s", label, message.id, exc)


async def setup(bot: commands.Bot):
    await bot.add_cog(SelfRolesCog(bot))
