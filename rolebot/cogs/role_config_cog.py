"""Admin commands for the self-assigned role channel."""
from __future__ import annotations

import json
import logging
from typing import Any

import discord
from discord import app_commands
from discord.ext import commands

from ..infra import PoolAwareCog
from ..roles import CatalogError, RoleCatalog, RoleConfigStore, describe_catalog, usage_examples
from ..roles.store import PostgresRoleConfigStore
from ..util import user_name

log = logging.getLogger(f"rolebot.{__name__}")

CONFIG_EXAMPLE = (
    '{"groups": [{"name": "color", "limit": 1, "roles": '
    '[{"name": "red", "primary_id": 123}, {"name": "gold", "primary_id": 456, "secondary_id": 789}]}]}'
)


class RoleConfigCog(PoolAwareCog):
    """Set the role channel and the self-assignable role groups."""

    def __init__(self, bot: commands.Bot, *, store: RoleConfigStore | None = None) -> None:
        super().__init__(bot)
        self.store = store

    async def cog_load(self) -> None:
        if self.store is not None:
            return
        await super().cog_load()
        if self.pool:
            store = PostgresRoleConfigStore(self.pool)
            await store.ensure_schema()
            self.store = store

    async def _store_for(self, interaction: discord.Interaction) -> RoleConfigStore | None:
        """Return the store, or reply that it is missing and return None."""
        if self.store is not None and interaction.guild_id is not None:
            return self.store
        await interaction.response.send_message("Database unavailable.", ephemeral=True)
        return None

    roles_group = app_commands.Group(
        name="roles",
        description="Configure self-assigned roles",
        guild_only=True,
        default_permissions=discord.Permissions(manage_guild=True),
    )

    @roles_group.command(name="channel", description="Set the channel members use to pick roles")
    @app_commands.describe(channel="Channel for +role / -role messages")
    async def set_channel(
        self, interaction: discord.Interaction, channel: discord.TextChannel
    ) -> None:
        guild_id = interaction.guild_id
        store = await self._store_for(interaction)
        if store is None or guild_id is None:
            return
        await store.set_channel(guild_id, channel.id)
        log.info("%s set role channel to %s", user_name(interaction.user), channel.id)
        await interaction.response.send_message(
            f"Updated roles channel to <#{channel.id}>", ephemeral=True
        )

    @roles_group.command(name="config", description="Replace the role groups with JSON")
    @app_commands.describe(
        data="Role groups as JSON text",
        file="Role groups as a JSON file (used when data is empty)",
    )
    async def set_config(
        self,
        interaction: discord.Interaction,
        data: str | None = None,
        file: discord.Attachment | None = None,
    ) -> None:
        guild_id = interaction.guild_id
        store = await self._store_for(interaction)
        if store is None or guild_id is None:
            return

        raw: Any = data
        if not raw and file is not None:
            raw = (await file.read()).decode("utf-8", errors="replace")
        if not raw:
            await interaction.response.send_message(
                f"Provide role groups as JSON, for example:\n```json\n{CONFIG_EXAMPLE}\n```",
                ephemeral=True,
            )
            return

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            await interaction.response.send_message(f"Invalid JSON: {exc}", ephemeral=True)
            return

        try:
            catalog = await store.set_groups(guild_id, parsed)
        except CatalogError as exc:
            await interaction.response.send_message(
                f"Role config not saved: {exc}", ephemeral=True
            )
            return

        log.info(
            "%s stored %d self-assignable roles for guild %s",
            user_name(interaction.user),
            len(catalog),
            guild_id,
        )
        await interaction.response.send_message(
            f"Saved role config.\n{describe_catalog(catalog)}", ephemeral=True
        )

    @roles_group.command(name="show", description="Show the role channel settings")
    async def show(self, interaction: discord.Interaction) -> None:
        guild_id = interaction.guild_id
        store = await self._store_for(interaction)
        if store is None or guild_id is None:
            return
        config = await store.get(guild_id)
        if config is None:
            await interaction.response.send_message(
                "Self-assigned roles are not configured.", ephemeral=True
            )
            return

        try:
            catalog = config.catalog()
        except CatalogError as exc:
            catalog = RoleCatalog([])
            log.warning("Stored role config for %s is invalid: %s", guild_id, exc)

        channel = f"<#{config.channel_id}>" if config.channel_id else "not set"
        lines = [
            f"Channel: {channel}",
            f"Enabled: {'yes' if config.enabled else 'no'}",
            "",
            describe_catalog(catalog),
        ]
        examples = usage_examples(catalog)
        if examples:
            lines += ["", examples]
        await interaction.response.send_message("\n".join(lines), ephemeral=True)

    @roles_group.command(name="enable", description="Turn the role channel on or off")
    async def set_enabled(self, interaction: discord.Interaction, enabled: bool) -> None:
        guild_id = interaction.guild_id
        store = await self._store_for(interaction)
        if store is None or guild_id is None:
            return
        await store.set_enabled(guild_id, enabled)
        state = "enabled" if enabled else "disabled"
        await interaction.response.send_message(f"Self-assigned roles {state}.", ephemeral=True)


async def setup(bot: commands.Bot):
    await bot.add_cog(RoleConfigCog(bot))
