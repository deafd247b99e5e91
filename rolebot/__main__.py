"""Entry point to run rolebot."""
import argparse
import asyncio
import logging
import os
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import discord
from discord.ext import commands

from . import bot_config as cfg
from .db import close_pool
from .postgres_handler import PostgresHandler
from .util import build_db_url

logger = logging.getLogger("rolebot")
log_format = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
_console_handler: logging.Handler | None = None


def configure_logging() -> None:
    """Attach the console handler and apply ``LOG_LEVEL``.

    Safe to call repeatedly; the console handler is only added once and
    the ``rolebot`` logger always keeps INFO enabled.
    """
    global _console_handler
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    logger.setLevel(min(level, logging.INFO))

    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setFormatter(log_format)
        root_logger.addHandler(_console_handler)
    # Limit console output to INFO and above even when file logging is DEBUG
    _console_handler.setLevel(logging.INFO)


def get_version() -> str:
    try:
        return version("rolebot")
    except PackageNotFoundError:
        return "unknown"


intents = discord.Intents.default()
intents.message_content = True
intents.members = True  # SelfRolesCog reads member roles


class RoleBot(commands.Bot):
    async def setup_hook(self) -> None:
        # Load cogs bundled with the package
        cog_dir = Path(__file__).resolve().parent / "cogs"
        for file in sorted(cog_dir.glob("*_cog.py")):
            await self.load_extension(f"rolebot.cogs.{file.stem}")
        if cfg.SYNC_COMMANDS:
            cmds = await self.tree.sync()
            logger.info("Synced %d commands.", len(cmds))

    async def on_ready(self) -> None:
        logger.info("%s is now online in %d guilds", self.user, len(self.guilds))

    async def on_error(self, event: str, *args, **kwargs) -> None:
        logger.exception("Unhandled exception in event %s", event)


bot = RoleBot(command_prefix=cfg.COMMAND_PREFIX, intents=intents)


@bot.tree.error
async def on_app_command_error(
    interaction: discord.Interaction, exc: discord.app_commands.AppCommandError
) -> None:
    cmd_name = getattr(interaction.command, "name", "unknown")
    logger.exception("Error in slash command '%s'", cmd_name, exc_info=exc)
    if interaction.response.is_done():
        await interaction.followup.send("An error occurred.", ephemeral=True)
    else:
        await interaction.response.send_message("An error occurred.", ephemeral=True)


async def main() -> None:
    configure_logging()
    logger.info("Starting rolebot %s in %s environment", get_version(), cfg.env)
    root_logger = logging.getLogger()
    db_url = build_db_url()
    db_handler = None
    file_handler = None
    if db_url:
        db_handler = PostgresHandler(db_url)
        await db_handler.connect()
        root_logger.addHandler(db_handler)
        logger.info("Postgres logging enabled; file logging disabled")
    else:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_dir / "bot.log", when="midnight", backupCount=90
        )
        file_handler.setFormatter(log_format)
        root_logger.addHandler(file_handler)

    try:
        async with bot:
            await bot.start(cfg.TOKEN)
    finally:
        if db_handler:
            root_logger.removeHandler(db_handler)
            await db_handler.aclose()
        if file_handler:
            root_logger.removeHandler(file_handler)
            file_handler.close()
        await close_pool()


def run() -> None:
    parser = argparse.ArgumentParser(description="Run rolebot")
    parser.add_argument("--version", action="version", version=get_version())
    parser.parse_args()
    asyncio.run(main())


if __name__ == "__main__":
    run()
