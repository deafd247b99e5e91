"""Base classes and mixins for Discord cogs."""
from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar

import asyncpg
from discord.ext import commands

from .. import db

if TYPE_CHECKING:
    from discord.ext.commands import Bot

log = logging.getLogger(f"rolebot.{__name__}")

F = TypeVar("F", bound=Callable[..., Any])


class PoolAwareCog(commands.Cog):
    """Mixin providing standardized database pool initialization.

    Subclasses get a ``self.pool`` attribute that is set during
    ``cog_load()`` and cleared during ``cog_unload()``. When the database
    URL is missing the cog logs a warning and leaves ``self.pool`` as
    ``None`` so database features can switch themselves off.
    """

    pool: asyncpg.Pool | None = None

    def __init__(self, bot: "Bot") -> None:
        self.bot = bot
        self.pool = None

    async def cog_load(self) -> None:
        """Initialize the database pool.

        Subclasses that override this should call ``await super().cog_load()``.
        """
        try:
            self.pool = await db.get_pool()
        except RuntimeError:
            self.pool = None
            log.warning(
                "%s: database pool unavailable (PG_DSN missing)",
                self.__class__.__name__,
            )

    async def cog_unload(self) -> None:
        self.pool = None


def log_errors(message: str = "Operation failed") -> Callable[[F], F]:
    """Decorator that logs exceptions with consistent formatting.

    Example::

        @commands.Cog.listener()
        @log_errors("Failed to handle role message")
        async def on_message(self, message):
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except Exception:
                func_log = logging.getLogger(f"rolebot.{func.__module__}")
                func_log.exception("%s in %s", message, func.__name__)
                return None

        return wrapper  # type: ignore[return-value]

    return decorator
