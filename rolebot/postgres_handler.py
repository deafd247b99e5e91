"""Persist log records to Postgres alongside the console output."""
import asyncio
import logging
from datetime import datetime, timezone

import asyncpg


class PostgresHandler(logging.Handler):
    """Asynchronously insert log records into Postgres."""

    def __init__(self, dsn: str, table: str = "bot_logs") -> None:
        super().__init__()
        self.dsn = dsn
        self.table = table
        self.pool: asyncpg.Pool | None = None
        self.loop: asyncio.AbstractEventLoop | None = None
        # Ignore DEBUG records so they are not written to the database
        self.setLevel(logging.INFO)

    async def connect(self) -> None:
        self.pool = await asyncpg.create_pool(self.dsn)
        self.loop = asyncio.get_running_loop()
        await self.pool.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                id SERIAL PRIMARY KEY,
                logger_name TEXT NOT NULL,
                log_level TEXT NOT NULL,
                message TEXT NOT NULL,
                created_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
            """
        )

    async def aclose(self) -> None:
        if self.pool:
            await self.pool.close()
            self.pool = None

    def close(self) -> None:
        if self.pool:
            pool, self.pool = self.pool, None
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
            if loop is not None:
                loop.create_task(pool.close())
            elif self.loop is not None and not self.loop.is_closed():
                asyncio.run_coroutine_threadsafe(pool.close(), self.loop)
        super().close()

    def emit(self, record: logging.LogRecord) -> None:
        if not self.pool or self.loop is None or self.loop.is_closed():
            return
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        coro = self.pool.execute(
            f"INSERT INTO {self.table} (logger_name, log_level, message, created_at) VALUES ($1, $2, $3, $4)",
            record.name,
            record.levelname,
            record.getMessage(),
            ts,
        )
        # Records can come from any thread; schedule on the bot's loop.
        asyncio.run_coroutine_threadsafe(coro, self.loop)
