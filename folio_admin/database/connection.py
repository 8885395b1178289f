from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import psycopg
from psycopg_pool import AsyncConnectionPool

from folio_admin.config.settings import Settings


def conninfo_from_settings(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )


class PostgresConnection:
    """Owns an async connection pool; constructed explicitly and passed to adapters."""

    def __init__(self, conninfo: str, max_size: int = 5) -> None:
        self._pool = AsyncConnectionPool(conninfo, min_size=1, max_size=max_size, open=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresConnection":
        return cls(conninfo_from_settings(settings), max_size=settings.db_pool_max_size)

    async def open(self) -> None:
        await self._pool.open(wait=True, timeout=10)

    async def close(self) -> None:
        await self._pool.close()

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[psycopg.AsyncConnection[Any], None]:
        """Yield a pooled connection. Commits on clean exit, rolls back on error."""
        async with self._pool.connection() as conn:
            yield conn
