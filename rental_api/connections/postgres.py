"""
PostgreSQL Connection Module.

Manages the asyncpg connection pool and the connection/transaction helpers
used by every repository.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg
from loguru import logger

from config.settings import get_settings
from rental_api.errors import StoreError

pg_log = logger.bind(module="Postgres")

# Driver-level faults that are reported to callers as StoreError
STORE_FAULTS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    OSError,
)


class PostgresConnection:
    """PostgreSQL connection manager."""

    def __init__(self):
        """Initialize PostgreSQL connection."""
        self.settings = get_settings().postgres
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> None:
        """Connect to PostgreSQL."""
        pg_log.info(f"Connecting to PostgreSQL at {self.settings.host}:{self.settings.port}")
        self._pool = await asyncpg.create_pool(
            host=self.settings.host,
            port=self.settings.port,
            user=self.settings.user,
            password=self.settings.password,
            database=self.settings.database,
            min_size=self.settings.pool_min,
            max_size=self.settings.pool_max,
            command_timeout=self.settings.command_timeout,
        )
        pg_log.info("PostgreSQL connected successfully")

    async def close(self) -> None:
        """Close PostgreSQL connection pool."""
        if self._pool:
            await self._pool.close()
            pg_log.info("PostgreSQL connection closed")

    @property
    def pool(self) -> asyncpg.Pool:
        """Get connection pool."""
        if not self._pool:
            raise RuntimeError("PostgreSQL not connected. Call connect() first.")
        return self._pool


@asynccontextmanager
async def store_connection(
    pool: asyncpg.Pool, operation: str, **context
) -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire a pooled connection for a single-statement operation.

    Driver faults raised while the connection is held are logged with the
    operation name and context, then re-raised as StoreError.

    Args:
        pool: asyncpg connection pool
        operation: Operation name used in logs
        **context: Operation arguments used in logs
    """
    try:
        async with pool.acquire() as conn:
            yield conn
    except STORE_FAULTS as e:
        pg_log.error(f"{operation} failed {context}: {e!r}")
        raise StoreError(f"{operation} failed") from e


@asynccontextmanager
async def store_transaction(
    pool: asyncpg.Pool, operation: str, **context
) -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire a pooled connection and run the block inside one transaction.

    The transaction commits only when the block finishes without error.
    Any exception rolls it back first; domain errors are then re-raised
    unchanged and driver faults (including a failed begin or commit) are
    re-raised as StoreError.

    Args:
        pool: asyncpg connection pool
        operation: Operation name used in logs
        **context: Operation arguments used in logs
    """
    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                yield conn
    except STORE_FAULTS as e:
        pg_log.error(f"{operation} failed, transaction rolled back {context}: {e!r}")
        raise StoreError(f"{operation} failed") from e


# Singleton instance
_postgres: Optional[PostgresConnection] = None


async def get_postgres() -> PostgresConnection:
    """Get PostgreSQL connection singleton."""
    global _postgres
    if _postgres is None:
        _postgres = PostgresConnection()
        await _postgres.connect()
    return _postgres


async def close_postgres() -> None:
    """Close PostgreSQL connection."""
    global _postgres
    if _postgres:
        await _postgres.close()
        _postgres = None
