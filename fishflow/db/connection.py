"""Database connection management for the PostgreSQL store"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from fishflow.config import DATABASE_URL, DB_POOL_MAX_SIZE, DB_POOL_MIN_SIZE
from fishflow.exceptions import ConnectionError, wrap_external_exception

logger = logging.getLogger(__name__)


class Database:
    """
    Connection pool shared by the catch log and achievement queries.

    Every connection hands out rows as dicts, which the query modules
    return unchanged and the PostgreSQL store validates into models.
    """

    def __init__(
        self,
        connection_string: str = DATABASE_URL,
        min_size: int = DB_POOL_MIN_SIZE,
        max_size: int = DB_POOL_MAX_SIZE,
    ):
        self.connection_string = connection_string
        self.min_size = min_size
        self.max_size = max_size
        self._pool: Optional[AsyncConnectionPool] = None

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    async def init_pool(self) -> None:
        """
        Open the pool and wait until min_size connections are ready

        Calling it again while the pool is open does nothing.

        Raises:
            ConnectionError: If the database cannot be reached
        """
        if self._pool is not None:
            logger.debug("Database pool already initialized")
            return

        logger.info(f"Initializing database connection pool (min={self.min_size}, max={self.max_size})")
        pool = AsyncConnectionPool(
            self.connection_string,
            min_size=self.min_size,
            max_size=self.max_size,
            kwargs={"row_factory": dict_row},
            open=False
        )
        try:
            await pool.open(wait=True)
        except psycopg.Error as e:
            await pool.close()
            raise wrap_external_exception(e, operation="init_pool")

        self._pool = pool

    async def close_pool(self) -> None:
        """Close the pool; safe to call when it was never opened"""
        if self._pool:
            logger.info("Closing database connection pool")
            await self._pool.close()
            self._pool = None

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[psycopg.AsyncConnection, None]:
        """Borrow a connection from the pool"""
        if not self._pool:
            raise ConnectionError(
                "Database pool not initialized, call init_pool() first",
                operation="get_connection"
            )

        async with self._pool.connection() as conn:
            yield conn


# Shared instance used by fishflow.db.queries
db = Database()
