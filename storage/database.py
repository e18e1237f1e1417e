"""
Async SQLAlchemy engine management for book storage.
Handles connection, schema bootstrap, and health checks.
"""

from typing import Any, Dict, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from .tables import metadata

logger = structlog.get_logger(__name__)


class DatabaseManager:
    """
    Owns the async engine and its connection pool.
    A single instance is shared by every request for the lifetime of the app.
    """

    def __init__(self, database_url: str, echo: bool = False, pool_size: int = 5):
        """
        Initialize the database manager.

        Args:
            database_url: SQLAlchemy async database URL
            echo: Log every emitted SQL statement
            pool_size: Connection pool size for server databases
        """
        self.database_url = database_url
        self.echo = echo
        self.pool_size = pool_size
        self.engine: Optional[AsyncEngine] = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def _engine_kwargs(self) -> Dict[str, Any]:
        """Build dialect-specific engine arguments."""
        kwargs: Dict[str, Any] = {"echo": self.echo}

        if self.is_sqlite:
            kwargs["connect_args"] = {"check_same_thread": False}
            # An in-memory database only lives as long as its connection,
            # so every checkout must share the same one.
            if make_url(self.database_url).database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_size"] = self.pool_size
            kwargs["pool_pre_ping"] = True

        return kwargs

    async def connect(self) -> None:
        """Create the engine and verify the database is reachable."""
        try:
            self.engine = create_async_engine(self.database_url, **self._engine_kwargs())

            # Test connection
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            logger.info("Successfully connected to database", dialect=self.engine.dialect.name)

        except SQLAlchemyError as e:
            logger.error("Failed to connect to database", error=str(e))
            raise

    async def create_tables(self) -> None:
        """
        Create missing tables.
        Intended for local runs and tests; existing tables are left untouched.
        """
        if self.engine is None:
            raise RuntimeError("Database is not connected")

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
            logger.info("Database tables ensured", tables=sorted(metadata.tables))

        except SQLAlchemyError as e:
            logger.error("Failed to create tables", error=str(e))
            raise

    async def disconnect(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.info("Disconnected from database")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        if self.engine is None:
            return {"status": "unhealthy", "error": "not connected"}

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "healthy", "dialect": self.engine.dialect.name}

        except SQLAlchemyError as e:
            logger.error("Database health check failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}
