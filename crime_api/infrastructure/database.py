"""Incident Store — async SQLite client over a single SQLAlchemy engine.

Invariants:
    - One IncidentStore per process, created in the FastAPI lifespan and injected
      into handlers (never a hidden module global)
    - select() and run() each execute exactly one statement
    - Every SQLAlchemy exception is mapped to StoreError carrying the driver's raw message

Design Decisions:
    - exec_driver_sql: statements are built with qmark placeholders by core/, the
      sqlite driver binds them directly
    - run() commits through engine.begin(): each write is its own transaction
    - run() returns the affected row count so DELETE needs no prior SELECT
"""

import logging
from pathlib import Path
from typing import Any, Sequence

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from crime_api.core.errors import StoreError
from crime_api.db.tables import metadata

logger = logging.getLogger(__name__)


def _raw_message(exc: SQLAlchemyError) -> str:
    """The engine's own message, without SQLAlchemy's statement echo."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class IncidentStore:
    """Async select/run interface to the Incidents database."""

    def __init__(self, database_url: str, engine: AsyncEngine | None = None):
        self.database_url = database_url
        self.engine = engine or create_async_engine(database_url)

    @property
    def database_name(self) -> str:
        return Path(make_url(self.database_url).database or ":memory:").name

    async def select(self, query: str, params: Sequence[Any] = ()) -> list[dict]:
        """Run a read query and return every row as a dict."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.exec_driver_sql(query, tuple(params))
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            message = _raw_message(e)
            logger.error(f"DB select failed: {message}", extra={"operation": "select"})
            raise StoreError(message, "select") from e

    async def run(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement in its own transaction; return affected rows."""
        try:
            async with self.engine.begin() as conn:
                result = await conn.exec_driver_sql(query, tuple(params))
                return result.rowcount
        except SQLAlchemyError as e:
            message = _raw_message(e)
            logger.error(f"DB run failed: {message}", extra={"operation": "run"})
            raise StoreError(message, "run") from e

    async def create_tables(self) -> None:
        """Create the Incidents table if absent."""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
