"""Shared aiosqlite plumbing for the local repositories.

Each operation opens its own connection to the database file, so a
repository instance is a cheap handle that can be constructed once at
startup and injected wherever it is needed.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from menu_cache_service.exceptions import StorageError

logger = logging.getLogger(__name__)


class SQLiteRepository:
    """Base class for repositories backed by a single SQLite file."""

    def __init__(self, database_path: str | Path) -> None:
        """Initialize repository.

        Args:
            database_path: Path to the SQLite database file (created on first use)
        """
        self.database_path = str(database_path)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection, translating driver and I/O failures to StorageError."""
        try:
            async with aiosqlite.connect(self.database_path) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except (aiosqlite.Error, OSError) as e:
            logger.error(f"SQLite operation failed on {self.database_path}: {e}")
            raise StorageError(
                "Local store operation failed",
                context={"database_path": self.database_path},
                cause=e,
            ) from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Scoped transaction: commit when the block succeeds, roll back otherwise."""
        async with self.connection() as db:
            try:
                yield db
            except BaseException:
                await db.rollback()
                raise
            await db.commit()
