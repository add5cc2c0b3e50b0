"""Key-value persistence backends for the application store.

The store only needs two operations, ``get(key)`` and ``set(key, value)``,
over serialized JSON blobs. Any backend implementing the ``Storage`` port
can hold them:

- SQLiteStorage: async SQLite table (default)
- JSONFileStorage: one JSON file per key
- MemoryStorage: process-local dict
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite

if TYPE_CHECKING:
    from autoapply.config.settings import Settings

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

UPSERT_SQL = """
INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
"""


class StorageError(Exception):
    """Raised when a backend cannot read or write a key."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class Storage(ABC):
    """Async key-value storage port."""

    async def initialize(self) -> None:
        """Prepare the backend (create tables, directories)."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored blob for ``key``, or None when absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous blob."""

    async def close(self) -> None:
        """Release backend resources."""


class MemoryStorage(Storage):
    """Dict-backed storage; contents live only as long as the object."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JSONFileStorage(Storage):
    """Stores each key as ``<directory>/<key>.json``.

    Writes go to a temporary file first and are moved into place, so a
    crash mid-write never leaves a truncated blob behind.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def initialize(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create storage directory {self.directory}", e) from e

    async def get(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}", e) from e

    async def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Cannot write {path}", e) from e


class SQLiteStorage(Storage):
    """Async SQLite key-value table.

    Uses aiosqlite so that store persistence never blocks the event loop
    serving HTTP requests.
    """

    def __init__(self, db_path: Path | str):
        """Initialize the storage.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._connection: aiosqlite.Connection | None = None

    @asynccontextmanager
    async def _get_connection(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Get the shared database connection, opening it on first use."""
        if self._connection is None:
            self._connection = await aiosqlite.connect(self.db_path)
        yield self._connection

    async def initialize(self) -> None:
        """Create the database file and key-value table if needed."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            async with self._get_connection() as conn:
                await conn.execute(CREATE_TABLE_SQL)
                await conn.commit()
        except (OSError, aiosqlite.Error) as e:
            raise StorageError(f"Cannot initialize {self.db_path}", e) from e

    async def get(self, key: str) -> str | None:
        try:
            async with self._get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?",
                    (key,),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Cannot read key {key!r}", e) from e

        if row is None:
            return None
        return row[0]

    async def set(self, key: str, value: str) -> None:
        try:
            async with self._get_connection() as conn:
                await conn.execute(
                    UPSERT_SQL,
                    (key, value, datetime.now(UTC).isoformat()),
                )
                await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Cannot write key {key!r}", e) from e

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None


def create_storage(settings: Settings) -> Storage:
    """Build the backend selected by ``settings.storage_backend``."""
    from autoapply.config.settings import StorageBackend

    backend = settings.storage_backend
    if backend == StorageBackend.SQLITE:
        logger.debug(f"Using SQLite storage at {settings.store_db_path}")
        return SQLiteStorage(settings.store_db_path)
    if backend == StorageBackend.JSON:
        logger.debug(f"Using JSON file storage in {settings.store_dir}")
        return JSONFileStorage(settings.store_dir)
    return MemoryStorage()
