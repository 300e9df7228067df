from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from daytasks.domain.common.errors import StorageError
from daytasks.domain.ports import KeyValueStore
from daytasks.infra.db.connection import Database

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class SqliteKeyValueStore(KeyValueStore):
    """Device-local persistent storage: one `kv` table in an SQLite file."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def init(self) -> None:
        try:
            await self._db.executescript(_SCHEMA)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"cannot initialise kv table at {self._db.path}: {e}") from e
        logger.info("SqliteKeyValueStore ready db=%s", self._db.path)

    async def get_item(self, key: str) -> Optional[str]:
        try:
            row = await self._db.fetchone("SELECT value FROM kv WHERE key = ?;", (key,))
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"read failed for key={key}: {e}") from e
        return row["value"] if row else None

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self._db.execute(
                """
                INSERT INTO kv(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value;
                """,
                (key, value),
            )
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"write failed for key={key}: {e}") from e

    async def remove_item(self, key: str) -> None:
        try:
            await self._db.execute("DELETE FROM kv WHERE key = ?;", (key,))
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"remove failed for key={key}: {e}") from e
