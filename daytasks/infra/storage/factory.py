from __future__ import annotations

import logging
from pathlib import Path

from daytasks.constants import STORAGE_BACKENDS, STORAGE_FILE, STORAGE_MEMORY, STORAGE_SQLITE
from daytasks.domain.common.errors import ConfigError
from daytasks.domain.ports import KeyValueStore
from daytasks.infra.db.connection import Database
from daytasks.infra.storage.file_kv import JsonFileKeyValueStore
from daytasks.infra.storage.memory_kv import MemoryKeyValueStore
from daytasks.infra.storage.sqlite_kv import SqliteKeyValueStore

logger = logging.getLogger(__name__)


async def build_storage(backend: str, path: Path) -> KeyValueStore:
    """
    Pick the key-value backend once at startup from an explicit setting.

    sqlite -> SqliteKeyValueStore at `path`
    file   -> JsonFileKeyValueStore at `path`
    memory -> MemoryKeyValueStore (path ignored)
    """
    if backend not in STORAGE_BACKENDS:
        raise ConfigError(f"Unknown storage backend {backend!r}; expected one of {', '.join(STORAGE_BACKENDS)}")

    if backend == STORAGE_MEMORY:
        logger.info("Using in-memory storage (nothing is persisted)")
        return MemoryKeyValueStore()

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if backend == STORAGE_FILE:
        logger.info("Using JSON file storage at %s", path)
        return JsonFileKeyValueStore(path)

    assert backend == STORAGE_SQLITE
    store = SqliteKeyValueStore(Database(str(path)))
    await store.init()
    return store
