from __future__ import annotations

import logging
from typing import Optional

from daytasks.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)


class PersistenceAdapter:
    """
    Soft-fail wrapper around a KeyValueStore backend.

    - get(): any backend error is logged and reported as "absent" (None)
    - set()/remove(): errors are logged and reported as False, never raised
    """

    def __init__(self, backend: KeyValueStore) -> None:
        self._backend = backend

    @property
    def backend(self) -> KeyValueStore:
        return self._backend

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._backend.get_item(key)
        except Exception:
            logger.warning("Storage read failed for key=%s", key, exc_info=True)
            return None

    async def set(self, key: str, value: str) -> bool:
        try:
            await self._backend.set_item(key, value)
            return True
        except Exception:
            logger.warning("Storage write failed for key=%s (%d chars)", key, len(value), exc_info=True)
            return False

    async def remove(self, key: str) -> bool:
        try:
            await self._backend.remove_item(key)
            return True
        except Exception:
            logger.warning("Storage remove failed for key=%s", key, exc_info=True)
            return False
