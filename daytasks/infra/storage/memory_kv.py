from __future__ import annotations

from typing import Dict, Optional

from daytasks.domain.ports import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Process-local dict; nothing survives a restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    async def remove_item(self, key: str) -> None:
        self.data.pop(key, None)
