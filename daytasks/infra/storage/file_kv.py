from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Dict, Optional

from daytasks.domain.common.errors import StorageError
from daytasks.domain.ports import KeyValueStore


class JsonFileKeyValueStore(KeyValueStore):
    """
    Single JSON object file mapping keys to string values.

    Every write rewrites the file through a temp file + os.replace, so a
    crash mid-write leaves the previous version intact.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} does not hold a JSON object")
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageError(f"cannot write {self._path}: {e}") from e

    async def get_item(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            await asyncio.to_thread(self._write_all, data)

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            if data.pop(key, None) is not None:
                await asyncio.to_thread(self._write_all, data)
