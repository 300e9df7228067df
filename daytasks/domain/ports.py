from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from daytasks.domain.notifications.models import NotificationType


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str: ...


class KeyValueStore(ABC):
    """
    Raw string key/value backend.

    Implementations may raise StorageError; callers that need the soft-fail
    contract go through PersistenceAdapter instead.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]: ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None: ...

    @abstractmethod
    async def remove_item(self, key: str) -> None: ...


class NotificationSurface(ABC):
    """Platform-level alert channel (system notification + feedback cue)."""

    @abstractmethod
    async def request_permission(self) -> bool: ...

    @abstractmethod
    async def dispatch(self, title: str, body: str, type: NotificationType) -> None: ...
