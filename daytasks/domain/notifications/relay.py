from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from daytasks.constants import DEFAULT_NOTIFICATION_DWELL
from daytasks.domain.notifications.models import (
    NotificationEvent,
    NotificationType,
    notification_title,
)
from daytasks.domain.ports import NotificationSurface

logger = logging.getLogger(__name__)


class PermissionCache:
    """Process-lifetime cache of the notification permission answer."""

    def __init__(self) -> None:
        self._granted: Optional[bool] = None

    def get(self) -> Optional[bool]:
        return self._granted

    def set(self, granted: bool) -> None:
        self._granted = bool(granted)

    def reset(self) -> None:
        self._granted = None


class NotificationRelay:
    """
    Turns store events into user-visible feedback.

    - keeps exactly one "current" event (a new one overwrites, no queue)
    - the UI reads it through active(), which honours the dwell time
    - optionally forwards to a platform surface in the background; surface
      failures are logged and never reach the caller
    """

    def __init__(
        self,
        surface: Optional[NotificationSurface],
        permissions: PermissionCache,
        *,
        dwell_seconds: float = DEFAULT_NOTIFICATION_DWELL,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._surface = surface
        self._permissions = permissions
        self._dwell = dwell_seconds
        self._monotonic = monotonic

        self._current: Optional[NotificationEvent] = None
        self._published_at = 0.0
        self._inflight: set[asyncio.Task] = set()
        self._permission_lock: Optional[asyncio.Lock] = None

    @property
    def current(self) -> Optional[NotificationEvent]:
        return self._current

    @property
    def dwell_seconds(self) -> float:
        return self._dwell

    def __call__(self, event: NotificationEvent) -> None:
        self.publish(event)

    def notify(self, message: str, type: NotificationType = "info") -> None:
        self.publish(NotificationEvent(message=message, type=type))

    def publish(self, event: NotificationEvent) -> None:
        self._current = event
        self._published_at = self._monotonic()
        logger.debug("Notification %s: %s", event.type, event.message)

        if self._surface is None:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, system alert skipped for %r", event)
            return
        task = asyncio.ensure_future(self._forward(event))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    def active(self) -> Optional[NotificationEvent]:
        """Current event while inside the dwell window; clears it once expired."""
        if self._current is None:
            return None
        if self._monotonic() - self._published_at >= self._dwell:
            self._current = None
        return self._current

    def clear(self) -> None:
        self._current = None

    async def ensure_permission(self) -> bool:
        """Ask the surface once; the answer is cached until PermissionCache.reset()."""
        cached = self._permissions.get()
        if cached is not None:
            return cached
        if self._surface is None:
            return False

        if self._permission_lock is None:
            self._permission_lock = asyncio.Lock()
        async with self._permission_lock:
            cached = self._permissions.get()
            if cached is not None:
                return cached
            try:
                granted = bool(await self._surface.request_permission())
            except Exception:
                logger.warning("Notification permission request failed", exc_info=True)
                granted = False
            self._permissions.set(granted)
            logger.info("Notification permission granted=%s", granted)
            return granted

    async def _forward(self, event: NotificationEvent) -> None:
        if not await self.ensure_permission():
            return
        try:
            await self._surface.dispatch(notification_title(event.type), event.message, event.type)
        except Exception:
            logger.warning("System notification dispatch failed for %r", event, exc_info=True)

    async def drain(self) -> None:
        """Wait for in-flight system alerts (tests, shutdown)."""
        pending = [t for t in self._inflight if not t.done()]
        while pending:
            await asyncio.gather(*pending, return_exceptions=True)
            pending = [t for t in self._inflight if not t.done()]
