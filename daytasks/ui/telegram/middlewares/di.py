from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from daytasks.config import Settings
from daytasks.domain.notifications.relay import NotificationRelay
from daytasks.domain.tasks.selector import DateSelector
from daytasks.domain.tasks.store import TaskStore
from daytasks.ui.telegram.day_view import DayView


class DIMiddleware(BaseMiddleware):
    """
    Inject dependencies to handlers via `data` dict.

    Handlers can request args by name, e.g.
      async def handler(message: Message, store: TaskStore, selector: DateSelector, relay: NotificationRelay, view: DayView): ...
    """

    def __init__(
        self,
        store: TaskStore,
        selector: DateSelector,
        relay: NotificationRelay,
        settings: Settings,
        view: DayView,
    ) -> None:
        self._store = store
        self._selector = selector
        self._relay = relay
        self._settings = settings
        self._view = view

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        # keep names stable across the project
        data["store"] = self._store
        data["selector"] = self._selector
        data["relay"] = self._relay
        data["settings"] = self._settings
        data["view"] = self._view

        return await handler(event, data)
