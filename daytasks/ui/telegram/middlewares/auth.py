from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message

logger = logging.getLogger(__name__)


class OwnerOnlyMiddleware(BaseMiddleware):
    """The task list is personal: drop updates from anyone but the owner."""

    def __init__(self, owner_id: int):
        self._owner_id = owner_id

    async def __call__(self, handler: Callable, event, data: Dict[str, Any]):
        user_id = None
        if isinstance(event, (Message, CallbackQuery)) and event.from_user:
            user_id = event.from_user.id

        if user_id != self._owner_id:
            logger.warning("Blocked update from user_id=%s (owner_id=%s)", user_id, self._owner_id)
            if isinstance(event, CallbackQuery):
                await event.answer("Not authorized.", show_alert=True)
            elif isinstance(event, Message):
                await event.answer("Not authorized.")
            return

        return await handler(event, data)
