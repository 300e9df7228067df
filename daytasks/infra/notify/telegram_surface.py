from __future__ import annotations

import html
import logging

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError

from daytasks.domain.notifications.models import NotificationType, notification_emoji
from daytasks.domain.ports import NotificationSurface

logger = logging.getLogger(__name__)


class TelegramNotificationSurface(NotificationSurface):
    """
    System-level alerts delivered as Telegram messages to the owner chat.

    Permission = the bot can resolve the owner chat (the owner has started it).
    The feedback cue is the notification sound: `info` goes out silently,
    every other type audibly.
    """

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self._bot = bot
        self._chat_id = chat_id

    async def request_permission(self) -> bool:
        try:
            await self._bot.get_chat(self._chat_id)
        except TelegramAPIError as e:
            logger.warning("Owner chat %s not reachable, system alerts disabled: %s", self._chat_id, e)
            return False
        return True

    async def dispatch(self, title: str, body: str, type: NotificationType) -> None:
        text = f"{notification_emoji(type)} <b>{html.escape(title)}</b>\n{html.escape(body)}"
        await self._bot.send_message(
            chat_id=self._chat_id,
            text=text,
            disable_notification=(type == "info"),
        )


class NullNotificationSurface(NotificationSurface):
    """Used when system alerts are turned off: always granted, never sends."""

    async def request_permission(self) -> bool:
        return True

    async def dispatch(self, title: str, body: str, type: NotificationType) -> None:
        return
