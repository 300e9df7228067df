from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NotificationType = Literal["success", "error", "info", "warning"]

_TITLES = {
    "success": "Task Completed",
    "error": "Task Deleted",
    "info": "Task Updated",
    "warning": "Task Manager",
}

_EMOJI = {
    "success": "✅",
    "error": "❌",
    "info": "ℹ️",
    "warning": "⚠️",
}


@dataclass(frozen=True)
class NotificationEvent:
    """Transient feedback value; never persisted."""

    message: str
    type: NotificationType


def notification_title(type: str) -> str:
    return _TITLES.get(type, "Notification")


def notification_emoji(type: str) -> str:
    return _EMOJI.get(type, "ℹ️")
