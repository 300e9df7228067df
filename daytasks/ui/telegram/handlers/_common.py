from __future__ import annotations

import logging
from typing import Optional

from aiogram.exceptions import TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup, Message

from daytasks.config import Settings
from daytasks.domain.notifications.relay import NotificationRelay
from daytasks.domain.tasks.selector import DateSelector
from daytasks.domain.tasks.store import TaskStore
from daytasks.ui.telegram.day_view import DayView
from daytasks.ui.telegram.keyboards.day import day_view_kb
from daytasks.ui.telegram.render import render_day_view

logger = logging.getLogger(__name__)


def _render(
    store: TaskStore,
    selector: DateSelector,
    relay: NotificationRelay,
    settings: Settings,
    view: DayView,
) -> tuple[str, InlineKeyboardMarkup, bool]:
    day = selector.selected_date
    tasks = store.filter_by_date(day)
    page = view.clamp(len(tasks))
    banner = relay.active()
    text = render_day_view(
        day, today=selector.today(), tasks=tasks, banner=banner, page=page, page_size=view.page_size
    )
    markup = day_view_kb(
        tasks,
        selector.window(settings.window_before, settings.window_after),
        page=page,
        page_size=view.page_size,
    )
    return text, markup, banner is not None


async def send_day_view(
    *,
    target_message: Message,
    store: TaskStore,
    selector: DateSelector,
    relay: NotificationRelay,
    settings: Settings,
    view: DayView,
    prefer_edit: bool,
) -> None:
    """
    prefer_edit=True: edit target_message in place (callback UX).
    prefer_edit=False: send a new day view (command UX).

    A view rendered with a banner gets re-edited once the dwell time is over.
    """
    text, markup, has_banner = _render(store, selector, relay, settings, view)

    shown: Optional[Message] = None
    if prefer_edit:
        try:
            await target_message.edit_text(text, reply_markup=markup)
            shown = target_message
        except TelegramBadRequest as e:
            # "message is not modified" or message too old: send a fresh one
            if "not modified" in str(e).lower():
                return
            logger.debug("Edit failed, sending new day view: %s", e)
    if shown is None:
        shown = await target_message.answer(text, reply_markup=markup)

    if has_banner and shown is not None:
        async def _refresh() -> None:
            await refresh_day_view(shown, store=store, selector=selector, relay=relay, settings=settings, view=view)

        view.schedule_clear(relay.dwell_seconds, _refresh)


async def refresh_day_view(
    message: Message,
    *,
    store: TaskStore,
    selector: DateSelector,
    relay: NotificationRelay,
    settings: Settings,
    view: DayView,
) -> None:
    """Re-edit an existing day view in place; never sends a new message."""
    text, markup, _ = _render(store, selector, relay, settings, view)
    try:
        await message.edit_text(text, reply_markup=markup)
    except TelegramBadRequest as e:
        logger.debug("Day view refresh skipped: %s", e)
