from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from daytasks.config import Settings
from daytasks.domain.notifications.relay import NotificationRelay
from daytasks.domain.tasks.selector import DateSelector
from daytasks.domain.tasks.store import TaskStore
from daytasks.ui.telegram.day_view import DayView
from daytasks.ui.telegram.handlers._common import send_day_view
from daytasks.ui.telegram.utils.parsing import command_args, parse_callback_data, parse_task_input

logger = logging.getLogger(__name__)

router = Router()

ADD_USAGE = "Usage: /add <title> [@ <time>] [#category]"


@router.message(Command("add"))
async def add_cmd(message: Message, store: TaskStore, selector: DateSelector, relay: NotificationRelay, settings: Settings, view: DayView):
    draft = parse_task_input(command_args(message.text))
    task = store.add(draft)
    if task is None:
        # empty title: nothing created, nothing to report but usage
        await message.answer(ADD_USAGE)
        return

    logger.info("Task added id=%s date=%s", task.id, task.date)
    # new tasks are appended, so the last page shows them
    view.show_last_page(len(store.filter_by_date(task.date)))
    await send_day_view(
        target_message=message, store=store, selector=selector, relay=relay, settings=settings, view=view, prefer_edit=False
    )


@router.callback_query(F.data.startswith("tk:"))
async def task_cb(cb: CallbackQuery, store: TaskStore, selector: DateSelector, relay: NotificationRelay, settings: Settings, view: DayView):
    parts = parse_callback_data(cb.data)
    if not parts:
        await cb.answer()
        return
    _, action, task_id = parts

    if action == "toggle":
        changed = store.toggle(task_id)
    elif action == "del":
        changed = store.delete(task_id)
    else:
        await cb.answer()
        return

    if changed is None:
        # stale button (task already gone); just refresh the view
        await cb.answer("Task not found.")
    else:
        event = relay.active()
        # callback answers are capped at 200 chars
        await cb.answer(event.message[:200] if event else None)

    if cb.message:
        await send_day_view(
            target_message=cb.message, store=store, selector=selector, relay=relay, settings=settings, view=view, prefer_edit=True
        )
