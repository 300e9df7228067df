from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from daytasks.config import Settings
from daytasks.domain.common.time import is_valid_day
from daytasks.domain.notifications.relay import NotificationRelay
from daytasks.domain.tasks.selector import DateSelector
from daytasks.domain.tasks.store import TaskStore
from daytasks.ui.telegram.day_view import DayView
from daytasks.ui.telegram.handlers._common import send_day_view
from daytasks.ui.telegram.utils.parsing import command_args, parse_callback_data, parse_int_safe

router = Router()


@router.message(CommandStart())
@router.message(Command("today"))
async def today_cmd(message: Message, store: TaskStore, selector: DateSelector, relay: NotificationRelay, settings: Settings, view: DayView):
    selector.jump_to_today()
    view.reset_page()
    await send_day_view(
        target_message=message, store=store, selector=selector, relay=relay, settings=settings, view=view, prefer_edit=False
    )


@router.message(Command("next"))
async def next_cmd(message: Message, store: TaskStore, selector: DateSelector, relay: NotificationRelay, settings: Settings, view: DayView):
    selector.next()
    view.reset_page()
    await send_day_view(
        target_message=message, store=store, selector=selector, relay=relay, settings=settings, view=view, prefer_edit=False
    )


@router.message(Command("prev"))
async def prev_cmd(message: Message, store: TaskStore, selector: DateSelector, relay: NotificationRelay, settings: Settings, view: DayView):
    selector.previous()
    view.reset_page()
    await send_day_view(
        target_message=message, store=store, selector=selector, relay=relay, settings=settings, view=view, prefer_edit=False
    )


@router.message(Command("day"))
async def day_cmd(message: Message, store: TaskStore, selector: DateSelector, relay: NotificationRelay, settings: Settings, view: DayView):
    arg = command_args(message.text)
    if not is_valid_day(arg):
        await message.answer("Usage: /day YYYY-MM-DD")
        return
    selector.select(arg)
    view.reset_page()
    await send_day_view(
        target_message=message, store=store, selector=selector, relay=relay, settings=settings, view=view, prefer_edit=False
    )


@router.callback_query(F.data.startswith("day:"))
async def day_cb(cb: CallbackQuery, store: TaskStore, selector: DateSelector, relay: NotificationRelay, settings: Settings, view: DayView):
    parts = parse_callback_data(cb.data, expected_parts=2)
    action = parts[1] if parts else ""
    if action == "prev":
        selector.previous()
        view.reset_page()
    elif action == "next":
        selector.next()
        view.reset_page()
    elif action == "today":
        selector.jump_to_today()
        view.reset_page()
    else:
        picked = parse_callback_data(cb.data)
        if picked and picked[1] == "page":
            page = parse_int_safe(picked[2])
            if page is None:
                await cb.answer("Unknown page.")
                return
            # same day; send_day_view clamps past-the-end pages
            view.set_page(page)
        elif picked and picked[1] == "pick" and is_valid_day(picked[2]):
            selector.select(picked[2])
            view.reset_page()
        else:
            await cb.answer("Unknown day.")
            return

    await cb.answer()
    if cb.message:
        await send_day_view(
            target_message=cb.message, store=store, selector=selector, relay=relay, settings=settings, view=view, prefer_edit=True
        )
