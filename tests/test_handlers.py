"""
Tests for bot handlers with mocked Telegram objects (no network).
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

from daytasks.config import Settings
from daytasks.domain.notifications.relay import NotificationRelay, PermissionCache
from daytasks.domain.persistence import PersistenceAdapter
from daytasks.domain.tasks.selector import DateSelector
from daytasks.domain.tasks.store import TaskStore
from daytasks.infra.storage.memory_kv import MemoryKeyValueStore
from daytasks.ui.telegram.day_view import DayView
from daytasks.ui.telegram.handlers.days import day_cb, day_cmd
from daytasks.ui.telegram.handlers.tasks import ADD_USAGE, add_cmd, task_cb

from fakes import FakeMonotonic, FixedClock, SequenceIdGenerator


def _deps(relay=None):
    clock = FixedClock(datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc))
    selector = DateSelector(clock)
    store = TaskStore(
        PersistenceAdapter(MemoryKeyValueStore()), clock, SequenceIdGenerator(), selector, seed_on_empty=False
    )
    relay = relay or NotificationRelay(None, PermissionCache())
    store.subscribe(relay)
    settings = Settings(
        bot_token="t", owner_telegram_id=1, timezone="UTC", storage_backend="memory", db_path=None,
        window_before=1, window_after=1,
    )
    return dict(store=store, selector=selector, relay=relay, settings=settings, view=DayView())


def _message(text: str):
    return SimpleNamespace(text=text, answer=AsyncMock(), edit_text=AsyncMock())


def test_add_command_creates_task_and_sends_view():
    deps = _deps()
    msg = _message("/add Buy milk @ 10:00 #food")

    asyncio.run(add_cmd(msg, **deps))

    [task] = deps["store"].all()
    assert (task.title, task.time, task.category, task.date) == ("Buy milk", "10:00", "food", "2024-01-15")
    text = msg.answer.await_args.args[0]
    assert 'Task &quot;Buy milk&quot; added successfully!' in text
    assert "Buy milk" in text


def test_add_command_with_blank_title_only_shows_usage():
    deps = _deps()
    msg = _message("/add   ")
    asyncio.run(add_cmd(msg, **deps))
    assert len(deps["store"]) == 0
    msg.answer.assert_awaited_once_with(ADD_USAGE)


def test_toggle_callback_answers_with_banner_and_edits_view():
    deps = _deps()
    task = deps["store"].add("Stretch")
    msg = _message("")
    cb = SimpleNamespace(data=f"tk:toggle:{task.id}", answer=AsyncMock(), message=msg)

    asyncio.run(task_cb(cb, **deps))

    assert deps["store"].get(task.id).completed is True
    cb.answer.assert_awaited_once_with('Task "Stretch" completed!')
    msg.edit_text.assert_awaited_once()


def test_delete_callback_for_missing_task():
    deps = _deps()
    msg = _message("")
    cb = SimpleNamespace(data="tk:del:ghost", answer=AsyncMock(), message=msg)
    asyncio.run(task_cb(cb, **deps))
    cb.answer.assert_awaited_once_with("Task not found.")


def test_day_navigation_callbacks_and_command():
    deps = _deps()
    selector = deps["selector"]

    async def press(data: str):
        cb = SimpleNamespace(data=data, answer=AsyncMock(), message=_message(""))
        await day_cb(cb, **deps)
        return cb

    asyncio.run(press("day:next"))
    assert selector.selected_date == "2024-01-16"
    asyncio.run(press("day:pick:2024-02-29"))
    assert selector.selected_date == "2024-02-29"
    asyncio.run(press("day:today"))
    assert selector.selected_date == "2024-01-15"
    bad = asyncio.run(press("day:pick:nope"))
    bad.answer.assert_awaited_once_with("Unknown day.")
    bad = asyncio.run(press("day:page:x"))
    bad.answer.assert_awaited_once_with("Unknown page.")
    assert selector.selected_date == "2024-01-15"

    msg = _message("/day 2024-03-01")
    asyncio.run(day_cmd(msg, **deps))
    assert selector.selected_date == "2024-03-01"

    msg = _message("/day tomorrow")
    asyncio.run(day_cmd(msg, **deps))
    msg.answer.assert_awaited_once_with("Usage: /day YYYY-MM-DD")


def test_page_callback_moves_between_pages_and_day_change_resets():
    deps = _deps()
    for i in range(20):
        deps["store"].add(f"Task {i}")
    deps["relay"].clear()
    view = deps["view"]

    async def press(data: str):
        msg = _message("")
        cb = SimpleNamespace(data=data, answer=AsyncMock(), message=msg)
        await day_cb(cb, **deps)
        return msg.edit_text.await_args.args[0]

    text = asyncio.run(press("day:page:1"))
    assert view.page == 1
    assert "0/20 done · page 2/2" in text
    assert "Task 19" in text
    assert "Task 14" not in text

    # past the end: clamped to the last page
    asyncio.run(press("day:page:7"))
    assert view.page == 1

    text = asyncio.run(press("day:next"))
    assert view.page == 0
    assert "No tasks for this day." in text


def test_add_command_jumps_to_page_with_new_task():
    deps = _deps()
    for i in range(15):
        deps["store"].add(f"Task {i}")
    msg = _message("/add Sixteenth")

    asyncio.run(add_cmd(msg, **deps))

    assert deps["view"].page == 1
    text = msg.answer.await_args.args[0]
    assert "Sixteenth" in text
    assert "page 2/2" in text


def test_banner_cleared_from_edited_view_after_dwell():
    tick = FakeMonotonic()
    deps = _deps(relay=NotificationRelay(None, PermissionCache(), dwell_seconds=0.01, monotonic=tick))
    task = deps["store"].add("Stretch")
    msg = _message("")
    cb = SimpleNamespace(data=f"tk:toggle:{task.id}", answer=AsyncMock(), message=msg)

    async def scenario():
        await task_cb(cb, **deps)
        assert deps["view"].has_pending_clears()
        tick.t += 1
        await deps["view"].drain()

    asyncio.run(scenario())

    assert msg.edit_text.await_count == 2
    first, second = (c.args[0] for c in msg.edit_text.await_args_list)
    assert "completed!" in first
    assert "completed!" not in second
    assert "Stretch" in second


def test_banner_cleared_from_sent_view_after_dwell():
    tick = FakeMonotonic()
    deps = _deps(relay=NotificationRelay(None, PermissionCache(), dwell_seconds=0.01, monotonic=tick))
    sent = _message("")
    msg = _message("/add Water plants")
    msg.answer.return_value = sent

    async def scenario():
        await add_cmd(msg, **deps)
        tick.t += 1
        await deps["view"].drain()

    asyncio.run(scenario())

    assert "added successfully" in msg.answer.await_args.args[0]
    sent.edit_text.assert_awaited_once()
    cleared = sent.edit_text.await_args.args[0]
    assert "added successfully" not in cleared
    assert "Water plants" in cleared


def test_view_without_banner_schedules_nothing():
    deps = _deps()
    msg = _message("/day 2024-01-20")
    asyncio.run(day_cmd(msg, **deps))
    assert not deps["view"].has_pending_clears()


def test_failed_banner_clear_is_logged(caplog):
    view = DayView()

    async def broken():
        raise RuntimeError("chat gone")

    async def scenario():
        view.schedule_clear(0, broken)
        await view.drain()

    asyncio.run(scenario())
    assert "Banner clear failed" in caplog.text
    assert not view.has_pending_clears()
