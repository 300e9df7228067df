"""
Tests for NotificationRelay: single current event, dwell expiry, permission caching,
and system-alert failures staying contained.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from daytasks.domain.notifications.models import NotificationEvent, notification_emoji, notification_title
from daytasks.domain.notifications.relay import NotificationRelay, PermissionCache
from daytasks.domain.persistence import PersistenceAdapter
from daytasks.domain.tasks.selector import DateSelector
from daytasks.domain.tasks.store import TaskStore
from daytasks.infra.notify.telegram_surface import NullNotificationSurface
from daytasks.infra.storage.memory_kv import MemoryKeyValueStore

from fakes import BrokenSurface, FakeMonotonic, FixedClock, RecordingSurface, SequenceIdGenerator


def test_new_event_overwrites_current():
    relay = NotificationRelay(None, PermissionCache())
    relay.notify("first", "success")
    relay.notify("second", "error")
    assert relay.current == NotificationEvent("second", "error")


def test_active_expires_after_dwell():
    tick = FakeMonotonic()
    relay = NotificationRelay(None, PermissionCache(), dwell_seconds=3, monotonic=tick)
    relay.notify("saved", "success")

    tick.t += 2.9
    assert relay.active() == NotificationEvent("saved", "success")

    tick.t += 1
    assert relay.active() is None
    assert relay.current is None


def test_overwrite_restarts_dwell():
    tick = FakeMonotonic()
    relay = NotificationRelay(None, PermissionCache(), dwell_seconds=3, monotonic=tick)
    relay.notify("old", "info")
    tick.t += 2
    relay.notify("new", "warning")
    tick.t += 2
    assert relay.active().message == "new"


def test_clear_drops_current():
    relay = NotificationRelay(None, PermissionCache())
    relay.notify("bye", "info")
    relay.clear()
    assert relay.active() is None


def test_forwards_to_surface_with_type_title():

    async def run():
        surface = RecordingSurface()
        relay = NotificationRelay(surface, PermissionCache())
        relay.notify('Task "Buy milk" deleted successfully', "error")
        await relay.drain()
        return surface

    surface = asyncio.run(run())
    assert len(surface.sent) == 1
    sent = surface.sent[0]
    assert sent.title == "Task Deleted"
    assert sent.body == 'Task "Buy milk" deleted successfully'
    assert sent.type == "error"


def test_permission_asked_once_and_cached():

    async def run():
        surface = RecordingSurface()
        cache = PermissionCache()
        relay = NotificationRelay(surface, cache)
        for i in range(5):
            relay.notify(f"n{i}", "success")
        await relay.drain()
        assert surface.permission_requests == 1
        assert cache.get() is True
        assert len(surface.sent) == 5

        cache.reset()
        assert cache.get() is None
        relay.notify("after reset", "info")
        await relay.drain()
        assert surface.permission_requests == 2

    asyncio.run(run())


def test_denied_permission_skips_dispatch_but_keeps_banner():

    async def run():
        surface = RecordingSurface(granted=False)
        relay = NotificationRelay(surface, PermissionCache())
        relay.notify("added", "success")
        await relay.drain()
        assert surface.sent == []
        assert relay.active() == NotificationEvent("added", "success")

    asyncio.run(run())


def test_surface_failures_are_swallowed():

    async def run():
        surface = BrokenSurface()
        relay = NotificationRelay(surface, PermissionCache())
        relay.notify("boom", "warning")
        await relay.drain()
        assert surface.attempts == 1
        assert relay.current.message == "boom"

        cache = PermissionCache()
        relay2 = NotificationRelay(BrokenSurface(fail_permission=True), cache)
        assert await relay2.ensure_permission() is False
        assert cache.get() is False

    asyncio.run(run())


def test_publish_without_loop_updates_banner_only():
    surface = RecordingSurface()
    relay = NotificationRelay(surface, PermissionCache())
    relay.notify("sync", "info")
    assert relay.current.message == "sync"
    assert surface.permission_requests == 0


def test_null_surface_grants_and_sends_nothing():

    async def run():
        relay = NotificationRelay(NullNotificationSurface(), PermissionCache())
        assert await relay.ensure_permission() is True
        relay.notify("quiet", "success")
        await relay.drain()

    asyncio.run(run())


def test_titles_and_emoji_per_type():
    assert notification_title("success") == "Task Completed"
    assert notification_title("info") == "Task Updated"
    assert notification_title("warning") == "Task Manager"
    assert notification_title("bogus") == "Notification"
    assert notification_emoji("error") == "❌"
    assert notification_emoji("bogus") == "ℹ️"


def test_store_events_reach_relay():
    """Store -> relay wiring through the subscribe contract."""

    async def run():
        clock = FixedClock(datetime(2024, 1, 15, tzinfo=timezone.utc))
        surface = RecordingSurface()
        relay = NotificationRelay(surface, PermissionCache())
        store = TaskStore(
            PersistenceAdapter(MemoryKeyValueStore()), clock, SequenceIdGenerator(), DateSelector(clock),
            seed_on_empty=False,
        )
        store.subscribe(relay)

        task = store.add("Buy milk")
        store.toggle(task.id)
        await store.flush()
        await relay.drain()
        assert relay.current == NotificationEvent('Task "Buy milk" completed!', "success")
        assert [s.title for s in surface.sent] == ["Task Completed", "Task Completed"]

    asyncio.run(run())
