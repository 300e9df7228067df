from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Callable, Optional, Union

from daytasks.constants import (
    MSG_TASK_ADDED,
    MSG_TASK_COMPLETED,
    MSG_TASK_DELETED,
    MSG_TASK_REOPENED,
    TASKS_STORAGE_KEY,
)
from daytasks.domain.common.errors import ValidationError
from daytasks.domain.common.time import to_epoch_millis
from daytasks.domain.notifications.models import NotificationEvent, NotificationType
from daytasks.domain.persistence import PersistenceAdapter
from daytasks.domain.ports import Clock, IdGenerator
from daytasks.domain.tasks.codec import decode_tasks, encode_tasks
from daytasks.domain.tasks.models import Task, TaskDraft, normalize_category
from daytasks.domain.tasks.seed import seed_tasks
from daytasks.domain.tasks.selector import DateSelector

logger = logging.getLogger(__name__)

Listener = Callable[[NotificationEvent], None]


class TaskStore:
    """
    In-memory task collection; the single source of truth for the session.

    Mutations (add/toggle/delete) apply synchronously, then:
    - the whole collection is encoded and handed to a background flusher
      (write-through, last write wins)
    - a NotificationEvent is emitted to subscribers

    New tasks are appended, so the collection keeps creation order.
    No aiogram. No sqlite.
    """

    def __init__(
        self,
        storage: PersistenceAdapter,
        clock: Clock,
        ids: IdGenerator,
        selector: DateSelector,
        *,
        storage_key: str = TASKS_STORAGE_KEY,
        seed_on_empty: bool = True,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._ids = ids
        self._selector = selector
        self._key = storage_key
        self._seed_on_empty = seed_on_empty

        self._tasks: list[Task] = []
        self._issued_ids: set[str] = set()
        self._listeners: list[Listener] = []
        self._loaded = False

        self._pending_payload: Optional[str] = None
        self._flusher: Optional[asyncio.Task] = None

    # ---- reads ----

    @property
    def loaded(self) -> bool:
        return self._loaded

    def all(self) -> list[Task]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def filter_by_date(self, day: str) -> list[Task]:
        return [t for t in self._tasks if t.date == day]

    def visible(self) -> list[Task]:
        """Tasks of the currently selected day."""
        return self.filter_by_date(self._selector.selected_date)

    # ---- events ----

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, message: str, type: NotificationType) -> None:
        event = NotificationEvent(message=message, type=type)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.warning("Notification listener failed for %r", event, exc_info=True)

    # ---- load ----

    async def load(self) -> int:
        """
        Load the collection once. Missing, unparseable or non-array data
        falls back to the seed set (or empty when seeding is off).
        """
        if self._loaded:
            return len(self._tasks)

        raw = await self._storage.get(self._key)
        tasks: Optional[list[Task]] = None
        if raw is not None and raw.strip():
            try:
                tasks = decode_tasks(raw)
            except ValidationError as e:
                logger.warning("Ignoring stored tasks under key=%s: %s", self._key, e)

        if tasks is None:
            tasks = seed_tasks(self._selector.today()) if self._seed_on_empty else []
            logger.info("No stored tasks, starting with %d seed task(s)", len(tasks))

        self._tasks = []
        self._issued_ids = set()
        for t in tasks:
            if t.id in self._issued_ids:
                logger.warning("Dropping task with duplicate id=%s", t.id)
                continue
            self._issued_ids.add(t.id)
            self._tasks.append(t)

        self._loaded = True
        logger.info("TaskStore loaded key=%s total=%d", self._key, len(self._tasks))
        return len(self._tasks)

    # ---- mutations ----

    def add(
        self,
        draft: Union[TaskDraft, str],
        time: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Optional[Task]:
        """Append a task on the selected day. Empty titles are ignored (returns None)."""
        if isinstance(draft, str):
            draft = TaskDraft(title=draft, time=time, category=category)

        title = (draft.title or "").strip()
        if not title:
            logger.debug("Rejected task with empty title")
            return None

        time_label = (draft.time or "").strip() or None
        task = Task(
            id=self._new_unique_id(),
            title=title,
            time=time_label,
            completed=False,
            category=normalize_category(draft.category),
            created_at=to_epoch_millis(self._clock.now()),
            date=self._selector.selected_date,
        )
        self._tasks.append(task)
        self._write_through()
        self._emit(MSG_TASK_ADDED.format(title=task.title), "success")
        return task

    def toggle(self, task_id: str) -> Optional[Task]:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                updated = replace(t, completed=not t.completed)
                self._tasks[i] = updated
                self._write_through()
                if updated.completed:
                    self._emit(MSG_TASK_COMPLETED.format(title=updated.title), "success")
                else:
                    self._emit(MSG_TASK_REOPENED.format(title=updated.title), "info")
                return updated
        return None

    def delete(self, task_id: str) -> Optional[Task]:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                del self._tasks[i]
                self._write_through()
                self._emit(MSG_TASK_DELETED.format(title=t.title), "error")
                return t
        return None

    def _new_unique_id(self) -> str:
        # ids are never reused, even after the task is deleted
        task_id = self._ids.new_id()
        while task_id in self._issued_ids:
            task_id = self._ids.new_id()
        self._issued_ids.add(task_id)
        return task_id

    # ---- write-through ----

    def _write_through(self) -> None:
        self._pending_payload = encode_tasks(self._tasks)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # no loop: payload stays pending until flush()
            return
        if self._flusher is None or self._flusher.done():
            self._flusher = asyncio.ensure_future(self._drain_pending())

    async def _drain_pending(self) -> None:
        while self._pending_payload is not None:
            payload, self._pending_payload = self._pending_payload, None
            ok = await self._storage.set(self._key, payload)
            if not ok:
                logger.warning("Task write-through failed; in-memory state stays authoritative")

    @property
    def has_pending_writes(self) -> bool:
        return self._pending_payload is not None or (self._flusher is not None and not self._flusher.done())

    async def flush(self) -> None:
        """Wait until the latest collection state has been handed to storage."""
        while True:
            if self._flusher is not None and not self._flusher.done():
                await self._flusher
            elif self._pending_payload is not None:
                self._flusher = asyncio.ensure_future(self._drain_pending())
            else:
                return
