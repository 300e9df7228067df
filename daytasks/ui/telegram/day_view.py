from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from daytasks.constants import DAY_PAGE_SIZE
from daytasks.ui.telegram.render import page_count

logger = logging.getLogger(__name__)


class DayView:
    """
    Day screen state that outlives a single update.

    - page: which slice of the selected day's tasks is listed; day changes reset it
    - banner clears: once a banner has been shown, the message is re-edited after
      the dwell time so the expired banner disappears without user input
    """

    def __init__(self, page_size: int = DAY_PAGE_SIZE) -> None:
        self.page_size = page_size
        self.page = 0
        self._clears: set[asyncio.Task] = set()

    def reset_page(self) -> None:
        self.page = 0

    def set_page(self, page: int) -> None:
        self.page = max(0, page)

    def show_last_page(self, total: int) -> None:
        self.page = page_count(total, self.page_size) - 1

    def clamp(self, total: int) -> int:
        self.page = min(self.page, page_count(total, self.page_size) - 1)
        return self.page

    def schedule_clear(self, delay: float, refresh: Callable[[], Awaitable[None]]) -> None:
        task = asyncio.ensure_future(self._clear_after(delay, refresh))
        self._clears.add(task)
        task.add_done_callback(self._clears.discard)

    def has_pending_clears(self) -> bool:
        return any(not t.done() for t in self._clears)

    async def _clear_after(self, delay: float, refresh: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(delay)
        try:
            await refresh()
        except Exception:
            logger.warning("Banner clear failed", exc_info=True)

    async def drain(self) -> None:
        """Wait for scheduled banner clears (tests, shutdown)."""
        pending = [t for t in self._clears if not t.done()]
        while pending:
            await asyncio.gather(*pending, return_exceptions=True)
            pending = [t for t in self._clears if not t.done()]
