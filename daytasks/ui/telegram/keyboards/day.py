from __future__ import annotations

from typing import Sequence

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from daytasks.constants import DAY_PAGE_SIZE
from daytasks.domain.tasks.models import Task
from daytasks.domain.tasks.selector import DayDescriptor
from daytasks.ui.telegram.render import paginate

STRIP_ROW = 6
TITLE_MAX = 28


def _short(title: str) -> str:
    return title if len(title) <= TITLE_MAX else title[: TITLE_MAX - 1] + "…"


def day_view_kb(
    tasks: Sequence[Task],
    window: Sequence[DayDescriptor],
    *,
    page: int = 0,
    page_size: int = DAY_PAGE_SIZE,
) -> InlineKeyboardMarkup:
    """
    Rows:
    - one per task on the current page: [toggle] [delete]
    - pager (only with more than one page): [◀ page] [n/N] [page ▶]
    - the day strip, STRIP_ROW days per row
    - prev / today / next
    """
    kb = InlineKeyboardBuilder()
    sizes: list[int] = []

    items, page, pages = paginate(tasks, page, page_size)
    for t in items:
        box = "✅" if t.completed else "⬜"
        kb.button(text=f"{box} {_short(t.title)}", callback_data=f"tk:toggle:{t.id}")
        kb.button(text="🗑️", callback_data=f"tk:del:{t.id}")
        sizes.append(2)

    if pages > 1:
        n = 1
        if page > 0:
            kb.button(text="⬅️", callback_data=f"day:page:{page - 1}")
            n += 1
        kb.button(text=f"{page + 1}/{pages}", callback_data=f"day:page:{page}")
        if page < pages - 1:
            kb.button(text="➡️", callback_data=f"day:page:{page + 1}")
            n += 1
        sizes.append(n)

    for d in window:
        text = f"{d.label[:2]} {d.day}"
        if d.is_selected:
            text = f"[{text}]"
        elif d.is_today:
            text = f"•{text}"
        kb.button(text=text, callback_data=f"day:pick:{d.date}")
    n = len(window)
    while n > 0:
        sizes.append(min(STRIP_ROW, n))
        n -= STRIP_ROW

    kb.button(text="◀️", callback_data="day:prev")
    kb.button(text="Today", callback_data="day:today")
    kb.button(text="▶️", callback_data="day:next")
    sizes.append(3)

    kb.adjust(*sizes)
    return kb.as_markup()
