from __future__ import annotations

import html
from typing import Optional, Sequence

from daytasks.constants import DAY_PAGE_SIZE, MESSAGE_TEXT_LIMIT
from daytasks.domain.common.time import parse_day
from daytasks.domain.notifications.models import NotificationEvent, notification_emoji
from daytasks.domain.tasks.models import CATEGORIES, Task

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_WEEKDAYS_LONG = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

LINE_TITLE_MAX = 120
LINE_TIME_MAX = 40
BANNER_MAX = 300


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def page_count(total: int, page_size: int = DAY_PAGE_SIZE) -> int:
    return max(1, -(-total // page_size))


def paginate(tasks: Sequence[Task], page: int, page_size: int = DAY_PAGE_SIZE) -> tuple[list[Task], int, int]:
    """One page of tasks as (items, page, pages); page is clamped into range."""
    pages = page_count(len(tasks), page_size)
    page = min(max(page, 0), pages - 1)
    start = page * page_size
    return list(tasks[start:start + page_size]), page, pages


def render_day_header(day: str, today: str) -> str:
    d = parse_day(day)
    heading = "Today" if day == today else _WEEKDAYS_LONG[d.weekday()]
    return f"<b>{heading}</b> · {d.day} {_MONTHS[d.month - 1]} {d.year}"


def render_task_line(task: Task) -> str:
    box = "✅" if task.completed else "⬜"
    title = html.escape(_clip(task.title, LINE_TITLE_MAX))
    if task.completed:
        title = f"<s>{title}</s>"
    line = f"{box} {title}"
    if task.time:
        line += f" · <i>{html.escape(_clip(task.time, LINE_TIME_MAX))}</i>"
    cat = CATEGORIES.get(task.category or "")
    if cat:
        line += f" {cat.emoji}"
    return line


def render_day_view(
    day: str,
    *,
    today: str,
    tasks: Sequence[Task],
    banner: Optional[NotificationEvent] = None,
    page: int = 0,
    page_size: int = DAY_PAGE_SIZE,
) -> str:
    """
    HTML text for one day: optional banner, header, progress and task lines.

    Progress counts the whole day; only the requested page of tasks is listed.
    The result never exceeds MESSAGE_TEXT_LIMIT: trailing lines are replaced
    by "…" if escaping blows the budget.
    """
    lines: list[str] = []
    if banner is not None:
        lines.append(f"{notification_emoji(banner.type)} {html.escape(_clip(banner.message, BANNER_MAX))}")
        lines.append("")

    lines.append(render_day_header(day, today))

    if not tasks:
        lines.append("No tasks for this day.")
        return "\n".join(lines)

    items, page, pages = paginate(tasks, page, page_size)
    done = sum(1 for t in tasks if t.completed)
    progress = f"{done}/{len(tasks)} done"
    if pages > 1:
        progress += f" · page {page + 1}/{pages}"
    lines.append(progress)
    lines.append("")

    shown = [render_task_line(t) for t in items]
    text = "\n".join(lines + shown)
    while len(text) > MESSAGE_TEXT_LIMIT and shown:
        shown.pop()
        text = "\n".join(lines + shown + ["…"])
    return text
