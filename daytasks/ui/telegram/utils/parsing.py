"""
Parsing helpers for bot input.
"""
from __future__ import annotations

import re
from typing import Optional

from daytasks.domain.tasks.models import TaskDraft, normalize_category

_TRAILING_TAG = re.compile(r"(?:^|\s)#(\w+)\s*$")


def command_args(text: Optional[str]) -> str:
    text = (text or "").strip()
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def parse_task_input(text: str) -> TaskDraft:
    """
    "<title> [@ <time>] [#<category>]" -> TaskDraft.

    Title is not validated here; TaskStore.add ignores empty titles.
    """
    text = (text or "").strip()

    # only a known category counts as a tag; "#42" stays in the title
    category = None
    m = _TRAILING_TAG.search(text)
    if m and normalize_category(m.group(1)) is not None:
        category = normalize_category(m.group(1))
        text = text[: m.start()].rstrip()

    time_label = None
    idx = text.rfind("@")
    if idx >= 0 and (idx == 0 or text[idx - 1].isspace()):
        time_label = text[idx + 1:].strip() or None
        text = text[:idx].strip()

    return TaskDraft(title=text, time=time_label, category=category)


def parse_callback_data(data: Optional[str], expected_parts: int = 3) -> Optional[tuple[str, ...]]:
    """Split "prefix:action:arg" style callback data. Returns None if too short."""
    parts = (data or "").split(":", expected_parts - 1)
    return tuple(parts) if len(parts) >= expected_parts else None


def parse_int_safe(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """Safely parse integer, returns default on error."""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default
