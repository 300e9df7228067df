from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from daytasks.domain.common.errors import ValidationError


@dataclass(frozen=True)
class Category:
    category_id: str
    name: str
    emoji: str


CATEGORIES: Dict[str, Category] = {
    c.category_id: c
    for c in (
        Category("personal", "Personal", "👤"),
        Category("idea", "Idea", "💡"),
        Category("food", "Food", "🍽️"),
        Category("work", "Work", "💼"),
        Category("sport", "Sport", "🏃"),
        Category("music", "Music", "🎵"),
        Category("others", "Others", "🧩"),
    )
}


def normalize_category(raw: Optional[str]) -> Optional[str]:
    """Lower-cased known category id, or None for empty/unknown input."""
    if not raw:
        return None
    key = raw.strip().lstrip("#").lower()
    return key if key in CATEGORIES else None


@dataclass(frozen=True)
class TaskDraft:
    title: str
    time: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    time: Optional[str] = None
    completed: bool = False
    category: Optional[str] = None
    created_at: Optional[int] = None  # epoch millis
    date: Optional[str] = None  # YYYY-MM-DD

    def to_dict(self) -> Dict[str, Any]:
        """Storage/wire form. Absent optional fields are omitted."""
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
        }
        if self.time is not None:
            data["time"] = self.time
        if self.category is not None:
            data["category"] = self.category
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        if self.date is not None:
            data["date"] = self.date
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        if not isinstance(data, dict):
            raise ValidationError("task record must be an object")

        task_id = data.get("id")
        title = data.get("title")
        if not isinstance(task_id, str) or not task_id:
            raise ValidationError("task record has no string id")
        if not isinstance(title, str):
            raise ValidationError(f"task {task_id} has no string title")

        created_at = data.get("createdAt")
        if isinstance(created_at, bool) or not isinstance(created_at, (int, float)):
            created_at = None

        return cls(
            id=task_id,
            title=title,
            time=_opt_str(data.get("time")),
            completed=data.get("completed") is True,
            category=_opt_str(data.get("category")),
            created_at=int(created_at) if created_at is not None else None,
            date=_opt_str(data.get("date")),
        )


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
