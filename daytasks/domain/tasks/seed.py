from __future__ import annotations

from daytasks.domain.tasks.models import Task


def seed_tasks(day: str) -> list[Task]:
    """Sample tasks shown on first run, all on `day`."""
    return [
        Task(id="1", title="Buy a pack of coffee", time="10:30 - 11:00", completed=True, category="personal", date=day),
        Task(id="2", title="Add new partners", time="11:30 - 13:00", category="work", date=day),
        Task(id="3", title="Add new partners", time="13:00 - 14:00", category="work", date=day),
        Task(id="4", title="Meeting on work", time="14:00", category="work", date=day),
        Task(id="5", title="Team Football", time="20:00", category="sport", date=day),
        Task(id="6", title="New project", time="21:00", category="work", date=day),
    ]
