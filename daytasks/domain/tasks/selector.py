from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from daytasks.domain.common.time import format_day, parse_day, shift_day
from daytasks.domain.ports import Clock

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class DayDescriptor:
    date: str
    day: int
    label: str
    is_today: bool
    is_selected: bool = False


def window_around(day: str, before: int, after: int, *, today: str, selected: Optional[str] = None) -> list[DayDescriptor]:
    """Days from `before` days prior to `day` through `after` days after it, in order."""
    if before < 0 or after < 0:
        raise ValueError("before/after must be >= 0")

    center = parse_day(day)
    selected = day if selected is None else selected
    out: list[DayDescriptor] = []
    for offset in range(-before, after + 1):
        d = center + timedelta(days=offset)
        iso = format_day(d)
        out.append(
            DayDescriptor(
                date=iso,
                day=d.day,
                label=_WEEKDAYS[d.weekday()],
                is_today=iso == today,
                is_selected=iso == selected,
            )
        )
    return out


class DateSelector:
    """
    Holds the one selected day for the process.

    Starts at today (per the injected clock) and only moves on explicit
    navigation. Nothing here is persisted.
    """

    def __init__(self, clock: Clock, initial: Optional[str] = None) -> None:
        self._clock = clock
        self._selected = format_day(parse_day(initial)) if initial else self.today()

    def today(self) -> str:
        return format_day(self._clock.now().date())

    @property
    def selected_date(self) -> str:
        return self._selected

    def is_today(self) -> bool:
        return self._selected == self.today()

    def select(self, day: str) -> str:
        self._selected = format_day(parse_day(day))
        return self._selected

    def next(self) -> str:
        self._selected = shift_day(self._selected, 1)
        return self._selected

    def previous(self) -> str:
        self._selected = shift_day(self._selected, -1)
        return self._selected

    def jump_to_today(self) -> str:
        self._selected = self.today()
        return self._selected

    def window(self, before: int = 5, after: int = 5) -> list[DayDescriptor]:
        return window_around(self._selected, before, after, today=self.today())
