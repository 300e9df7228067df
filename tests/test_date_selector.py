"""
Tests for DateSelector navigation and the day window.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from daytasks.domain.common.errors import ValidationError
from daytasks.domain.tasks.selector import DateSelector, window_around

from fakes import FixedClock


def _selector(day=None, now=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)):
    return DateSelector(FixedClock(now), initial=day)


def test_starts_at_today():
    sel = _selector()
    assert sel.selected_date == "2024-01-15"
    assert sel.is_today()


def test_today_follows_clock_timezone():
    """23:30 UTC on the 15th is already the 16th at UTC+2."""
    now = datetime(2024, 1, 15, 23, 30, tzinfo=timezone.utc).astimezone(timezone(timedelta(hours=2)))
    assert _selector(now=now).selected_date == "2024-01-16"


def test_next_rolls_over_month():
    sel = _selector("2024-01-31")
    assert sel.next() == "2024-02-01"


def test_previous_rolls_back_into_leap_day():
    sel = _selector("2024-03-01")
    assert sel.previous() == "2024-02-29"


def test_previous_non_leap_year():
    sel = _selector("2023-03-01")
    assert sel.previous() == "2023-02-28"


def test_year_boundaries():
    sel = _selector("2024-12-31")
    assert sel.next() == "2025-01-01"
    assert sel.previous() == "2024-12-31"
    sel.select("2024-01-01")
    assert sel.previous() == "2023-12-31"


def test_jump_to_today_resets():
    sel = _selector("2020-06-01")
    assert not sel.is_today()
    assert sel.jump_to_today() == "2024-01-15"
    assert sel.selected_date == "2024-01-15"


def test_select_rejects_garbage():
    sel = _selector()
    with pytest.raises(ValidationError):
        sel.select("15.01.2024")
    assert sel.selected_date == "2024-01-15"


def test_window_around_shape():
    days = window_around("2024-01-31", 2, 3, today="2024-02-01")
    assert [d.date for d in days] == [
        "2024-01-29", "2024-01-30", "2024-01-31", "2024-02-01", "2024-02-02", "2024-02-03",
    ]
    assert [d.day for d in days] == [29, 30, 31, 1, 2, 3]
    assert [d.label for d in days] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert [d.is_today for d in days] == [False, False, False, True, False, False]
    assert [d.is_selected for d in days] == [False, False, True, False, False, False]


def test_window_around_zero_width():
    [only] = window_around("2024-02-29", 0, 0, today="2024-01-01")
    assert only.date == "2024-02-29"
    assert only.label == "Thu"
    assert not only.is_today


def test_window_around_rejects_negative_sizes():
    with pytest.raises(ValueError):
        window_around("2024-01-15", -1, 2, today="2024-01-15")


def test_selector_window_tracks_selection():
    sel = _selector()
    first = sel.window(1, 1)
    sel.next()
    second = sel.window(1, 1)
    assert [d.date for d in first] == ["2024-01-14", "2024-01-15", "2024-01-16"]
    assert [d.date for d in second] == ["2024-01-15", "2024-01-16", "2024-01-17"]
    assert second[0].is_today and not second[0].is_selected
    assert second[1].is_selected
