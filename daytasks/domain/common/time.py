from __future__ import annotations

from datetime import date, datetime, timedelta

from daytasks.domain.common.errors import ValidationError

DAY_FORMAT = "%Y-%m-%d"


def parse_day(s: str) -> date:
    try:
        return datetime.strptime(s, DAY_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid day (expected YYYY-MM-DD): {s!r}")


def format_day(d: date) -> str:
    return d.strftime(DAY_FORMAT)


def shift_day(day: str, days: int) -> str:
    # calendar arithmetic on date objects handles month/year/leap rollover
    return format_day(parse_day(day) + timedelta(days=days))


def is_valid_day(s: str) -> bool:
    try:
        parse_day(s)
    except ValidationError:
        return False
    return True


def to_epoch_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)
