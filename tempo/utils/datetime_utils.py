"""
Date/time helpers for calendar placement.

All scheduling arithmetic happens on naive wall-clock datetimes: a "day" is
a calendar date, and the weekday and working hours are read from the local
fields of an instant, never from a rolling 24-hour window.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo


END_OF_DAY = "24:00"


def parse_time_to_minutes(value: str, allow_end_of_day: bool = False) -> Optional[int]:
    """
    Parse an "HH:MM" string into minutes since midnight.

    With ``allow_end_of_day``, "24:00" is accepted as midnight at the end of
    the day (1440). Returns None when the string is not a valid time of day.
    """
    if allow_end_of_day and value == END_OF_DAY:
        return 24 * 60
    parts = value.split(":")
    if len(parts) != 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    if hours < 0 or hours > 23 or minutes < 0 or minutes > 59:
        return None
    return hours * 60 + minutes


def weekday_index(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def at_time_of_day(day: date, hm: str) -> datetime:
    """
    Apply an "HH:MM" time of day to a calendar date.

    "24:00" maps to midnight at the start of the following day.

    Raises:
        ValueError: If ``hm`` is not a valid time of day
    """
    minutes = parse_time_to_minutes(hm, allow_end_of_day=True)
    if minutes is None:
        raise ValueError(f"Invalid time of day: {hm!r}")
    return datetime.combine(day, time.min) + timedelta(minutes=minutes)


def overlaps(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """
    Half-open interval overlap test.

    Intervals that only touch at an endpoint do not overlap.
    """
    return a_start < b_end and b_start < a_end


def to_wall_clock(value: datetime, timezone: Optional[str] = None) -> datetime:
    """
    Reduce an instant to naive local wall-clock time.

    Args:
        value: Naive or timezone-aware datetime
        timezone: IANA timezone name. When given, aware instants are converted
            into that zone first and naive ones are taken as already local.
            When omitted, the instant's own wall-clock fields are kept.

    Returns:
        datetime: Naive datetime
    """
    if timezone and value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(timezone))
    return value.replace(tzinfo=None)


def from_wall_clock(value: datetime, timezone: Optional[str] = None) -> datetime:
    """Attach ``timezone`` to a naive wall-clock datetime (no-op without one)."""
    if not timezone:
        return value
    return value.replace(tzinfo=ZoneInfo(timezone))


def is_before(
    a: datetime,
    b: datetime,
    timezone: Optional[str] = None,
) -> bool:
    """
    Whether instant ``a`` comes strictly before instant ``b``.

    Two aware or two naive values compare as instants. A naive value mixed
    with an aware one is compared on wall-clock time instead.
    """
    if (a.tzinfo is None) == (b.tzinfo is None):
        return a < b
    return to_wall_clock(a, timezone) < to_wall_clock(b, timezone)
