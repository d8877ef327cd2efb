"""Calendar helpers shared by the recurrence and streak engine.

Everything works on local calendar days: datetimes are collapsed to their
``date()`` without timezone conversion so "today" matches the wall clock the
user sees.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

DATE_KEY_FORMAT = "%Y-%m-%d"
SUNDAY = 0
SATURDAY = 6


def start_of_day(value: date | datetime) -> date:
    """Return the calendar day of ``value`` (datetimes lose their time part)."""

    if isinstance(value, datetime):
        return value.date()
    return value


def date_key(value: date | datetime) -> str:
    """Canonical ``YYYY-MM-DD`` key used for completion membership tests."""

    return start_of_day(value).strftime(DATE_KEY_FORMAT)


def parse_date_key(key: str) -> date:
    """Parse a canonical date key, raising ``ValueError`` when malformed."""

    if not isinstance(key, str) or len(key) != 10:
        raise ValueError(f"Invalid date key: {key!r} (expected YYYY-MM-DD)")
    try:
        return datetime.strptime(key, DATE_KEY_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date key: {key!r} (expected YYYY-MM-DD)") from exc


def weekday_index(value: date | datetime) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""

    # date.weekday() is Monday=0..Sunday=6
    return (start_of_day(value).weekday() + 1) % 7


def days_back(reference: date | datetime, count: int) -> list[date]:
    """Return ``count`` days ending at ``reference`` (inclusive), newest first."""

    day = start_of_day(reference)
    return [day - timedelta(days=offset) for offset in range(max(count, 0))]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each day from ``start`` to ``end`` inclusive."""

    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""

    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def month_grid(year: int, month: int) -> list[date]:
    """Days shown on a Sunday-first calendar page for the month.

    Starts on the Sunday on or before the 1st and ends on the Saturday on or
    after the last day, so the length is always a multiple of seven.
    """

    first, last = month_bounds(year, month)
    start = first - timedelta(days=weekday_index(first) - SUNDAY)
    end = last + timedelta(days=SATURDAY - weekday_index(last))
    return list(iter_days(start, end))


__all__ = [
    "DATE_KEY_FORMAT",
    "date_key",
    "days_back",
    "iter_days",
    "month_bounds",
    "month_grid",
    "parse_date_key",
    "start_of_day",
    "weekday_index",
]
