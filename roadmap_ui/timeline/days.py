"""Calendar-day primitives shared by the layout engine and its renderers.

Every date in the timeline is a timezone-less ``datetime.date``. Day tokens are
the canonical ``YYYY-MM-DD`` strings records carry; anything else parses to
``None`` and is treated as "drop this record" by callers.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Iterable

from .schema import record_value

_DAY_TOKEN_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


@dataclass(frozen=True)
class DateRange:
    start_date: dt.date
    end_date: dt.date
    total_days: int


def parse_day_token(token: object) -> dt.date | None:
    if not isinstance(token, str):
        return None
    match = _DAY_TOKEN_RE.fullmatch(token)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def format_day_token(day: dt.date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def day_span_inclusive(start: dt.date, end: dt.date) -> int:
    """Inclusive count of days from ``start`` to ``end``; a single day spans 1."""
    return (end - start).days + 1


def add_days(day: dt.date, days: int) -> dt.date:
    return day + dt.timedelta(days=days)


def days_between(origin: dt.date, day: dt.date) -> int:
    return (day - origin).days


def offset_px(day: dt.date, origin: dt.date, px_per_day: float) -> float:
    return days_between(origin, day) * px_per_day


def today_utc() -> dt.date:
    return dt.datetime.now(dt.timezone.utc).date()


def is_weekend_day(day: dt.date) -> bool:
    return day.weekday() >= 5


def is_date_within_range(day: dt.date, start: dt.date, end: dt.date) -> bool:
    return start <= day <= end


def enumerate_days(start: dt.date, count: int) -> tuple[dt.date, ...]:
    return tuple(add_days(start, offset) for offset in range(max(0, count)))


def single_day_range(day: dt.date | None = None) -> DateRange:
    base = today_utc() if day is None else day
    return DateRange(start_date=base, end_date=base, total_days=1)


def date_range(records: Iterable[object]) -> DateRange:
    """Minimum start and maximum real end across records with valid dates.

    Records with unparseable or inverted dates are skipped. With no survivors
    the range collapses to a single day anchored on today.
    """
    lowest: dt.date | None = None
    highest: dt.date | None = None
    for record in records:
        start = parse_day_token(record_value(record, "start"))
        end = parse_day_token(record_value(record, "end"))
        if start is None or end is None or end < start:
            continue
        if lowest is None or start < lowest:
            lowest = start
        if highest is None or end > highest:
            highest = end
    if lowest is None or highest is None:
        return single_day_range()
    return DateRange(start_date=lowest, end_date=highest, total_days=day_span_inclusive(lowest, highest))
