from __future__ import annotations

import datetime as dt

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
WEEKDAY_ABBREVIATIONS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_day_name(day: dt.date) -> str:
    return WEEKDAY_ABBREVIATIONS[day.weekday()]


def format_day_number(day: dt.date) -> str:
    return str(day.day)


def format_month_day(day: dt.date) -> str:
    return f"{_short_month(day)} {day.day}"


def format_numeric_date(day: dt.date) -> str:
    return f"{day.month:02d}/{day.day:02d}/{day.year:04d}"


def format_month_range_label(start: dt.date, end: dt.date) -> str:
    start_month = MONTH_NAMES[start.month - 1]
    end_month = MONTH_NAMES[end.month - 1]
    if start.year == end.year and start.month == end.month:
        return f"{start_month} {start.year}"
    if start.year == end.year:
        return f"{start_month} - {end_month} {start.year}"
    return f"{start_month} {start.year} - {end_month} {end.year}"


def format_range_summary(start: dt.date, end: dt.date) -> str:
    if start.year == end.year:
        return f"{format_month_day(start)} - {format_month_day(end)}, {end.year}"
    return f"{format_month_day(start)}, {start.year} - {format_month_day(end)}, {end.year}"


def _short_month(day: dt.date) -> str:
    return MONTH_NAMES[day.month - 1][:3]
