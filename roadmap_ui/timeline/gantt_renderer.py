from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass

from .days import days_between, enumerate_days, is_date_within_range, is_weekend_day, today_utc
from .labels import (
    format_day_name,
    format_day_number,
    format_month_day,
    format_month_range_label,
    format_range_summary,
)
from .layout import LayoutEntry, LayoutResult

LOGGER = logging.getLogger(__name__)

REAL_FILL = "#"
OVERFLOW_FILL = "+"
WEEKEND_FILL = "."
TOOLTIP_MARK = "*"

EMPTY_TITLE = "No launches scheduled"
EMPTY_BODY = "Add a roadmap record to see it on the timeline."


@dataclass(frozen=True)
class TimelineRenderConfig:
    title: str = "Roadmap timeline"
    day_column_width: int = 3
    show_today_marker: bool = True
    today: dt.date | None = None
    max_days: int = 732

    def __post_init__(self) -> None:
        if self.day_column_width < 1:
            raise ValueError("day_column_width must be >= 1")
        if self.max_days < 1:
            raise ValueError("max_days must be >= 1")


def render_timeline_ascii(result: LayoutResult, config: TimelineRenderConfig | None = None) -> str:
    cfg = config or TimelineRenderConfig()
    item_count = sum(len(lane) for lane in result.lanes)

    lines: list[str] = []
    lines.append(cfg.title)
    lines.append(
        f"{format_month_range_label(result.start_date, result.end_date)} | "
        f"{format_range_summary(result.start_date, result.end_date)} | "
        f"items={item_count} lanes={result.lane_count} | {result.px_per_day}px / day"
    )

    if not result.has_data:
        lines.append("")
        lines.append(EMPTY_TITLE)
        lines.append(EMPTY_BODY)
        return "\n".join(lines) + "\n"

    shown_days = min(result.total_days, cfg.max_days)
    if shown_days < result.total_days:
        LOGGER.warning("timeline spans %d days; rendering the first %d", result.total_days, shown_days)
    days = enumerate_days(result.start_date, shown_days)
    width = cfg.day_column_width
    gutter = max(len("Today"), len(f"Lane {result.lane_count}"))

    lines.append(f"{'Days':<{gutter}} |" + "".join(_fit(format_day_name(day), width) for day in days) + "|")
    lines.append(f"{'':<{gutter}} |" + "".join(_fit(format_day_number(day), width) for day in days) + "|")

    for index, lane in enumerate(result.lanes, start=1):
        bar = _render_lane_bar(result, lane, days, width)
        members = ", ".join(_member_label(entry) for entry in lane)
        lines.append(f"{f'Lane {index}':<{gutter}} |{bar}| {members}")

    today = cfg.today or today_utc()
    if cfg.show_today_marker and is_date_within_range(today, days[0], days[-1]):
        column = days_between(result.start_date, today) * width + width // 2
        lines.append(f"{'Today':<{gutter}} |" + " " * column + f"^ {format_month_day(today)}")

    if shown_days < result.total_days:
        lines.append("")
        lines.append(f"{result.total_days - shown_days} more day(s) not shown")

    if any(entry.requires_tooltip for entry in result.entries()):
        lines.append("")
        lines.append(f"{TOOLTIP_MARK} label wider than its box")

    return "\n".join(lines) + "\n"


def _render_lane_bar(
    result: LayoutResult, lane: tuple[LayoutEntry, ...], days: tuple[dt.date, ...], width: int
) -> str:
    cells = [(WEEKEND_FILL if is_weekend_day(day) else " ") * width for day in days]
    for entry in lane:
        first = days_between(result.start_date, entry.start_date)
        for offset in range(min(entry.display_span_days, len(cells) - first)):
            fill = REAL_FILL if offset < entry.span_days else OVERFLOW_FILL
            cells[first + offset] = fill * width
    return "".join(cells)


def _member_label(entry: LayoutEntry) -> str:
    suffix = TOOLTIP_MARK if entry.requires_tooltip else ""
    return f"{entry.label}{suffix}"


def _fit(text: str, width: int) -> str:
    return text[:width].center(width)
