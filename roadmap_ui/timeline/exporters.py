from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from PIL import Image, ImageDraw, ImageFont

from .days import enumerate_days, is_date_within_range, is_weekend_day, today_utc
from .gantt_renderer import TimelineRenderConfig, render_timeline_ascii
from .labels import format_day_name, format_day_number, format_numeric_date, format_range_summary
from .layout import LayoutConfig, LayoutResult, compute_layout
from .schema import record_value, stage_color

LOGGER = logging.getLogger(__name__)

_BACKGROUND = (248, 250, 252)
_WEEKEND = (226, 232, 240)
_GRID = (203, 213, 225)
_HEADER_TEXT = (71, 85, 105)
_ITEM_TEXT = (255, 255, 255)
_TODAY = (220, 38, 38)

MAX_CONTENT_WIDTH_PX = 16384


@dataclass(frozen=True)
class TimelineExportBundle:
    ascii_gantt: Path
    markdown_overview: Path
    png_overview: Path

    def as_dict(self) -> dict[str, str]:
        return {
            "ascii_gantt": str(self.ascii_gantt),
            "markdown_overview": str(self.markdown_overview),
            "png_overview": str(self.png_overview),
        }


def export_timeline_bundle(
    records: Iterable[object],
    *,
    out_dir: str | Path,
    prefix: str = "roadmap_timeline",
    config: LayoutConfig | Mapping[str, object] | None = None,
    render_config: TimelineRenderConfig | None = None,
) -> TimelineExportBundle:
    root = Path(out_dir)
    root.mkdir(parents=True, exist_ok=True)

    result = compute_layout(records, config)
    render_cfg = render_config or TimelineRenderConfig()
    gantt = render_timeline_ascii(result, render_cfg)
    overview = build_markdown_overview(result, gantt=gantt, title=render_cfg.title)

    path_gantt = root / f"{prefix}_gantt.txt"
    path_overview_md = root / f"{prefix}_overview.md"
    path_overview_png = root / f"{prefix}_overview.png"

    path_gantt.write_text(gantt, encoding="utf-8")
    path_overview_md.write_text(overview, encoding="utf-8")
    render_timeline_png(
        result,
        path_overview_png,
        today=render_cfg.today,
        show_today_marker=render_cfg.show_today_marker,
    )

    LOGGER.info("wrote timeline export bundle (%d lanes) to %s", result.lane_count, root)
    return TimelineExportBundle(
        ascii_gantt=path_gantt,
        markdown_overview=path_overview_md,
        png_overview=path_overview_png,
    )


def build_markdown_overview(result: LayoutResult, *, gantt: str, title: str) -> str:
    lines: list[str] = [f"# {title}", ""]
    lines.append(f"Range: {format_range_summary(result.start_date, result.end_date)} ({result.total_days} days)")
    lines.append("")
    lines.append("```text")
    lines.append(gantt.rstrip())
    lines.append("```")
    lines.append("")
    if not result.has_data:
        lines.append("_No items to place._")
        return "\n".join(lines) + "\n"

    lines.append("| Lane | Item | Start | End | Visual end | Width (px) | Tooltip |")
    lines.append("| --- | --- | --- | --- | --- | --- | --- |")
    for index, lane in enumerate(result.lanes, start=1):
        for entry in lane:
            lines.append(
                f"| {index} | {entry.label} | {format_numeric_date(entry.start_date)} | "
                f"{format_numeric_date(entry.end_date)} | {format_numeric_date(entry.visual_end_date)} | "
                f"{entry.display_width_px:g} | {'yes' if entry.requires_tooltip else 'no'} |"
            )
    return "\n".join(lines) + "\n"


def render_timeline_png(
    result: LayoutResult,
    out_path: str | Path,
    *,
    padding: int = 16,
    header_height: int = 36,
    lane_height: int = 28,
    lane_gap: int = 8,
    today: dt.date | None = None,
    show_today_marker: bool = True,
    max_content_width_px: int = MAX_CONTENT_WIDTH_PX,
) -> Path:
    """Draw every entry at its computed pixel box, one row per lane.

    Timelines wider than ``max_content_width_px`` are cut off on the right
    and logged.
    """
    if max_content_width_px < 1:
        raise ValueError("max_content_width_px must be >= 1")
    target = Path(out_path)
    px_per_day = result.px_per_day
    content_width = int(math.ceil(result.content_width_px()))
    shown_days = result.total_days
    if content_width > max_content_width_px:
        shown_days = max(1, int(max_content_width_px // px_per_day))
        LOGGER.warning(
            "timeline is %dpx wide (%d days); drawing the first %d days",
            content_width,
            result.total_days,
            shown_days,
        )
        content_width = max_content_width_px
    lane_rows = max(1, result.lane_count)
    width = max(320, content_width + padding * 2)
    height = padding * 2 + header_height + lane_rows * (lane_height + lane_gap)

    font = ImageFont.load_default()
    image = Image.new("RGB", (width, height), color=_BACKGROUND)
    draw = ImageDraw.Draw(image)
    body_top = padding + header_height

    for day in enumerate_days(result.start_date, shown_days):
        x0 = padding + result.offset_px(day)
        x1 = x0 + px_per_day
        if is_weekend_day(day):
            draw.rectangle((x0, body_top, x1, height - padding), fill=_WEEKEND)
        draw.line((x0, padding, x0, height - padding), fill=_GRID)
        draw.text((x0 + 2, padding), f"{format_day_name(day)} {format_day_number(day)}", fill=_HEADER_TEXT, font=font)

    for row, lane in enumerate(result.lanes):
        y0 = body_top + row * (lane_height + lane_gap)
        for entry in lane:
            left = result.left_px(entry)
            if left >= content_width:
                continue
            x0 = padding + left
            x1 = x0 + min(entry.display_width_px, content_width - left) - 1
            draw.rounded_rectangle(
                (x0, y0, x1, y0 + lane_height),
                radius=6,
                fill=stage_color(record_value(entry.record, "stage")),
            )
            max_chars = max(0, int((entry.display_width_px - 8) // result.config.label_character_px))
            label = entry.label if len(entry.label) <= max_chars else entry.label[: max(0, max_chars - 1)] + "~"
            draw.text((x0 + 4, y0 + lane_height // 3), label, fill=_ITEM_TEXT, font=font)

    marker = today if today is not None else today_utc()
    if show_today_marker and result.has_data and is_date_within_range(marker, result.start_date, result.end_date):
        offset = result.offset_px(marker)
        if offset < content_width:
            draw.line((padding + offset, body_top, padding + offset, height - padding), fill=_TODAY, width=2)

    image.save(target)
    return target
