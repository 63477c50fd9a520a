"""Lane assignment and pixel geometry for the roadmap timeline.

``compute_layout`` is a pure function: it reads records (``TimelineRecord`` or
plain mappings), drops the ones whose dates cannot be placed, widens short
boxes so their labels fit (within ``max_overflow_days``), and packs everything
into the fewest lanes such that no two entries in a lane touch or overlap on
their visual interval.
"""

from __future__ import annotations

import datetime as dt
import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

from .days import add_days, day_span_inclusive, format_day_token, offset_px, parse_day_token, single_day_range
from .schema import UNTITLED_LABEL, TimelineRecord, record_value

LOGGER = logging.getLogger(__name__)

REASON_NOT_A_RECORD = "not-a-record"
REASON_MISSING_START = "missing-start"
REASON_MISSING_END = "missing-end"
REASON_INVALID_START = "invalid-start"
REASON_INVALID_END = "invalid-end"
REASON_INVERTED_RANGE = "inverted-range"

FALLBACK_ID_LABEL = "item"

# (field, camelCase option, default, minimum)
_OPTION_SPECS: tuple[tuple[str, str, int, int], ...] = (
    ("px_per_day", "pxPerDay", 48, 1),
    ("min_item_width_px", "minItemWidthPx", 72, 4),
    ("label_character_px", "labelCharacterPx", 7, 1),
    ("label_padding_px", "labelPaddingPx", 24, 0),
    ("max_overflow_days", "maxOverflowDays", 3, 0),
)


@dataclass(frozen=True)
class LayoutConfig:
    px_per_day: float = 48
    min_item_width_px: float = 72
    label_character_px: float = 7
    label_padding_px: float = 24
    max_overflow_days: int = 3

    def __post_init__(self) -> None:
        for name, _, _, minimum in _OPTION_SPECS:
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite")
            if value < minimum:
                raise ValueError(f"{name} must be >= {minimum}")
        if int(self.max_overflow_days) != self.max_overflow_days:
            raise ValueError("max_overflow_days must be a whole number of days")

    @classmethod
    def from_options(cls, options: Mapping[str, object] | None) -> "LayoutConfig":
        """Build a config from loosely typed options, never raising.

        Keys may be snake_case or camelCase. Values that are missing,
        non-numeric, non-finite or below their minimum fall back to defaults.
        """
        if not isinstance(options, Mapping):
            return cls()
        known = {name for spec in _OPTION_SPECS for name in spec[:2]}
        unknown = sorted(str(key) for key in options if key not in known)
        if unknown:
            LOGGER.debug("ignoring unrecognized layout options: %s", ", ".join(unknown))

        values: dict[str, Any] = {}
        for name, camel, default, minimum in _OPTION_SPECS:
            raw = options.get(name, options.get(camel))
            values[name] = _coerce_option(name, raw, default=default, minimum=minimum)
        values["max_overflow_days"] = math.floor(values["max_overflow_days"])
        return cls(**values)


@dataclass(frozen=True)
class RecordCheck:
    """Outcome of validating one raw record before layout."""

    record: object
    reason: str | None = None
    item_id: Any = None
    name: str = ""
    start_date: dt.date | None = None
    end_date: dt.date | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


@dataclass(frozen=True)
class LayoutEntry:
    record: object
    item_id: Any
    name: str
    start_date: dt.date
    end_date: dt.date
    span_days: int
    base_width_px: float
    label_width_px: float
    label_span_days: int
    display_span_days: int
    visual_end_date: dt.date
    display_width_px: float
    requires_tooltip: bool

    @property
    def label(self) -> str:
        text = self.name.strip()
        return text if text else UNTITLED_LABEL

    @property
    def overflow_days(self) -> int:
        return self.display_span_days - self.span_days


@dataclass(frozen=True)
class LayoutResult:
    lanes: tuple[tuple[LayoutEntry, ...], ...]
    start_date: dt.date
    end_date: dt.date
    total_days: int
    config: LayoutConfig = field(default_factory=LayoutConfig)

    @property
    def lane_count(self) -> int:
        return len(self.lanes)

    @property
    def has_data(self) -> bool:
        return any(self.lanes)

    @property
    def px_per_day(self) -> float:
        return self.config.px_per_day

    def entries(self) -> Iterator[LayoutEntry]:
        for lane in self.lanes:
            yield from lane

    def entry_for(self, item_id: object) -> LayoutEntry | None:
        for entry in self.entries():
            if entry.item_id == item_id:
                return entry
        return None

    def offset_px(self, day: dt.date) -> float:
        return offset_px(day, self.start_date, self.config.px_per_day)

    def left_px(self, entry: LayoutEntry) -> float:
        return self.offset_px(entry.start_date)

    def content_width_px(self) -> float:
        return max(self.total_days * self.config.px_per_day, 1)


def check_record(raw: object) -> RecordCheck:
    if not isinstance(raw, (TimelineRecord, Mapping)):
        return RecordCheck(record=raw, reason=REASON_NOT_A_RECORD)

    start_token = record_value(raw, "start")
    end_token = record_value(raw, "end")
    if _is_blank(start_token):
        return RecordCheck(record=raw, reason=REASON_MISSING_START)
    if _is_blank(end_token):
        return RecordCheck(record=raw, reason=REASON_MISSING_END)

    start = parse_day_token(start_token)
    if start is None:
        return RecordCheck(record=raw, reason=REASON_INVALID_START)
    end = parse_day_token(end_token)
    if end is None:
        return RecordCheck(record=raw, reason=REASON_INVALID_END)
    if end < start:
        return RecordCheck(record=raw, reason=REASON_INVERTED_RANGE)

    raw_name = record_value(raw, "name")
    name = "" if raw_name is None else str(raw_name)
    item_id = record_value(raw, "id")
    if item_id is None:
        item_id = fallback_item_id(start, end, name)
    return RecordCheck(record=raw, item_id=item_id, name=name, start_date=start, end_date=end)


def partition_records(records: Iterable[object]) -> tuple[tuple[RecordCheck, ...], tuple[RecordCheck, ...]]:
    accepted: list[RecordCheck] = []
    rejected: list[RecordCheck] = []
    for raw in _safe_items(records):
        check = check_record(raw)
        (accepted if check.ok else rejected).append(check)
    return tuple(accepted), tuple(rejected)


def fallback_item_id(start: dt.date, end: dt.date, name: str) -> str:
    label = name.strip() or FALLBACK_ID_LABEL
    return f"{format_day_token(start)}:{format_day_token(end)}:{label}"


def measure_entry(check: RecordCheck, config: LayoutConfig) -> LayoutEntry:
    if not check.ok or check.start_date is None or check.end_date is None:
        raise ValueError(f"cannot measure rejected record ({check.reason})")
    px_per_day = config.px_per_day
    span = day_span_inclusive(check.start_date, check.end_date)
    trimmed = check.name.strip()
    label_width = len(trimmed) * config.label_character_px + config.label_padding_px if trimmed else 0
    min_width_span = math.ceil(config.min_item_width_px / px_per_day)
    label_span = math.ceil(label_width / px_per_day) if label_width > 0 else 0
    display_span = min(max(span, min_width_span, label_span), span + int(config.max_overflow_days))
    # Widening cannot run past the last representable day.
    display_span = min(display_span, day_span_inclusive(check.start_date, dt.date.max))
    return LayoutEntry(
        record=check.record,
        item_id=check.item_id,
        name=check.name,
        start_date=check.start_date,
        end_date=check.end_date,
        span_days=span,
        base_width_px=span * px_per_day,
        label_width_px=label_width,
        label_span_days=label_span,
        display_span_days=display_span,
        visual_end_date=add_days(check.start_date, display_span - 1),
        display_width_px=display_span * px_per_day,
        requires_tooltip=label_span > display_span,
    )


def entry_sort_key(entry: LayoutEntry) -> tuple[Any, ...]:
    return (entry.start_date, entry.end_date, entry.name, _identifier_sort_key(entry.item_id))


def compute_layout(
    records: Iterable[object] | None,
    config: LayoutConfig | Mapping[str, object] | None = None,
) -> LayoutResult:
    cfg = config if isinstance(config, LayoutConfig) else LayoutConfig.from_options(config)
    accepted, rejected = partition_records(records)
    if rejected:
        LOGGER.debug(
            "dropped %d of %d timeline records: %s",
            len(rejected),
            len(accepted) + len(rejected),
            ", ".join(sorted({check.reason or "" for check in rejected})),
        )
    if not accepted:
        empty = single_day_range()
        return LayoutResult(
            lanes=(),
            start_date=empty.start_date,
            end_date=empty.end_date,
            total_days=empty.total_days,
            config=cfg,
        )

    ordered = sorted((measure_entry(check, cfg) for check in accepted), key=entry_sort_key)

    lanes: list[list[LayoutEntry]] = []
    busy_lanes: list[tuple[dt.date, int]] = []
    free_lanes: list[int] = []
    lowest = ordered[0].start_date
    highest = ordered[0].visual_end_date
    for entry in ordered:
        # Starts only grow, so a lane freed here stays free for every later entry.
        while busy_lanes and busy_lanes[0][0] < entry.start_date:
            _, freed = heapq.heappop(busy_lanes)
            heapq.heappush(free_lanes, freed)
        if free_lanes:
            lane_index = heapq.heappop(free_lanes)
            lanes[lane_index].append(entry)
        else:
            lane_index = len(lanes)
            lanes.append([entry])
        heapq.heappush(busy_lanes, (entry.visual_end_date, lane_index))
        if entry.start_date < lowest:
            lowest = entry.start_date
        if entry.visual_end_date > highest:
            highest = entry.visual_end_date

    return LayoutResult(
        lanes=tuple(tuple(lane) for lane in lanes),
        start_date=lowest,
        end_date=highest,
        total_days=day_span_inclusive(lowest, highest),
        config=cfg,
    )


def _safe_items(records: Iterable[object] | None) -> list[object]:
    if records is None:
        return []
    try:
        return list(records)
    except TypeError:
        LOGGER.warning("timeline records are not iterable (%s); laying out nothing", type(records).__name__)
        return []


def _is_blank(raw: object) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _identifier_sort_key(item_id: object) -> tuple[int, Any]:
    if isinstance(item_id, (int, float)) and math.isfinite(item_id):
        return (0, item_id)
    if isinstance(item_id, str):
        return (1, item_id)
    return (2, repr(item_id))


def _coerce_option(name: str, raw: object, *, default: int, minimum: int) -> float:
    if raw is None:
        return default
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(raw) or raw < minimum:
        LOGGER.debug("layout option %s=%r is invalid; using default %s", name, raw, default)
        return default
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return raw
