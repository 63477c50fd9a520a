from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

import numpy as np

from .days import day_span_inclusive, days_between
from .layout import LayoutConfig, LayoutResult, compute_layout, partition_records


@dataclass(frozen=True)
class ValidationReport:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_lane_separation(result: LayoutResult) -> ValidationReport:
    errors: list[str] = []
    for index, lane in enumerate(result.lanes, start=1):
        if not lane:
            errors.append(f"Lane {index} is empty")
            continue
        for previous, current in zip(lane, lane[1:]):
            if previous.visual_end_date >= current.start_date:
                errors.append(
                    f"Lane {index}: `{previous.item_id}` (visual end {previous.visual_end_date.isoformat()}) "
                    f"overlaps `{current.item_id}` (start {current.start_date.isoformat()})"
                )
    return ValidationReport(errors=tuple(errors))


def validate_span_consistency(result: LayoutResult) -> ValidationReport:
    errors: list[str] = []
    if result.total_days != day_span_inclusive(result.start_date, result.end_date):
        errors.append(
            f"total_days={result.total_days} does not match span "
            f"{result.start_date.isoformat()}..{result.end_date.isoformat()}"
        )
    entries = list(result.entries())
    if not entries:
        if result.total_days != 1:
            errors.append("Empty layout must span exactly one day")
        return ValidationReport(errors=tuple(errors))

    earliest = min(entry.start_date for entry in entries)
    latest_visual = max(entry.visual_end_date for entry in entries)
    latest_real = max(entry.end_date for entry in entries)
    if result.start_date != earliest:
        errors.append(f"start_date {result.start_date.isoformat()} != earliest start {earliest.isoformat()}")
    if result.end_date != latest_visual:
        errors.append(f"end_date {result.end_date.isoformat()} != latest visual end {latest_visual.isoformat()}")
    if result.end_date < latest_real:
        errors.append(f"end_date {result.end_date.isoformat()} precedes latest real end {latest_real.isoformat()}")
    return ValidationReport(errors=tuple(errors))


def max_concurrent_entries(result: LayoutResult) -> int:
    """Largest number of visual intervals covering any single day."""
    entries = list(result.entries())
    if not entries:
        return 0
    starts = np.array([days_between(result.start_date, entry.start_date) for entry in entries], dtype=np.int64)
    stops = np.array([days_between(result.start_date, entry.visual_end_date) + 1 for entry in entries], dtype=np.int64)
    delta = np.zeros(int(stops.max()) + 1, dtype=np.int64)
    np.add.at(delta, starts, 1)
    np.add.at(delta, stops, -1)
    return int(np.cumsum(delta).max())


def validate_minimal_lanes(result: LayoutResult) -> ValidationReport:
    expected = max_concurrent_entries(result)
    if result.lane_count != expected:
        return ValidationReport(errors=(f"Layout uses {result.lane_count} lanes; {expected} are sufficient",))
    return ValidationReport()


def validate_determinism(
    records: Iterable[object], config: LayoutConfig | Mapping[str, object] | None = None
) -> ValidationReport:
    snapshot = list(records)
    once = compute_layout(snapshot, config)
    twice = compute_layout(snapshot, config)
    if _signature(once) != _signature(twice):
        return ValidationReport(errors=("Layout is not deterministic across repeated calls",))
    return ValidationReport()


def validate_layout_suite(
    records: Iterable[object], config: LayoutConfig | Mapping[str, object] | None = None
) -> ValidationReport:
    snapshot = list(records)
    result = compute_layout(snapshot, config)
    reports = (
        validate_lane_separation(result),
        validate_span_consistency(result),
        validate_minimal_lanes(result),
        validate_determinism(snapshot, config),
    )
    warnings: list[str] = []
    _, rejected = partition_records(snapshot)
    if rejected:
        reasons = sorted({check.reason or "" for check in rejected})
        warnings.append(f"{len(rejected)} record(s) left off the timeline: {', '.join(reasons)}")
    return ValidationReport(
        errors=tuple(message for report in reports for message in report.errors),
        warnings=tuple(warnings) + tuple(message for report in reports for message in report.warnings),
    )


def require_valid_layout(
    records: Iterable[object], config: LayoutConfig | Mapping[str, object] | None = None
) -> None:
    report = validate_layout_suite(records, config)
    if report.errors:
        joined = "; ".join(report.errors)
        raise ValueError(f"Timeline layout validation failed: {joined}")


def _signature(result: LayoutResult) -> tuple[object, ...]:
    lanes = tuple(
        tuple((entry.item_id, entry.start_date, entry.visual_end_date, entry.display_width_px) for entry in lane)
        for lane in result.lanes
    )
    return (lanes, result.start_date, result.end_date, result.total_days)
