"""Lane layout engine and headless renderers for the roadmap timeline."""

from .days import (
    DateRange,
    add_days,
    date_range,
    day_span_inclusive,
    days_between,
    enumerate_days,
    format_day_token,
    is_date_within_range,
    is_weekend_day,
    offset_px,
    parse_day_token,
    today_utc,
)
from .exporters import TimelineExportBundle, build_markdown_overview, export_timeline_bundle, render_timeline_png
from .gantt_renderer import TimelineRenderConfig, render_timeline_ascii
from .interaction import (
    GESTURE_MOVE,
    GESTURE_RESIZE_END,
    GESTURE_RESIZE_START,
    TIMEFRAME_OPTIONS,
    DateMutation,
    GestureController,
    GestureSession,
    TimeframeOption,
    ViewState,
    apply_date_mutation,
    begin_gesture,
    cancel_editing,
    commit_edit,
    reconcile_editing,
    rename_record,
    select_timeframe,
    start_editing,
    view_layout_config,
    zoom_in,
    zoom_out,
)
from .labels import (
    format_day_name,
    format_day_number,
    format_month_day,
    format_month_range_label,
    format_numeric_date,
    format_range_summary,
)
from .layout import (
    LayoutConfig,
    LayoutEntry,
    LayoutResult,
    RecordCheck,
    check_record,
    compute_layout,
    partition_records,
)
from .schema import (
    STAGE_COLORS,
    TIMELINE_RECORDS_JSON_SCHEMA,
    UNTITLED_LABEL,
    TimelineRecord,
    load_records,
    record_from_dict,
    record_to_dict,
    records_from_payload,
    stage_color,
    timeline_records_schema,
)
from .validation import (
    ValidationReport,
    max_concurrent_entries,
    require_valid_layout,
    validate_determinism,
    validate_lane_separation,
    validate_layout_suite,
    validate_minimal_lanes,
    validate_span_consistency,
)

__all__ = [
    "DateMutation",
    "DateRange",
    "GESTURE_MOVE",
    "GESTURE_RESIZE_END",
    "GESTURE_RESIZE_START",
    "GestureController",
    "GestureSession",
    "LayoutConfig",
    "LayoutEntry",
    "LayoutResult",
    "RecordCheck",
    "STAGE_COLORS",
    "TIMEFRAME_OPTIONS",
    "TIMELINE_RECORDS_JSON_SCHEMA",
    "TimeframeOption",
    "TimelineExportBundle",
    "TimelineRecord",
    "TimelineRenderConfig",
    "UNTITLED_LABEL",
    "ValidationReport",
    "ViewState",
    "add_days",
    "apply_date_mutation",
    "begin_gesture",
    "build_markdown_overview",
    "cancel_editing",
    "check_record",
    "commit_edit",
    "compute_layout",
    "date_range",
    "day_span_inclusive",
    "days_between",
    "enumerate_days",
    "export_timeline_bundle",
    "format_day_name",
    "format_day_number",
    "format_day_token",
    "format_month_day",
    "format_month_range_label",
    "format_numeric_date",
    "format_range_summary",
    "is_date_within_range",
    "is_weekend_day",
    "load_records",
    "max_concurrent_entries",
    "offset_px",
    "parse_day_token",
    "partition_records",
    "reconcile_editing",
    "record_from_dict",
    "record_to_dict",
    "records_from_payload",
    "rename_record",
    "render_timeline_ascii",
    "render_timeline_png",
    "require_valid_layout",
    "select_timeframe",
    "stage_color",
    "start_editing",
    "timeline_records_schema",
    "today_utc",
    "validate_determinism",
    "validate_lane_separation",
    "validate_layout_suite",
    "validate_minimal_lanes",
    "validate_span_consistency",
    "view_layout_config",
    "zoom_in",
    "zoom_out",
]
