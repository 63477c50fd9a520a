from __future__ import annotations

import dataclasses
import datetime as dt
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .days import add_days, format_day_token
from .layout import LayoutConfig, LayoutEntry
from .schema import UNTITLED_LABEL, TimelineRecord, record_value

LOGGER = logging.getLogger(__name__)

GESTURE_MOVE = "move"
GESTURE_RESIZE_START = "resize-start"
GESTURE_RESIZE_END = "resize-end"
GESTURE_KINDS: tuple[str, ...] = (GESTURE_MOVE, GESTURE_RESIZE_START, GESTURE_RESIZE_END)

VIEW_MIN_ITEM_WIDTH_PX = 96
VIEW_LABEL_CHARACTER_PX = 7
VIEW_LABEL_PADDING_PX = 28
VIEW_MAX_OVERFLOW_DAYS = 3


@dataclass(frozen=True)
class TimeframeOption:
    value: str
    label: str
    px_per_day: int


TIMEFRAME_OPTIONS: tuple[TimeframeOption, ...] = (
    TimeframeOption(value="week", label="Week", px_per_day=68),
    TimeframeOption(value="two-week", label="2 week", px_per_day=52),
    TimeframeOption(value="month", label="Month", px_per_day=38),
)
DEFAULT_ZOOM_INDEX = 1


@dataclass(frozen=True)
class ViewState:
    zoom_index: int = DEFAULT_ZOOM_INDEX
    editing_id: Any = None

    def __post_init__(self) -> None:
        if not 0 <= self.zoom_index < len(TIMEFRAME_OPTIONS):
            raise ValueError(f"zoom_index must be in [0, {len(TIMEFRAME_OPTIONS) - 1}]")

    @property
    def timeframe(self) -> TimeframeOption:
        return TIMEFRAME_OPTIONS[self.zoom_index]

    @property
    def px_per_day(self) -> int:
        return self.timeframe.px_per_day

    @property
    def can_zoom_in(self) -> bool:
        return self.zoom_index > 0

    @property
    def can_zoom_out(self) -> bool:
        return self.zoom_index < len(TIMEFRAME_OPTIONS) - 1

    @property
    def zoom_label(self) -> str:
        return f"{self.px_per_day}px / day"


@dataclass(frozen=True)
class GestureSession:
    item_id: Any
    kind: str
    pointer_id: int
    anchor_x: float
    start_date: dt.date
    end_date: dt.date
    last_start: dt.date
    last_end: dt.date
    last_delta: int = 0


@dataclass(frozen=True)
class DateMutation:
    item_id: Any
    start_date: dt.date
    end_date: dt.date

    @property
    def start(self) -> str:
        return format_day_token(self.start_date)

    @property
    def end(self) -> str:
        return format_day_token(self.end_date)


def zoom_in(state: ViewState) -> ViewState:
    if not state.can_zoom_in:
        return state
    return dataclasses.replace(state, zoom_index=state.zoom_index - 1)


def zoom_out(state: ViewState) -> ViewState:
    if not state.can_zoom_out:
        return state
    return dataclasses.replace(state, zoom_index=state.zoom_index + 1)


def select_timeframe(state: ViewState, value: str) -> ViewState:
    for index, option in enumerate(TIMEFRAME_OPTIONS):
        if option.value == value:
            return dataclasses.replace(state, zoom_index=index)
    return state


def view_layout_config(state: ViewState) -> LayoutConfig:
    return LayoutConfig(
        px_per_day=state.px_per_day,
        min_item_width_px=VIEW_MIN_ITEM_WIDTH_PX,
        label_character_px=VIEW_LABEL_CHARACTER_PX,
        label_padding_px=VIEW_LABEL_PADDING_PX,
        max_overflow_days=VIEW_MAX_OVERFLOW_DAYS,
    )


class GestureController:
    """Owns at most one drag/resize session and turns pointer moves into date mutations.

    A session exists only between ``begin`` and ``finish``/``cancel``; moves
    from any other pointer are ignored so a stale gesture can never write.
    """

    def __init__(self) -> None:
        self._session: GestureSession | None = None

    @property
    def session(self) -> GestureSession | None:
        return self._session

    @property
    def active(self) -> bool:
        return self._session is not None

    def begin(
        self,
        entry: LayoutEntry,
        kind: str,
        *,
        pointer_id: int,
        anchor_x: float,
        button: int = 0,
    ) -> GestureSession | None:
        if kind not in GESTURE_KINDS:
            raise ValueError(f"Unsupported gesture kind: {kind}")
        if button != 0:
            return None
        item_id = record_value(entry.record, "id")
        if item_id is None:
            return None
        if self._session is not None:
            LOGGER.debug("replacing gesture for %r with %s on %r", self._session.item_id, kind, item_id)
        self._session = GestureSession(
            item_id=item_id,
            kind=kind,
            pointer_id=pointer_id,
            anchor_x=anchor_x,
            start_date=entry.start_date,
            end_date=entry.end_date,
            last_start=entry.start_date,
            last_end=entry.end_date,
        )
        return self._session

    def move(self, pointer_id: int, client_x: float, px_per_day: float) -> DateMutation | None:
        session = self._session
        if session is None or pointer_id != session.pointer_id:
            return None
        if px_per_day <= 0:
            raise ValueError("px_per_day must be > 0")
        delta_days = math.floor((client_x - session.anchor_x) / px_per_day + 0.5)
        if delta_days == session.last_delta:
            return None

        next_start = session.last_start
        next_end = session.last_end
        if session.kind == GESTURE_MOVE:
            next_start = add_days(session.start_date, delta_days)
            next_end = add_days(session.end_date, delta_days)
        elif session.kind == GESTURE_RESIZE_START:
            next_start = min(add_days(session.start_date, delta_days), session.last_end)
        else:
            next_end = max(add_days(session.end_date, delta_days), session.last_start)

        self._session = dataclasses.replace(
            session,
            last_delta=delta_days,
            last_start=next_start,
            last_end=next_end,
        )
        return DateMutation(item_id=session.item_id, start_date=next_start, end_date=next_end)

    def finish(self, pointer_id: int | None = None) -> GestureSession | None:
        session = self._session
        if session is None:
            return None
        if pointer_id is not None and pointer_id != session.pointer_id:
            return None
        self._session = None
        return session

    def cancel(self) -> None:
        self._session = None

    def on_zoom_changed(self) -> GestureSession | None:
        return self.finish()


def begin_gesture(
    state: ViewState,
    controller: GestureController,
    entry: LayoutEntry,
    kind: str,
    *,
    pointer_id: int,
    anchor_x: float,
    button: int = 0,
) -> tuple[ViewState, GestureSession | None]:
    """Start a drag/resize and close any inline edit it interrupts.

    The view state is returned unchanged when no session starts.
    """
    session = controller.begin(entry, kind, pointer_id=pointer_id, anchor_x=anchor_x, button=button)
    if session is None or state.editing_id is None:
        return state, session
    return cancel_editing(state), session


def apply_date_mutation(records: Iterable[object], mutation: DateMutation) -> tuple[object, ...]:
    start = mutation.start
    end = mutation.end
    out: list[object] = []
    for record in records:
        if record_value(record, "id") != mutation.item_id:
            out.append(record)
            continue
        if record_value(record, "start") == start and record_value(record, "end") == end:
            out.append(record)
            continue
        out.append(_replace_record(record, start=start, end=end))
    return tuple(out)


def rename_record(records: Iterable[object], item_id: object, name: str) -> tuple[object, ...]:
    trimmed = name.strip()
    next_name = trimmed if trimmed else UNTITLED_LABEL
    out: list[object] = []
    for record in records:
        if record_value(record, "id") != item_id or record_value(record, "name") == next_name:
            out.append(record)
            continue
        out.append(_replace_record(record, name=next_name))
    return tuple(out)


def start_editing(state: ViewState, item_id: object) -> ViewState:
    return dataclasses.replace(state, editing_id=item_id)


def cancel_editing(state: ViewState) -> ViewState:
    return dataclasses.replace(state, editing_id=None)


def commit_edit(
    records: Iterable[object], state: ViewState, item_id: object, name: str
) -> tuple[tuple[object, ...], ViewState]:
    return rename_record(records, item_id, name), cancel_editing(state)


def reconcile_editing(records: Iterable[object], state: ViewState) -> ViewState:
    if state.editing_id is None:
        return state
    if any(record_value(record, "id") == state.editing_id for record in records):
        return state
    return cancel_editing(state)


def _replace_record(record: object, **changes: str) -> object:
    if isinstance(record, TimelineRecord):
        return dataclasses.replace(record, **changes)
    if isinstance(record, Mapping):
        return {**record, **changes}
    raise TypeError(f"Cannot update record of type {type(record).__name__}")
