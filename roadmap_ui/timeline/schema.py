from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

UNTITLED_LABEL = "Untitled item"

STAGE_COLORS: dict[str, str] = {
    "alpha": "#F59F00",
    "beta": "#1BBE84",
    "ga": "#2B6DF8",
    "deprecated": "#EF4565",
    "default": "#475569",
}

_ATTRIBUTE_FOR_KEY: dict[str, str] = {"id": "record_id"}


@dataclass(frozen=True)
class TimelineRecord:
    """One roadmap item as the surrounding application owns it.

    Dates are kept as raw day tokens; a record with bad dates is still a valid
    record, it just never shows up on the timeline.
    """

    record_id: int | str | None
    name: str = ""
    start: str = ""
    end: str = ""
    stage: str | None = None
    release: str | None = None

    @property
    def display_name(self) -> str:
        text = self.name.strip()
        return text if text else UNTITLED_LABEL


TIMELINE_RECORDS_JSON_SCHEMA: dict[str, object] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://roadmap-ui.dev/schemas/timeline_records.schema.json",
    "title": "Roadmap Timeline Records",
    "type": "object",
    "required": ["items"],
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["start", "end"],
                "properties": {
                    "id": {"type": ["integer", "string"]},
                    "name": {"type": "string"},
                    "start": {"type": "string", "format": "date"},
                    "end": {"type": "string", "format": "date"},
                    "stage": {"type": "string"},
                    "release": {"type": "string", "format": "date"},
                },
            },
        },
    },
}


def timeline_records_schema() -> dict[str, object]:
    return json.loads(json.dumps(TIMELINE_RECORDS_JSON_SCHEMA))


def record_value(record: object, key: str) -> Any:
    """Read ``key`` from a ``TimelineRecord`` or a plain mapping record."""
    if isinstance(record, TimelineRecord):
        return getattr(record, _ATTRIBUTE_FOR_KEY.get(key, key), None)
    if isinstance(record, Mapping):
        return record.get(key)
    return None


def stage_color(stage: object) -> str:
    if isinstance(stage, str):
        color = STAGE_COLORS.get(stage.strip().lower())
        if color is not None:
            return color
    return STAGE_COLORS["default"]


def record_from_dict(raw: Mapping[str, object]) -> TimelineRecord:
    record_id = raw.get("id")
    if record_id is not None and not isinstance(record_id, (int, str)):
        record_id = str(record_id)
    return TimelineRecord(
        record_id=record_id,
        name=_coerce_text(raw.get("name")),
        start=_coerce_text(raw.get("start")),
        end=_coerce_text(raw.get("end")),
        stage=_coerce_optional_str(raw.get("stage")),
        release=_coerce_optional_str(raw.get("release")),
    )


def record_to_dict(record: TimelineRecord) -> dict[str, object]:
    out: dict[str, object] = {"name": record.name, "start": record.start, "end": record.end}
    if record.record_id is not None:
        out = {"id": record.record_id, **out}
    if record.stage is not None:
        out["stage"] = record.stage
    if record.release is not None:
        out["release"] = record.release
    return out


def records_from_payload(payload: object) -> tuple[TimelineRecord, ...]:
    if isinstance(payload, Mapping):
        raw_items = payload.get("items")
        if not isinstance(raw_items, list):
            raise TypeError("`items` must be a list")
    elif isinstance(payload, list):
        raw_items = payload
    else:
        raise TypeError("Records payload must be a list or an object with `items`")
    return tuple(record_from_dict(item) for item in raw_items if isinstance(item, Mapping))


def load_records(path: str | Path) -> tuple[TimelineRecord, ...]:
    source = Path(path)
    payload = json.loads(source.read_text(encoding="utf-8"))
    return records_from_payload(payload)


def _coerce_text(raw: object) -> str:
    if raw is None:
        return ""
    return raw if isinstance(raw, str) else str(raw)


def _coerce_optional_str(raw: object) -> str | None:
    if raw is None:
        return None
    text = str(raw).strip()
    return text if text else None
