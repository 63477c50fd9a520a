from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from roadmap_ui.timeline.schema import (
    STAGE_COLORS,
    UNTITLED_LABEL,
    TimelineRecord,
    load_records,
    record_from_dict,
    record_to_dict,
    record_value,
    records_from_payload,
    stage_color,
    timeline_records_schema,
)


class TimelineSchemaTests(unittest.TestCase):
    def test_record_from_dict_keeps_raw_tokens(self) -> None:
        record = record_from_dict(
            {"id": 3, "name": "Beta launch", "start": "2024-02-10", "end": "2024-02-09", "stage": " beta "}
        )
        self.assertEqual(record.record_id, 3)
        self.assertEqual(record.start, "2024-02-10")
        self.assertEqual(record.end, "2024-02-09")
        self.assertEqual(record.stage, "beta")
        self.assertIsNone(record.release)

    def test_record_value_reads_dataclasses_and_mappings(self) -> None:
        record = TimelineRecord(record_id="r-1", name="A", start="2024-01-01", end="2024-01-02")
        self.assertEqual(record_value(record, "id"), "r-1")
        self.assertEqual(record_value({"id": 9}, "id"), 9)
        self.assertIsNone(record_value({"id": 9}, "name"))
        self.assertIsNone(record_value(42, "start"))

    def test_records_from_payload_accepts_list_or_items_object(self) -> None:
        items = [{"id": 1, "start": "2024-01-01", "end": "2024-01-02"}, "junk"]
        self.assertEqual(len(records_from_payload(items)), 1)
        self.assertEqual(len(records_from_payload({"items": items})), 1)
        with self.assertRaises(TypeError):
            records_from_payload({"items": "nope"})
        with self.assertRaises(TypeError):
            records_from_payload("nope")

    def test_load_records_reads_json_file(self) -> None:
        payload = {"items": [{"id": 1, "name": "Alpha", "start": "2024-01-01", "end": "2024-01-05", "stage": "alpha"}]}
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "records.json"
            path.write_text(json.dumps(payload), encoding="utf-8")
            records = load_records(path)
        self.assertEqual(records[0].name, "Alpha")
        self.assertEqual(record_to_dict(records[0]), payload["items"][0])

    def test_display_name_and_stage_colors(self) -> None:
        self.assertEqual(TimelineRecord(record_id=1, name="   ").display_name, UNTITLED_LABEL)
        self.assertEqual(stage_color("Beta "), STAGE_COLORS["beta"])
        self.assertEqual(stage_color("unknown"), STAGE_COLORS["default"])
        self.assertEqual(stage_color(None), STAGE_COLORS["default"])

    def test_schema_requires_items_with_dates(self) -> None:
        schema = timeline_records_schema()
        self.assertIn("items", schema["required"])
        self.assertEqual(schema["properties"]["items"]["items"]["required"], ["start", "end"])


if __name__ == "__main__":
    unittest.main()
