from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

import main as cli

_PAYLOAD = {
    "items": [
        {"id": 1, "name": "A", "start": "2024-01-01", "end": "2024-01-05"},
        {"id": 2, "name": "B", "start": "2024-01-03", "end": "2024-01-04"},
        {"id": 3, "name": "C", "start": "2024-01-06", "end": "2024-01-08"},
        {"id": 4, "name": "Inverted", "start": "2024-02-10", "end": "2024-02-09"},
    ]
}


def _run(argv: list[str]) -> tuple[int, str]:
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        code = cli.main(argv)
    return code, buffer.getvalue()


class RoadmapTimelineCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.records_path = self.root / "records.json"
        self.records_path.write_text(json.dumps(_PAYLOAD), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_render_prints_lanes(self) -> None:
        code, out = _run(["render", str(self.records_path), "--title", "CLI plan"])
        self.assertEqual(code, 0)
        self.assertIn("CLI plan", out)
        self.assertIn("items=3 lanes=2", out)

    def test_render_honours_zoom_and_out_file(self) -> None:
        target = self.root / "out" / "gantt.txt"
        code, out = _run(["render", str(self.records_path), "--zoom", "week", "--out", str(target)])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), str(target))
        self.assertIn("68px / day", target.read_text(encoding="utf-8"))

    def test_px_per_day_overrides_zoom(self) -> None:
        code, out = _run(["render", str(self.records_path), "--zoom", "month", "--px-per-day", "20"])
        self.assertEqual(code, 0)
        self.assertIn("20px / day", out)

    def test_export_writes_bundle(self) -> None:
        code, out = _run(["export", str(self.records_path), "--out-dir", str(self.root / "exports"), "--prefix", "cli"])
        self.assertEqual(code, 0)
        self.assertIn("png_overview:", out)
        self.assertTrue((self.root / "exports" / "cli_overview.png").exists())

    def test_validate_reports_ok_with_warning(self) -> None:
        code, out = _run(["validate", str(self.records_path)])
        self.assertEqual(code, 0)
        self.assertIn("warning: 1 record(s) left off the timeline: inverted-range", out)
        self.assertTrue(out.rstrip().endswith("ok"))


if __name__ == "__main__":
    unittest.main()
