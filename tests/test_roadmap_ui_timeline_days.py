from __future__ import annotations

import datetime as dt
import unittest
from unittest import mock

from roadmap_ui.timeline.days import (
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
)
from roadmap_ui.timeline.schema import TimelineRecord


class DayTokenTests(unittest.TestCase):
    def test_parse_canonical_tokens(self) -> None:
        self.assertEqual(parse_day_token("2024-03-05"), dt.date(2024, 3, 5))
        self.assertEqual(parse_day_token("2024-02-29"), dt.date(2024, 2, 29))

    def test_parse_rejects_malformed_and_out_of_range_tokens(self) -> None:
        for token in ("2024-02-30", "2023-02-29", "2024-13-01", "2024-00-10", "2024-2-5", "20240105", " 2024-01-05", ""):
            with self.subTest(token=token):
                self.assertIsNone(parse_day_token(token))
        self.assertIsNone(parse_day_token(None))
        self.assertIsNone(parse_day_token(20240105))

    def test_format_zero_pads(self) -> None:
        self.assertEqual(format_day_token(dt.date(2024, 3, 5)), "2024-03-05")
        self.assertEqual(format_day_token(dt.date(999, 1, 2)), "0999-01-02")

    def test_round_trip_over_two_years(self) -> None:
        day = dt.date(1999, 12, 1)
        for _ in range(800):
            token = format_day_token(day)
            self.assertEqual(parse_day_token(token), day)
            self.assertEqual(format_day_token(parse_day_token(token)), token)
            day = add_days(day, 1)


class DayArithmeticTests(unittest.TestCase):
    def test_span_is_inclusive(self) -> None:
        day = dt.date(2024, 1, 1)
        self.assertEqual(day_span_inclusive(day, day), 1)
        self.assertEqual(day_span_inclusive(day, dt.date(2024, 1, 5)), 5)
        self.assertEqual(day_span_inclusive(dt.date(2024, 2, 28), dt.date(2024, 3, 1)), 3)

    def test_add_days_handles_negative_offsets_and_month_edges(self) -> None:
        self.assertEqual(add_days(dt.date(2024, 3, 1), -1), dt.date(2024, 2, 29))
        self.assertEqual(add_days(dt.date(2024, 12, 31), 1), dt.date(2025, 1, 1))

    def test_offset_px_scales_days_from_origin(self) -> None:
        origin = dt.date(2024, 1, 1)
        self.assertEqual(days_between(origin, dt.date(2024, 1, 4)), 3)
        self.assertEqual(offset_px(dt.date(2024, 1, 4), origin, 48), 144)
        self.assertEqual(offset_px(origin, origin, 48), 0)

    def test_weekend_range_and_enumeration(self) -> None:
        self.assertTrue(is_weekend_day(dt.date(2024, 1, 6)))
        self.assertTrue(is_weekend_day(dt.date(2024, 1, 7)))
        self.assertFalse(is_weekend_day(dt.date(2024, 1, 8)))
        self.assertTrue(is_date_within_range(dt.date(2024, 1, 5), dt.date(2024, 1, 5), dt.date(2024, 1, 9)))
        self.assertFalse(is_date_within_range(dt.date(2024, 1, 10), dt.date(2024, 1, 5), dt.date(2024, 1, 9)))
        days = enumerate_days(dt.date(2024, 1, 30), 3)
        self.assertEqual(days, (dt.date(2024, 1, 30), dt.date(2024, 1, 31), dt.date(2024, 2, 1)))
        self.assertEqual(enumerate_days(dt.date(2024, 1, 30), 0), ())


class DateRangeTests(unittest.TestCase):
    def test_range_uses_valid_records_only(self) -> None:
        records = [
            {"start": "2024-01-03", "end": "2024-01-09"},
            {"start": "2024-01-01", "end": "2024-01-02"},
            {"start": "2024-02-10", "end": "2024-02-09"},
            {"start": "not-a-day", "end": "2024-03-01"},
            TimelineRecord(record_id=7, start="2024-01-05", end="2024-01-12"),
        ]
        result = date_range(records)
        self.assertEqual(result.start_date, dt.date(2024, 1, 1))
        self.assertEqual(result.end_date, dt.date(2024, 1, 12))
        self.assertEqual(result.total_days, 12)

    def test_empty_range_falls_back_to_today(self) -> None:
        with mock.patch("roadmap_ui.timeline.days.today_utc", return_value=dt.date(2030, 6, 1)):
            result = date_range([{"start": "2024-02-10", "end": "2024-02-09"}])
        self.assertEqual(result.start_date, dt.date(2030, 6, 1))
        self.assertEqual(result.end_date, dt.date(2030, 6, 1))
        self.assertEqual(result.total_days, 1)


if __name__ == "__main__":
    unittest.main()
