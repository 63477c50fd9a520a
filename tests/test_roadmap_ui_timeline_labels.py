from __future__ import annotations

import datetime as dt
import unittest

from roadmap_ui.timeline.labels import (
    format_day_name,
    format_day_number,
    format_month_day,
    format_month_range_label,
    format_numeric_date,
    format_range_summary,
)


class TimelineLabelTests(unittest.TestCase):
    def test_day_labels(self) -> None:
        day = dt.date(2024, 3, 5)
        self.assertEqual(format_day_name(day), "Tue")
        self.assertEqual(format_day_number(day), "5")
        self.assertEqual(format_month_day(day), "Mar 5")
        self.assertEqual(format_numeric_date(day), "03/05/2024")

    def test_month_range_label_collapses_shared_parts(self) -> None:
        self.assertEqual(format_month_range_label(dt.date(2024, 3, 1), dt.date(2024, 3, 31)), "March 2024")
        self.assertEqual(format_month_range_label(dt.date(2024, 3, 5), dt.date(2024, 4, 2)), "March - April 2024")
        self.assertEqual(
            format_month_range_label(dt.date(2024, 12, 30), dt.date(2025, 1, 2)),
            "December 2024 - January 2025",
        )

    def test_range_summary(self) -> None:
        self.assertEqual(format_range_summary(dt.date(2024, 3, 5), dt.date(2024, 4, 2)), "Mar 5 - Apr 2, 2024")
        self.assertEqual(
            format_range_summary(dt.date(2024, 12, 30), dt.date(2025, 1, 2)),
            "Dec 30, 2024 - Jan 2, 2025",
        )


if __name__ == "__main__":
    unittest.main()
