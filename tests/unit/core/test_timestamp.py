"""Tests for timestamp code expansion."""

from __future__ import annotations

import unittest
from datetime import date

from docmenu.timestamp import day_with_suffix, format_timestamp


class TimestampTests(unittest.TestCase):
    def test_numeric_codes(self) -> None:
        self.assertEqual(format_timestamp("Updated mm/dd/yyyy", date(2024, 3, 7)), "Updated 03/07/2024")
        self.assertEqual(format_timestamp("m-d-yy", date(2009, 11, 5)), "11-5-09")

    def test_named_codes(self) -> None:
        self.assertEqual(format_timestamp("Generated month day, year", date(2024, 3, 22)), "Generated March 22nd, 2024")
        self.assertEqual(format_timestamp("day mon yyyy", date(2024, 12, 13)), "13th Dec 2024")

    def test_codes_inside_words_are_left_alone(self) -> None:
        self.assertEqual(format_timestamp("Monday", date(2024, 1, 1)), "Monday")

    def test_day_suffixes(self) -> None:
        days = [1, 2, 3, 4, 11, 12, 13, 21, 22, 23, 31]
        self.assertEqual(
            [day_with_suffix(day) for day in days],
            ["1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "23rd", "31st"],
        )


if __name__ == "__main__":
    unittest.main()
