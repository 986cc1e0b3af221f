"""Tests for the DateRange value object."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from django.test import SimpleTestCase

from shared.domain.value_objects import DateRange, InvalidRangeError, parse_calendar_date


def dr(start: str, end: str) -> DateRange:
    return DateRange.from_strings(start, end)


class ParseCalendarDateTests(SimpleTestCase):
    def test_parses_iso_day(self) -> None:
        self.assertEqual(parse_calendar_date("2024-06-01"), date(2024, 6, 1))

    def test_single_day_range(self) -> None:
        day = DateRange.parse("2024-06-01")
        self.assertEqual(day.start, date(2024, 6, 1))
        self.assertEqual(day.end, date(2024, 6, 1))

    def test_rejects_malformed_values(self) -> None:
        for raw in ["", "   ", "2024-06", "2024/06/01", "2024-06-aa", "06-01", "2024-06-01-02"]:
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidRangeError):
                    DateRange.parse(raw)

    def test_rejects_impossible_calendar_days(self) -> None:
        for raw in ["2024-02-30", "2023-02-29", "2024-13-01", "2024-00-10"]:
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidRangeError):
                    parse_calendar_date(raw)

    def test_accepts_leap_day(self) -> None:
        self.assertEqual(parse_calendar_date("2024-02-29"), date(2024, 2, 29))

    def test_invalid_range_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_calendar_date("nope")


class DateRangeConstructionTests(SimpleTestCase):
    def test_end_before_start_is_rejected(self) -> None:
        with self.assertRaises(InvalidRangeError):
            dr("2024-06-10", "2024-06-01")

    def test_same_day_range_is_valid(self) -> None:
        self.assertEqual(dr("2024-06-01", "2024-06-01").duration_in_days(), 0)

    def test_datetimes_are_normalized_to_utc_days(self) -> None:
        # 23:30 at UTC-5 is already the next day in UTC
        eastern = timezone(timedelta(hours=-5))
        value = DateRange(datetime(2024, 6, 1, 23, 30, tzinfo=eastern), date(2024, 6, 3))
        self.assertEqual(value.start, date(2024, 6, 2))
        self.assertEqual(value.end, date(2024, 6, 3))

    def test_is_immutable(self) -> None:
        value = dr("2024-06-01", "2024-06-05")
        with self.assertRaises(Exception):
            value.start = date(2024, 1, 1)  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        self.assertEqual(dr("2024-06-01", "2024-06-05"), DateRange(date(2024, 6, 1), date(2024, 6, 5)))

    def test_str_uses_iso_dates(self) -> None:
        self.assertEqual(str(dr("2024-06-01", "2024-06-05")), "2024-06-01 - 2024-06-05")


class DateRangeOverlapTests(SimpleTestCase):
    def test_touching_ranges_overlap(self) -> None:
        self.assertTrue(dr("2024-06-01", "2024-06-05").overlaps(dr("2024-06-05", "2024-06-10")))

    def test_disjoint_ranges_do_not_overlap(self) -> None:
        self.assertFalse(dr("2024-06-01", "2024-06-05").overlaps(dr("2024-06-06", "2024-06-10")))

    def test_contained_range_overlaps(self) -> None:
        self.assertTrue(dr("2024-06-01", "2024-06-30").overlaps(dr("2024-06-10", "2024-06-12")))

    def test_overlap_is_reflexive_and_symmetric(self) -> None:
        ranges = [
            dr("2024-06-01", "2024-06-05"),
            dr("2024-06-05", "2024-06-10"),
            dr("2024-06-06", "2024-06-06"),
            dr("2024-05-20", "2024-06-02"),
            dr("2024-07-01", "2024-07-31"),
        ]
        for first in ranges:
            self.assertTrue(first.overlaps(first))
            for second in ranges:
                with self.subTest(first=str(first), second=str(second)):
                    self.assertEqual(first.overlaps(second), second.overlaps(first))

    def test_overlap_requires_date_range(self) -> None:
        with self.assertRaises(TypeError):
            dr("2024-06-01", "2024-06-05").overlaps(date(2024, 6, 1))  # type: ignore[arg-type]


class DateRangeDurationTests(SimpleTestCase):
    def test_duration_counts_whole_days(self) -> None:
        self.assertEqual(dr("2024-06-01", "2024-06-05").duration_in_days(), 4)

    def test_duration_across_month_boundary(self) -> None:
        self.assertEqual(dr("2024-02-28", "2024-03-01").duration_in_days(), 2)

    def test_contains_is_inclusive(self) -> None:
        value = dr("2024-06-01", "2024-06-05")
        self.assertTrue(value.contains(date(2024, 6, 1)))
        self.assertTrue(value.contains(date(2024, 6, 5)))
        self.assertFalse(value.contains(date(2024, 6, 6)))
