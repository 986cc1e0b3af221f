"""Tests for the pure availability engine."""

from __future__ import annotations

from datetime import date

from django.test import SimpleTestCase

from shared.domain.value_objects import DateRange

from apps.billboards.domain.availability import (
    active_reservations,
    check_range,
    describe_asset,
    describe_availability,
    describe_declared_window,
    find_conflict,
    is_range_available,
)
from apps.billboards.domain.entities import (
    AvailabilityWindow,
    ReservationRecord,
    ReservationStatus,
    Tone,
)


def record(start: str, end: str, status=ReservationStatus.CONFIRMED, rid="r1") -> ReservationRecord:
    return ReservationRecord(
        id=rid,
        asset_id="board-1",
        range=DateRange.from_strings(start, end),
        status=status,
        brand_name="Acme",
    )


class ReservationStatusTests(SimpleTestCase):
    def test_maps_stored_spellings(self) -> None:
        cases = {
            "pending": ReservationStatus.PENDING,
            "Confirmed": ReservationStatus.CONFIRMED,
            "approved": ReservationStatus.CONFIRMED,
            "canceled": ReservationStatus.CANCELLED,
            "CANCELLED": ReservationStatus.CANCELLED,
            "rejected": ReservationStatus.CANCELLED,
            "refunded": ReservationStatus.REFUNDED,
            "": ReservationStatus.PENDING,
            None: ReservationStatus.PENDING,
            "something-new": ReservationStatus.PENDING,
        }
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                self.assertIs(ReservationStatus.from_raw(raw), expected)

    def test_cancelled_and_refunded_do_not_block(self) -> None:
        self.assertFalse(ReservationStatus.CANCELLED.blocks_dates)
        self.assertFalse(ReservationStatus.REFUNDED.blocks_dates)
        self.assertTrue(ReservationStatus.PENDING.blocks_dates)
        self.assertTrue(ReservationStatus.CONFIRMED.blocks_dates)


class ReservationRecordTests(SimpleTestCase):
    def test_from_row_reads_storage_columns(self) -> None:
        rec = ReservationRecord.from_row(
            {
                "id": 7,
                "billboard_id": "board-1",
                "start_date": "2024-06-01",
                "end_date": "2024-06-05",
                "status": "approved",
                "brand_name": "Acme",
            },
            source_table="billboard_bookings",
        )
        self.assertEqual(rec.range, DateRange.from_strings("2024-06-01", "2024-06-05"))
        self.assertIs(rec.status, ReservationStatus.CONFIRMED)
        self.assertEqual(rec.source_table, "billboard_bookings")
        self.assertTrue(rec.is_active)

    def test_from_row_keeps_cancelled_status(self) -> None:
        rec = ReservationRecord.from_row(
            {"id": 1, "billboard_id": "b", "start_date": "2024-06-01", "end_date": "2024-06-05", "status": "canceled"}
        )
        self.assertIs(rec.status, ReservationStatus.CANCELLED)
        self.assertFalse(rec.is_active)

    def test_from_row_with_malformed_dates_has_no_range(self) -> None:
        for start, end in [("2024-06-xx", "2024-06-05"), (None, "2024-06-05"), ("2024-06-10", "2024-06-01")]:
            with self.subTest(start=start, end=end):
                rec = ReservationRecord.from_row(
                    {"id": 1, "billboard_id": "b", "start_date": start, "end_date": end}
                )
                self.assertIsNone(rec.range)


class RangeAvailabilityTests(SimpleTestCase):
    candidate = DateRange.from_strings("2024-06-10", "2024-06-12")

    def test_empty_or_missing_list_is_available(self) -> None:
        self.assertTrue(is_range_available([], self.candidate))
        self.assertTrue(is_range_available(None, self.candidate))

    def test_overlapping_confirmed_reservation_blocks(self) -> None:
        self.assertFalse(is_range_available([record("2024-06-11", "2024-06-20")], self.candidate))

    def test_pending_reservation_blocks(self) -> None:
        pending = record("2024-06-01", "2024-06-10", status=ReservationStatus.PENDING)
        self.assertFalse(is_range_available([pending], self.candidate))

    def test_cancelled_and_refunded_reservations_are_ignored(self) -> None:
        records = [
            record("2024-06-10", "2024-06-12", status=ReservationStatus.CANCELLED),
            record("2024-06-09", "2024-06-11", status=ReservationStatus.REFUNDED),
        ]
        self.assertTrue(is_range_available(records, self.candidate))

    def test_records_without_dates_are_ignored(self) -> None:
        broken = ReservationRecord(id="x", asset_id="board-1", range=None)
        self.assertTrue(is_range_available([broken], self.candidate))

    def test_find_conflict_returns_first_overlap(self) -> None:
        first = record("2024-06-12", "2024-06-14", rid="first")
        second = record("2024-06-08", "2024-06-10", rid="second")
        self.assertIs(find_conflict([first, second], self.candidate), first)

    def test_find_conflict_skips_unusable_entries(self) -> None:
        blocking = record("2024-06-12", "2024-06-14", rid="blocking")
        records = [
            None,
            ReservationRecord(id="broken", asset_id="board-1", range=None),
            record("2024-06-10", "2024-06-12", status=ReservationStatus.REFUNDED, rid="refunded"),
            blocking,
        ]
        self.assertIs(find_conflict(records, self.candidate), blocking)

    def test_active_reservations_filters_scheduling_irrelevant_records(self) -> None:
        keep = record("2024-06-01", "2024-06-02", rid="keep")
        records = [
            keep,
            record("2024-06-01", "2024-06-02", status=ReservationStatus.CANCELLED, rid="c"),
            ReservationRecord(id="broken", asset_id="board-1", range=None),
        ]
        self.assertEqual(active_reservations(records), [keep])

    def test_check_range_names_the_blocking_dates(self) -> None:
        blocking = record("2024-06-11", "2024-06-20")
        verdict = check_range([blocking], self.candidate)
        self.assertFalse(verdict.is_available)
        self.assertIs(verdict.tone, Tone.BUSY)
        self.assertEqual(verdict.label, "Booked 2024-06-11 - 2024-06-20")
        self.assertIs(verdict.conflicting_record, blocking)

    def test_check_range_available(self) -> None:
        verdict = check_range([record("2024-06-13", "2024-06-20")], self.candidate)
        self.assertTrue(verdict.is_available)
        self.assertIs(verdict.tone, Tone.AVAILABLE)
        self.assertIsNone(verdict.conflicting_record)


class DescribeAvailabilityTests(SimpleTestCase):
    def test_no_reservations(self) -> None:
        verdict = describe_availability([], date(2024, 6, 12))
        self.assertTrue(verdict.is_available)
        self.assertEqual(verdict.label, "Available now")
        self.assertIs(verdict.tone, Tone.AVAILABLE)

    def test_only_cancelled_reservations(self) -> None:
        verdict = describe_availability(
            [record("2024-06-10", "2024-06-15", status=ReservationStatus.CANCELLED)],
            date(2024, 6, 12),
        )
        self.assertEqual(verdict.label, "Available now")

    def test_currently_booked(self) -> None:
        booking = record("2024-06-10", "2024-06-15")
        verdict = describe_availability([booking], date(2024, 6, 12))
        self.assertFalse(verdict.is_available)
        self.assertEqual(verdict.label, "Currently booked")
        self.assertIs(verdict.tone, Tone.BUSY)
        self.assertIs(verdict.conflicting_record, booking)

    def test_currently_booked_on_boundary_days(self) -> None:
        booking = record("2024-06-10", "2024-06-15")
        for day in (date(2024, 6, 10), date(2024, 6, 15)):
            with self.subTest(day=day):
                self.assertEqual(describe_availability([booking], day).label, "Currently booked")

    def test_next_booking_in_future(self) -> None:
        verdict = describe_availability([record("2024-07-01", "2024-07-10")], date(2024, 6, 1))
        self.assertTrue(verdict.is_available)
        self.assertIs(verdict.tone, Tone.AVAILABLE)
        self.assertEqual(verdict.label, "Next booking 2024-07-01")

    def test_next_booking_picks_earliest_upcoming(self) -> None:
        records = [
            record("2024-08-01", "2024-08-05", rid="late"),
            record("2024-05-01", "2024-05-05", rid="past"),
            record("2024-07-01", "2024-07-10", rid="soon"),
        ]
        verdict = describe_availability(records, date(2024, 6, 1))
        self.assertEqual(verdict.label, "Next booking 2024-07-01")

    def test_all_bookings_in_the_past(self) -> None:
        verdict = describe_availability([record("2024-05-01", "2024-05-05")], date(2024, 6, 1))
        self.assertEqual(verdict.label, "Available now")
        self.assertIs(verdict.tone, Tone.AVAILABLE)

    def test_malformed_active_rows_give_limited_availability(self) -> None:
        broken = ReservationRecord(id="broken", asset_id="board-1", range=None)
        verdict = describe_availability([broken, record("2024-05-01", "2024-05-05")], date(2024, 6, 1))
        self.assertFalse(verdict.is_available)
        self.assertEqual(verdict.label, "Limited availability")
        self.assertIs(verdict.tone, Tone.BUSY)

    def test_only_unreadable_active_row_gives_limited_availability(self) -> None:
        broken = ReservationRecord(id="broken", asset_id="board-1", range=None)
        verdict = describe_availability([broken, None], date(2024, 6, 1))
        self.assertEqual(verdict.label, "Limited availability")

    def test_unreadable_cancelled_row_is_ignored(self) -> None:
        broken = ReservationRecord(
            id="broken",
            asset_id="board-1",
            range=None,
            status=ReservationStatus.CANCELLED,
        )
        verdict = describe_availability([broken], date(2024, 6, 1))
        self.assertEqual(verdict.label, "Available now")
        self.assertTrue(verdict.is_available)


class DeclaredWindowTests(SimpleTestCase):
    window = AvailabilityWindow(date(2024, 6, 1), date(2024, 6, 30))

    def test_inside_window(self) -> None:
        verdict = describe_declared_window(self.window, date(2024, 6, 15))
        self.assertTrue(verdict.is_available)
        self.assertEqual(verdict.label, "Available now")
        self.assertIs(verdict.tone, Tone.AVAILABLE)

    def test_window_bounds_are_inclusive(self) -> None:
        self.assertTrue(describe_declared_window(self.window, date(2024, 6, 1)).is_available)
        self.assertTrue(describe_declared_window(self.window, date(2024, 6, 30)).is_available)

    def test_before_window(self) -> None:
        verdict = describe_declared_window(self.window, date(2024, 5, 20))
        self.assertFalse(verdict.is_available)
        self.assertEqual(verdict.label, "Available from 2024-06-01")
        self.assertIs(verdict.tone, Tone.AVAILABLE)

    def test_after_window(self) -> None:
        verdict = describe_declared_window(self.window, date(2024, 7, 2))
        self.assertFalse(verdict.is_available)
        self.assertEqual(verdict.label, "Availability ended 2024-06-30")
        self.assertIs(verdict.tone, Tone.BUSY)

    def test_only_start_bound(self) -> None:
        window = AvailabilityWindow(available_from=date(2024, 6, 1))
        self.assertTrue(describe_declared_window(window, date(2024, 6, 1)).is_available)
        self.assertFalse(describe_declared_window(window, date(2024, 5, 31)).is_available)

    def test_only_end_bound(self) -> None:
        window = AvailabilityWindow(available_to=date(2024, 6, 30))
        self.assertTrue(describe_declared_window(window, date(2024, 6, 30)).is_available)
        verdict = describe_declared_window(window, date(2024, 7, 1))
        self.assertFalse(verdict.is_available)
        self.assertEqual(verdict.label, "Availability ended 2024-06-30")

    def test_window_accepts_iso_strings(self) -> None:
        window = AvailabilityWindow("2024-06-01", "2024-06-30")
        self.assertEqual(window.available_from, date(2024, 6, 1))

    def test_declared_window_overrides_reservations(self) -> None:
        booked_today = [record("2024-06-10", "2024-06-20")]
        verdict = describe_asset(booked_today, date(2024, 6, 15), self.window)
        self.assertEqual(verdict.label, "Available now")
        self.assertTrue(verdict.is_available)

    def test_reservations_used_without_declared_window(self) -> None:
        booked_today = [record("2024-06-10", "2024-06-20")]
        verdict = describe_asset(booked_today, date(2024, 6, 15), AvailabilityWindow())
        self.assertEqual(verdict.label, "Currently booked")
