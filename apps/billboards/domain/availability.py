"""
Availability Engine

Pure scheduling logic for billboards. Nothing here performs I/O; callers
pass in the reservations they fetched and the day they consider "today".

Two ways of describing a billboard exist and they are never merged:
- the billboard declares its own window (available_from / available_to)
- otherwise the label is derived from its reservations
"""

from datetime import date
from typing import Iterable, List, Optional

from shared.domain.value_objects import DateRange

from apps.billboards.domain.entities import (
    AvailabilityVerdict,
    AvailabilityWindow,
    ReservationRecord,
    Tone,
)

AVAILABLE_NOW = 'Available now'
CURRENTLY_BOOKED = 'Currently booked'
LIMITED_AVAILABILITY = 'Limited availability'
AVAILABLE_FOR_RANGE = 'Available for selected dates'


def active_reservations(records: Optional[Iterable[ReservationRecord]]) -> List[ReservationRecord]:
    """Reservations that block dates: not cancelled/refunded, with valid dates"""
    if not records:
        return []
    return [r for r in records if r is not None and r.is_active and r.range is not None]


def find_conflict(
    records: Optional[Iterable[ReservationRecord]],
    candidate: DateRange,
) -> Optional[ReservationRecord]:
    """
    Return the first active reservation overlapping the candidate

    Traversal order is the order of ``records``.
    """
    for record in active_reservations(records):
        if record.range.overlaps(candidate):
            return record
    return None


def is_range_available(
    records: Optional[Iterable[ReservationRecord]],
    candidate: DateRange,
) -> bool:
    """True iff no active reservation overlaps the candidate range"""
    return find_conflict(records, candidate) is None


def check_range(
    records: Optional[Iterable[ReservationRecord]],
    candidate: DateRange,
) -> AvailabilityVerdict:
    """Verdict for a specific candidate range, naming the blocking dates"""
    conflict = find_conflict(records, candidate)
    if conflict is None:
        return AvailabilityVerdict(True, AVAILABLE_FOR_RANGE, Tone.AVAILABLE)
    return AvailabilityVerdict(
        False,
        f"Booked {conflict.range}",
        Tone.BUSY,
        conflicting_record=conflict,
    )


def describe_availability(
    records: Optional[Iterable[ReservationRecord]],
    reference_date: date,
) -> AvailabilityVerdict:
    """
    Browse-view label for a billboard, derived from its reservations

    Order of checks:
    1. nothing active -> "Available now"
    2. earliest still-relevant reservation covers today -> "Currently booked"
    3. it starts later -> "Next booking <start>"
    4. otherwise -> "Limited availability"
    """
    records = [r for r in (records or []) if r is not None]
    scheduled = active_reservations(records)
    # Active rows with unreadable dates might still be live
    unreadable = any(r.is_active and r.range is None for r in records)

    upcoming = sorted(
        (r for r in scheduled if r.range.end >= reference_date),
        key=lambda r: r.range.start,
    )

    if not upcoming:
        # Every well-formed booking is in the past (or there are none)
        if unreadable:
            return AvailabilityVerdict(False, LIMITED_AVAILABILITY, Tone.BUSY)
        return AvailabilityVerdict(True, AVAILABLE_NOW, Tone.AVAILABLE)

    next_upcoming = upcoming[0]
    if next_upcoming.range.contains(reference_date):
        return AvailabilityVerdict(
            False,
            CURRENTLY_BOOKED,
            Tone.BUSY,
            conflicting_record=next_upcoming,
        )

    if next_upcoming.range.start > reference_date:
        return AvailabilityVerdict(
            True,
            f"Next booking {next_upcoming.range.start.isoformat()}",
            Tone.AVAILABLE,
        )

    return AvailabilityVerdict(False, LIMITED_AVAILABILITY, Tone.BUSY)


def describe_declared_window(window: AvailabilityWindow, reference_date: date) -> AvailabilityVerdict:
    """
    Label for a billboard that declares its own availability window

    The tone follows the label: anything starting with "Available"
    (including "Available from ...") is shown as available.
    """
    start, end = window.available_from, window.available_to

    if start is not None and end is not None:
        is_available = start <= reference_date <= end
        if is_available:
            label = AVAILABLE_NOW
        elif reference_date < start:
            label = f"Available from {start.isoformat()}"
        else:
            label = f"Availability ended {end.isoformat()}"
    elif start is not None:
        is_available = reference_date >= start
        label = AVAILABLE_NOW if is_available else f"Available from {start.isoformat()}"
    elif end is not None:
        is_available = reference_date <= end
        label = AVAILABLE_NOW if is_available else f"Availability ended {end.isoformat()}"
    else:
        raise ValueError("Availability window declares no bounds")

    tone = Tone.AVAILABLE if label.startswith('Available') else Tone.BUSY
    return AvailabilityVerdict(is_available, label, tone)


def describe_asset(
    records: Optional[Iterable[ReservationRecord]],
    reference_date: date,
    window: Optional[AvailabilityWindow] = None,
) -> AvailabilityVerdict:
    """Pick the declared-window path or the reservation path for one billboard"""
    if window is not None and window.is_declared:
        return describe_declared_window(window, reference_date)
    return describe_availability(records, reference_date)
