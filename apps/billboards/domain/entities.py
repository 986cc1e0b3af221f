"""
Billboard Booking Domain Entities

- ReservationStatus: lifecycle states of a reservation
- ReservationRecord: one existing or proposed booking of a billboard
- ReservationDraft: an unsaved booking request handed to storage
- AvailabilityWindow: bounds a billboard declares for itself
- AvailabilityVerdict: derived availability answer (never stored)
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping

from shared.domain.base import ValueObject
from shared.domain.value_objects import DateRange, InvalidRangeError, to_calendar_day


class ReservationStatus(Enum):
    """
    Reservation lifecycle

    Transitions belong to the approval workflow (admin), not to this core:
    - PENDING -> CONFIRMED (approved by the billboard owner)
    - PENDING -> CANCELLED (rejected or withdrawn)
    - CONFIRMED -> CANCELLED
    - CONFIRMED -> REFUNDED
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'

    @classmethod
    def from_raw(cls, raw: Any) -> 'ReservationStatus':
        """
        Map a stored status string to a lifecycle state

        Deployments write several spellings ('approved', 'canceled',
        'rejected'). Unknown values map to PENDING so they keep blocking dates.
        """
        if isinstance(raw, cls):
            return raw
        value = str(raw or '').strip().lower()
        return _STATUS_ALIASES.get(value, cls.PENDING)

    @property
    def blocks_dates(self) -> bool:
        return self not in (ReservationStatus.CANCELLED, ReservationStatus.REFUNDED)


_STATUS_ALIASES = {
    'pending': ReservationStatus.PENDING,
    'confirmed': ReservationStatus.CONFIRMED,
    'approved': ReservationStatus.CONFIRMED,
    'active': ReservationStatus.CONFIRMED,
    'cancelled': ReservationStatus.CANCELLED,
    'canceled': ReservationStatus.CANCELLED,
    'rejected': ReservationStatus.CANCELLED,
    'refunded': ReservationStatus.REFUNDED,
}


class Tone(Enum):
    """Coarse UI signal derived from an availability label"""
    AVAILABLE = 'available'
    BUSY = 'busy'


def _optional_day(value: Any) -> date | None:
    if value in (None, ''):
        return None
    try:
        return to_calendar_day(value)
    except InvalidRangeError:
        return None


@dataclass(frozen=True)
class ReservationRecord:
    """
    A booking of one billboard for a range of days

    The record carries its status faithfully. Cancelled and refunded
    records are kept for audit; they are only excluded from scheduling
    by the availability engine.

    ``range`` is None when the stored row has missing or malformed dates.
    """
    id: Any
    asset_id: Any
    range: DateRange | None
    status: ReservationStatus = ReservationStatus.PENDING
    brand_name: str = ''
    created_at: datetime | None = None
    message: str = ''
    profile_id: Any = None
    source_table: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], *, source_table: str | None = None) -> 'ReservationRecord':
        """Build a record from a storage row (``billboard_id``, ``start_date``...)"""
        start = _optional_day(row.get('start_date'))
        end = _optional_day(row.get('end_date'))
        try:
            date_range = DateRange(start, end) if start and end else None
        except InvalidRangeError:
            date_range = None

        return cls(
            id=row.get('id'),
            asset_id=row.get('billboard_id', row.get('asset_id')),
            range=date_range,
            status=ReservationStatus.from_raw(row.get('status')),
            brand_name=row.get('brand_name') or '',
            created_at=row.get('created_at'),
            message=row.get('message') or '',
            profile_id=row.get('profile_id'),
            source_table=source_table,
        )

    @property
    def is_active(self) -> bool:
        """Active records take part in overlap checks"""
        return self.status.blocks_dates

    def __str__(self):
        return f"Reservation {self.id} ({self.status.value}, {self.range})"


@dataclass(frozen=True)
class ReservationDraft:
    """
    Booking request about to be written to storage

    ``status`` stays None for the primary table, which defaults it;
    the legacy table needs it set explicitly.
    """
    asset_id: Any
    range: DateRange
    brand_name: str
    message: str = ''
    profile_id: Any = None
    budget: Any = None
    status: ReservationStatus | None = None

    def with_status(self, status: ReservationStatus) -> 'ReservationDraft':
        return replace(self, status=status)

    def to_row(self) -> dict:
        row = {
            'billboard_id': self.asset_id,
            'profile_id': self.profile_id,
            'brand_name': self.brand_name,
            'start_date': self.range.start,
            'end_date': self.range.end,
            'message': self.message,
            'budget': self.budget,
        }
        if self.status is not None:
            row['status'] = self.status.value
        return row


@dataclass(frozen=True)
class AvailabilityWindow(ValueObject):
    """Availability bounds a billboard declares independently of bookings"""
    available_from: date | None = None
    available_to: date | None = None

    def __post_init__(self):
        object.__setattr__(self, 'available_from', _optional_day(self.available_from))
        object.__setattr__(self, 'available_to', _optional_day(self.available_to))

    @property
    def is_declared(self) -> bool:
        return self.available_from is not None or self.available_to is not None


@dataclass(frozen=True)
class AvailabilityVerdict(ValueObject):
    """Availability answer for a list or detail view"""
    is_available: bool
    label: str
    tone: Tone
    conflicting_record: ReservationRecord | None = field(default=None, compare=False)
