"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: An inclusive range of whole calendar days (UTC)
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone

from shared.domain.base import ValueObject


class InvalidRangeError(ValueError):
    """Raised for malformed date strings or ranges whose end precedes start."""


def parse_calendar_date(raw: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a calendar date

    Raises InvalidRangeError instead of defaulting when the value has the
    wrong shape or names a day that does not exist (e.g. 2024-02-30).
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidRangeError("Date is required")

    parts = raw.strip().split('-')
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise InvalidRangeError(f"Malformed date {raw!r}, expected YYYY-MM-DD")

    year, month, day = (int(part) for part in parts)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidRangeError(f"Invalid calendar date {raw!r}: {exc}") from exc


def to_calendar_day(value) -> date:
    """Normalize a date, datetime or ISO string to a UTC calendar day."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_calendar_date(value)
    raise InvalidRangeError(f"Unsupported date value: {value!r}")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents the days from start (inclusive) to end (inclusive).
    A billboard is exclusive for the whole day, so a range ending on
    day N and another starting on day N overlap.
    """
    start: date
    end: date

    def __post_init__(self):
        # Normalize datetimes to whole UTC days before validating
        object.__setattr__(self, 'start', to_calendar_day(self.start))
        object.__setattr__(self, 'end', to_calendar_day(self.end))

        if self.end < self.start:
            raise InvalidRangeError(
                f"End date ({self.end.isoformat()}) must not be before "
                f"start date ({self.start.isoformat()})"
            )

    @classmethod
    def parse(cls, raw: str) -> 'DateRange':
        """Parse a single ``YYYY-MM-DD`` day into a one-day range"""
        day = parse_calendar_date(raw)
        return cls(day, day)

    @classmethod
    def from_strings(cls, start: str, end: str) -> 'DateRange':
        """Build a range from two ``YYYY-MM-DD`` strings"""
        return cls(parse_calendar_date(start), parse_calendar_date(end))

    def overlaps(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Both ends are inclusive, so touching ranges overlap.

        Examples:
            - DateRange(06-01, 06-05) overlaps DateRange(06-05, 06-10) -> True
            - DateRange(06-01, 06-05) overlaps DateRange(06-06, 06-10) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return not (self.end < other.start or self.start > other.end)

    def contains(self, day: date) -> bool:
        """Check if a day is within this range (both ends inclusive)"""
        return self.start <= to_calendar_day(day) <= self.end

    def duration_in_days(self) -> int:
        """Whole days between start and end, never negative"""
        return max(0, round((self.end - self.start).total_seconds() / 86400))

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start}, {self.end})"
