"""Errors raised by the billboard booking core."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.domain.value_objects import InvalidRangeError

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .domain.entities import ReservationRecord

__all__ = [
    "BillboardBookingError",
    "ConflictError",
    "InvalidRangeError",
    "RequestValidationError",
    "SchemaNotFoundError",
    "StorageError",
]


class BillboardBookingError(Exception):
    """Base class for booking core errors."""


class RequestValidationError(BillboardBookingError, ValueError):
    """Raised when a booking request is missing required information."""


class ConflictError(BillboardBookingError):
    """Raised when the candidate range overlaps an active reservation."""

    def __init__(self, conflicting_record: "ReservationRecord", message: str | None = None) -> None:
        self.conflicting_record = conflicting_record
        if message is None:
            message = (
                f"Billboard {conflicting_record.asset_id} is already booked "
                f"for {conflicting_record.range}"
            )
        super().__init__(message)


class StorageError(BillboardBookingError):
    """Failure reported by the reservation storage.

    ``code`` is the backend's machine-readable error code when it has one
    (PostgREST ``PGRST205``, Postgres SQLSTATE ``42P01``...).
    """

    def __init__(self, message: str, *, code: str | None = None, table: str | None = None) -> None:
        self.message = message
        self.code = code
        self.table = table
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class SchemaNotFoundError(StorageError):
    """The target table does not exist in this deployment.

    Consumed by the gateway's schema fallback; never shown to end users.
    """
