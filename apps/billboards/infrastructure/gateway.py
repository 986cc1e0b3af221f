"""
Reservation Storage Gateway

Callers see one gateway. Behind it, reservations live either in the
primary ``billboard_requests`` table or, in older deployments, only in
the legacy ``billboard_bookings`` table. The gateway tries the primary
table first and falls back to the legacy one only when the failure says
the primary table does not exist.

Read and write paths share one ``is_schema_missing`` predicate so they
always agree on which table is authoritative.

Known gap: listing and inserting are separate calls, so two clients can
both pass the conflict check for overlapping ranges before either writes.
Closing it needs an exclusion constraint or a per-billboard lock in the
database.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Iterable, List, NoReturn, TypeVar

from apps.billboards.domain.entities import ReservationDraft, ReservationRecord, ReservationStatus
from apps.billboards.exceptions import SchemaNotFoundError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SchemaMissingPredicate = Callable[[BaseException], bool]

DEFAULT_SCHEMA_MISSING_CODES = ("PGRST205", "42P01")
DEFAULT_SCHEMA_MISSING_MESSAGES = ("could not find the table",)


def make_schema_missing_predicate(
    codes: Iterable[str] = DEFAULT_SCHEMA_MISSING_CODES,
    messages: Iterable[str] = DEFAULT_SCHEMA_MISSING_MESSAGES,
) -> SchemaMissingPredicate:
    """
    Build the "table not found" detector

    Matches when the error code contains one of ``codes`` or the message
    contains one of ``messages`` (both case-insensitive).
    """
    upper_codes = tuple(code.upper() for code in codes if code)
    lower_messages = tuple(text.lower() for text in messages if text)

    def is_schema_missing(exc: BaseException) -> bool:
        if isinstance(exc, SchemaNotFoundError):
            return True
        code = str(getattr(exc, "code", "") or "").upper()
        if code and any(candidate in code for candidate in upper_codes):
            return True
        message = str(getattr(exc, "message", None) or exc).lower()
        return any(text in message for text in lower_messages)

    return is_schema_missing


is_schema_missing_error = make_schema_missing_predicate()


class ReservationTable(ABC):
    """One physical table holding reservation rows"""

    name: str = ""

    @abstractmethod
    async def list_for_asset(self, asset_id: Any) -> List[ReservationRecord]:
        """All reservations of a billboard, whatever their status"""

    @abstractmethod
    async def list_for_profile(self, profile_id: Any) -> List[ReservationRecord]:
        """All reservations requested by a profile, newest first"""

    @abstractmethod
    async def insert(self, draft: ReservationDraft) -> ReservationRecord:
        """Write a new reservation row and return it"""


class StorageGateway(ABC):
    """Storage operations the booking core depends on"""

    @abstractmethod
    async def list_reservations_for_asset(self, asset_id: Any) -> List[ReservationRecord]:
        pass

    @abstractmethod
    async def list_reservations_for_profile(self, profile_id: Any) -> List[ReservationRecord]:
        pass

    @abstractmethod
    async def insert_reservation(self, draft: ReservationDraft) -> ReservationRecord:
        pass


class FallbackStorageGateway(StorageGateway):
    """
    Gateway trying the primary table, then the legacy one

    Only a schema-missing failure triggers the single legacy attempt.
    Permission, constraint and network failures are not retried; they
    propagate as StorageError (unchanged if they already are one).
    """

    def __init__(
        self,
        primary: ReservationTable,
        legacy: ReservationTable,
        is_schema_missing: SchemaMissingPredicate = is_schema_missing_error,
    ):
        self.primary = primary
        self.legacy = legacy
        self.is_schema_missing = is_schema_missing

    async def list_reservations_for_asset(self, asset_id: Any) -> List[ReservationRecord]:
        return await self._with_fallback(
            "list reservations for billboard",
            lambda table: table.list_for_asset(asset_id),
        )

    async def list_reservations_for_profile(self, profile_id: Any) -> List[ReservationRecord]:
        return await self._with_fallback(
            "list reservations for profile",
            lambda table: table.list_for_profile(profile_id),
        )

    async def insert_reservation(self, draft: ReservationDraft) -> ReservationRecord:
        # The legacy table has no default status, so the fallback write
        # always carries an explicit PENDING.
        return await self._with_fallback(
            "insert reservation",
            lambda table: table.insert(draft),
            legacy_operation=lambda table: table.insert(draft.with_status(ReservationStatus.PENDING)),
        )

    async def _with_fallback(
        self,
        description: str,
        operation: Callable[[ReservationTable], Awaitable[T]],
        legacy_operation: Callable[[ReservationTable], Awaitable[T]] | None = None,
    ) -> T:
        try:
            return await operation(self.primary)
        except Exception as exc:
            if not self.is_schema_missing(exc):
                raise_as_storage_error(exc, self.primary.name)
            logger.warning(
                f"{self.primary.name} missing ({exc}); "
                f"retrying '{description}' against {self.legacy.name}"
            )

        try:
            return await (legacy_operation or operation)(self.legacy)
        except Exception as exc:
            if self.is_schema_missing(exc):
                logger.error(
                    f"Neither {self.primary.name} nor {self.legacy.name} exists; "
                    f"cannot {description}"
                )
                raise StorageError(
                    "Reservation storage is not available",
                    code=getattr(exc, "code", None),
                    table=self.legacy.name,
                ) from exc
            raise_as_storage_error(exc, self.legacy.name)


def raise_as_storage_error(exc: Exception, table: str) -> NoReturn:
    """Re-raise ``exc`` so that callers only ever see StorageError."""
    if isinstance(exc, StorageError):
        raise exc
    logger.error(f"Unexpected {type(exc).__name__} from {table}: {exc}", exc_info=exc)
    raise StorageError(str(exc), code=getattr(exc, "code", None), table=table) from exc
