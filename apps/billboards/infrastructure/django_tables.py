"""Reservation tables backed by the Django ORM."""

from __future__ import annotations

import logging
from typing import Any, List

from django.apps import apps as django_apps  # type: ignore
from django.conf import settings  # type: ignore
from django.db import DatabaseError  # type: ignore

from apps.billboards.domain.entities import ReservationDraft, ReservationRecord
from apps.billboards.exceptions import SchemaNotFoundError, StorageError
from apps.billboards.infrastructure.gateway import (
    DEFAULT_SCHEMA_MISSING_CODES,
    DEFAULT_SCHEMA_MISSING_MESSAGES,
    FallbackStorageGateway,
    ReservationTable,
    make_schema_missing_predicate,
)

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for undefined_table
UNDEFINED_TABLE = "42P01"
# PostgREST code for a table missing from the schema cache
TABLE_NOT_FOUND = "PGRST205"


def translate_database_error(exc: DatabaseError, table: str) -> StorageError:
    """Turn a driver error into the storage error taxonomy."""

    cause = exc.__cause__
    code = getattr(cause, "pgcode", None) or getattr(cause, "sqlstate", None)
    message = str(exc)
    lowered = message.lower()
    missing = (
        code == UNDEFINED_TABLE
        or "no such table" in lowered
        or ("relation" in lowered and "does not exist" in lowered)
    )
    if missing:
        return SchemaNotFoundError(
            f"Could not find the table '{table}' in the schema cache",
            code=TABLE_NOT_FOUND,
            table=table,
        )
    return StorageError(message, code=code, table=table)


class DjangoReservationTable(ReservationTable):
    """Reads and writes one reservation model through the async ORM."""

    def __init__(self, model) -> None:
        self.model = model
        self.name = model._meta.db_table

    def _to_record(self, obj) -> ReservationRecord:
        return ReservationRecord.from_row(obj.to_row(), source_table=self.name)

    async def list_for_asset(self, asset_id: Any) -> List[ReservationRecord]:
        queryset = self.model.objects.filter(billboard_id=asset_id).order_by("start_date")
        try:
            rows = [obj async for obj in queryset]
        except DatabaseError as exc:
            raise translate_database_error(exc, self.name) from exc
        return [self._to_record(obj) for obj in rows]

    async def list_for_profile(self, profile_id: Any) -> List[ReservationRecord]:
        queryset = self.model.objects.filter(profile_id=profile_id).order_by("-created_at")
        try:
            rows = [obj async for obj in queryset]
        except DatabaseError as exc:
            raise translate_database_error(exc, self.name) from exc
        return [self._to_record(obj) for obj in rows]

    async def insert(self, draft: ReservationDraft) -> ReservationRecord:
        fields = draft.to_row()
        fields["message"] = fields.get("message") or ""
        try:
            obj = await self.model.objects.acreate(**fields)
        except DatabaseError as exc:
            raise translate_database_error(exc, self.name) from exc
        logger.debug(f"Inserted reservation {obj.pk} into {self.name}")
        return self._to_record(obj)

    def __repr__(self) -> str:
        return f"DjangoReservationTable({self.name})"


def build_reservation_gateway() -> FallbackStorageGateway:
    """Gateway over the models named in ``settings.BILLBOARDS``."""

    config = getattr(settings, "BILLBOARDS", {})
    primary_model = django_apps.get_model(
        config.get("PRIMARY_RESERVATION_MODEL", "billboards.BillboardRequest")
    )
    legacy_model = django_apps.get_model(
        config.get("LEGACY_RESERVATION_MODEL", "billboards.BillboardBooking")
    )
    predicate = make_schema_missing_predicate(
        codes=config.get("SCHEMA_MISSING_CODES", DEFAULT_SCHEMA_MISSING_CODES),
        messages=config.get("SCHEMA_MISSING_MESSAGES", DEFAULT_SCHEMA_MISSING_MESSAGES),
    )
    return FallbackStorageGateway(
        primary=DjangoReservationTable(primary_model),
        legacy=DjangoReservationTable(legacy_model),
        is_schema_missing=predicate,
    )
