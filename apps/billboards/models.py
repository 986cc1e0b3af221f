"""Billboard marketplace models."""

from __future__ import annotations

import uuid
from typing import Any

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Billboard(models.Model):
    """Рекламная поверхность, которую можно забронировать."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True)
    region = models.CharField(max_length=100, blank=True, db_index=True)
    size = models.CharField(max_length=50, blank=True)
    price_per_day = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    description = models.TextField(blank=True)
    availability_notes = models.TextField(blank=True)
    owner_id = models.UUIDField(null=True, blank=True)
    owner_name = models.CharField(max_length=255, blank=True)
    impressions = models.PositiveIntegerField(null=True, blank=True)
    rating = models.DecimalField(max_digits=3, decimal_places=2, null=True, blank=True)
    available_from = models.DateField(
        null=True,
        blank=True,
        help_text=_("Declared start of availability; overrides booking-derived status."),
    )
    available_to = models.DateField(
        null=True,
        blank=True,
        help_text=_("Declared end of availability; overrides booking-derived status."),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "billboards"
        verbose_name = _("Billboard")
        verbose_name_plural = _("Billboards")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class ReservationRow(models.Model):
    """Columns shared by the request and booking tables."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        CONFIRMED = "confirmed", _("Confirmed")
        REJECTED = "rejected", _("Rejected")
        CANCELLED = "cancelled", _("Cancelled")
        REFUNDED = "refunded", _("Refunded")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile_id = models.UUIDField(null=True, blank=True, db_index=True)
    brand_name = models.CharField(max_length=255)
    start_date = models.DateField()
    end_date = models.DateField()
    message = models.TextField(blank=True, default="")
    budget = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    rejection_reason = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.brand_name} {self.start_date} - {self.end_date} ({self.status})"

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "billboard_id": self.billboard_id,
            "profile_id": self.profile_id,
            "brand_name": self.brand_name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "message": self.message,
            "status": self.status,
            "created_at": self.created_at,
        }


class BillboardRequest(ReservationRow):
    """Booking request (primary table)."""

    billboard = models.ForeignKey(
        Billboard,
        on_delete=models.CASCADE,
        related_name="requests",
    )
    status = models.CharField(
        max_length=20,
        choices=ReservationRow.Status.choices,
        default=ReservationRow.Status.PENDING,
    )

    class Meta(ReservationRow.Meta):
        db_table = "billboard_requests"
        verbose_name = _("Billboard request")
        verbose_name_plural = _("Billboard requests")
        indexes = [
            models.Index(fields=["billboard", "start_date", "end_date"], name="bb_request_dates_idx"),
        ]


class BillboardBooking(ReservationRow):
    """Booking (legacy table). Status has no default and must be written."""

    billboard = models.ForeignKey(
        Billboard,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    status = models.CharField(max_length=20, choices=ReservationRow.Status.choices)

    class Meta(ReservationRow.Meta):
        db_table = "billboard_bookings"
        verbose_name = _("Billboard booking")
        verbose_name_plural = _("Billboard bookings")
        indexes = [
            models.Index(fields=["billboard", "start_date", "end_date"], name="bb_booking_dates_idx"),
        ]
