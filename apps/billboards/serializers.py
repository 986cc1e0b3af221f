"""Serializers for the billboard booking API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Billboard


class AvailabilitySerializer(serializers.Serializer):
    """AvailabilityVerdict as JSON."""

    is_available = serializers.BooleanField()
    label = serializers.CharField()
    tone = serializers.SerializerMethodField()
    conflicting_reservation = serializers.SerializerMethodField()

    def get_tone(self, verdict) -> str:  # type: ignore
        return verdict.tone.value

    def get_conflicting_reservation(self, verdict):  # type: ignore
        if verdict.conflicting_record is None:
            return None
        return ReservationSerializer(verdict.conflicting_record).data


class ReservationSerializer(serializers.Serializer):
    """ReservationRecord as JSON."""

    id = serializers.CharField()
    billboard_id = serializers.CharField(source="asset_id")
    profile_id = serializers.CharField(allow_null=True)
    brand_name = serializers.CharField()
    start_date = serializers.SerializerMethodField()
    end_date = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    message = serializers.CharField()
    created_at = serializers.DateTimeField(allow_null=True)

    def get_start_date(self, record):  # type: ignore
        return record.range.start.isoformat() if record.range else None

    def get_end_date(self, record):  # type: ignore
        return record.range.end.isoformat() if record.range else None

    def get_status(self, record) -> str:  # type: ignore
        return record.status.value


class BookingRequestCreateSerializer(serializers.Serializer):
    """Raw booking request input.

    Dates stay strings here; parsing and range checks belong to the
    coordinator so the API and other callers reject the same input.
    """

    brand_name = serializers.CharField(required=False, allow_blank=True, default="")
    start_date = serializers.CharField(required=False, allow_blank=True, default="")
    end_date = serializers.CharField(required=False, allow_blank=True, default="")
    message = serializers.CharField(required=False, allow_blank=True, default="")
    profile_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    budget = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True,
        default=None,
    )


class BillboardSerializer(serializers.ModelSerializer):
    """Billboard with its current availability (passed via context)."""

    availability = serializers.SerializerMethodField()

    class Meta:
        model = Billboard
        fields = [
            "id",
            "name",
            "location",
            "region",
            "size",
            "price_per_day",
            "description",
            "availability_notes",
            "owner_id",
            "owner_name",
            "impressions",
            "rating",
            "available_from",
            "available_to",
            "created_at",
            "availability",
        ]
        read_only_fields = fields

    def get_availability(self, obj):  # type: ignore
        verdicts = self.context.get("availability", {})
        verdict = verdicts.get(obj.pk)
        if verdict is None:
            return None
        return AvailabilitySerializer(verdict).data
