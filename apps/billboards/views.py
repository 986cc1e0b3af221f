"""API views for the billboard marketplace and booking requests."""

from __future__ import annotations

import logging
import uuid

from asgiref.sync import async_to_sync
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore

from shared.domain.value_objects import DateRange, InvalidRangeError, parse_calendar_date

from .application.command_handlers import (
    BookingRequestCoordinator,
    BookingRequestState,
    SubmitBookingRequestCommand,
)
from .application.queries import (
    check_billboard_range,
    get_billboard_availability,
    list_profile_requests,
    search_marketplace,
    today,
)
from .exceptions import ConflictError, StorageError
from .filters import BillboardFilterSet
from .infrastructure.django_tables import build_reservation_gateway
from .models import Billboard
from .serializers import (
    AvailabilitySerializer,
    BillboardSerializer,
    BookingRequestCreateSerializer,
    ReservationSerializer,
)

logger = logging.getLogger(__name__)

STORAGE_UNAVAILABLE = "Unable to reach booking storage. Please retry in a moment."
SUBMIT_FAILED = "Unable to submit the booking request. Please retry in a moment."


def _candidate_from_params(params) -> DateRange | None:
    start = (params.get("start_date") or "").strip()
    end = (params.get("end_date") or "").strip()
    if not start and not end:
        return None
    if not start or not end:
        raise InvalidRangeError("start_date and end_date must be given together")
    return DateRange.from_strings(start, end)


def _reference_date_from_params(params):
    raw = (params.get("reference_date") or "").strip()
    return parse_calendar_date(raw) if raw else today()


class GatewayMixin:
    """Builds a fresh storage gateway per request."""

    gateway_factory = staticmethod(build_reservation_gateway)

    def get_gateway(self):
        return self.gateway_factory()


class BillboardViewSet(GatewayMixin, viewsets.ReadOnlyModelViewSet):
    """Marketplace listing, availability and booking requests."""

    queryset = Billboard.objects.all()
    serializer_class = BillboardSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BillboardFilterSet
    lookup_value_regex = "[0-9a-f-]{36}"

    def list(self, request, *args, **kwargs):  # type: ignore
        billboards = list(self.filter_queryset(self.get_queryset()))
        try:
            candidate = _candidate_from_params(request.query_params)
            reference_date = _reference_date_from_params(request.query_params)
        except InvalidRangeError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            entries = async_to_sync(search_marketplace)(
                self.get_gateway(), billboards, candidate, reference_date
            )
        except StorageError as exc:
            logger.error(f"Marketplace search failed: {exc}")
            return Response({"detail": STORAGE_UNAVAILABLE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        context = self.get_serializer_context()
        context["availability"] = {entry.billboard.pk: entry.availability for entry in entries}
        serializer = BillboardSerializer([entry.billboard for entry in entries], many=True, context=context)
        return Response(serializer.data)

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        billboard = self.get_object()
        try:
            verdict = async_to_sync(get_billboard_availability)(self.get_gateway(), billboard)
        except StorageError as exc:
            logger.error(f"Availability lookup for billboard {billboard.pk} failed: {exc}")
            verdict = None
        context = self.get_serializer_context()
        context["availability"] = {billboard.pk: verdict} if verdict else {}
        return Response(BillboardSerializer(billboard, context=context).data)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        billboard = self.get_object()
        try:
            candidate = _candidate_from_params(request.query_params)
            reference_date = _reference_date_from_params(request.query_params)
        except InvalidRangeError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        gateway = self.get_gateway()
        try:
            if candidate is not None:
                verdict = async_to_sync(check_billboard_range)(gateway, billboard.pk, candidate)
            else:
                verdict = async_to_sync(get_billboard_availability)(gateway, billboard, reference_date)
        except StorageError as exc:
            logger.error(f"Availability lookup for billboard {billboard.pk} failed: {exc}")
            return Response({"detail": STORAGE_UNAVAILABLE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        data = dict(AvailabilitySerializer(verdict).data)
        data["billboard_id"] = str(billboard.pk)
        return Response(data)

    @action(detail=True, methods=["post"], url_path="requests")
    def submit_request(self, request, pk=None):  # type: ignore
        billboard = self.get_object()
        serializer = BookingRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        command = SubmitBookingRequestCommand(
            billboard_id=billboard.pk,
            brand_name=data["brand_name"],
            start_date=data["start_date"],
            end_date=data["end_date"],
            message=data["message"],
            profile_id=data["profile_id"],
            budget=data["budget"],
        )
        coordinator = BookingRequestCoordinator(self.get_gateway())
        attempt = async_to_sync(coordinator.submit)(command)

        if attempt.state == BookingRequestState.COMMITTED:
            return Response(ReservationSerializer(attempt.record).data, status=status.HTTP_201_CREATED)

        if attempt.state == BookingRequestState.REJECTED:
            if isinstance(attempt.error, ConflictError):
                return Response(
                    {
                        "detail": "This billboard is already booked for that window. Please pick new dates.",
                        "conflicting_reservation": ReservationSerializer(attempt.conflicting_record).data,
                    },
                    status=status.HTTP_409_CONFLICT,
                )
            return Response({"detail": str(attempt.error)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"detail": SUBMIT_FAILED}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class ProfileRequestListView(GatewayMixin, APIView):
    """Booking requests placed by one profile."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        raw_profile_id = (request.query_params.get("profile_id") or "").strip()
        if not raw_profile_id:
            return Response({"detail": "profile_id is required."}, status=status.HTTP_400_BAD_REQUEST)
        try:
            profile_id = uuid.UUID(raw_profile_id)
        except ValueError:
            return Response({"detail": "profile_id must be a UUID."}, status=status.HTTP_400_BAD_REQUEST)

        try:
            records = async_to_sync(list_profile_requests)(self.get_gateway(), profile_id)
        except StorageError as exc:
            logger.error(f"Loading requests for profile {profile_id} failed: {exc}")
            return Response({"detail": STORAGE_UNAVAILABLE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response(ReservationSerializer(records, many=True).data)
