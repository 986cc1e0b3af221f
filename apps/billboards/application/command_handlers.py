"""
Billboard Booking Command Handlers

Commands:
- SubmitBookingRequestCommand: ask to book a billboard for a date range

The coordinator runs every submission through a small state machine:

    VALIDATING -> CHECKING -> COMMITTING -> COMMITTED
        |             |            |
        v             v            v
     REJECTED   REJECTED/FAILED  FAILED

Rejections need new input from the user; failures need the user to retry.
Nothing is retried automatically apart from the gateway's one-shot
legacy-table fallback.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, List, Optional
import logging

from shared.application.message_bus import MessageBus, message_bus as default_message_bus
from shared.domain.value_objects import DateRange, InvalidRangeError

from apps.billboards.domain.availability import find_conflict
from apps.billboards.domain.entities import ReservationDraft, ReservationRecord
from apps.billboards.domain.events import ReservationRequested
from apps.billboards.exceptions import ConflictError, RequestValidationError, StorageError
from apps.billboards.infrastructure.gateway import StorageGateway

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class SubmitBookingRequestCommand:
    """
    Command to request a billboard for a date range

    Dates may be ``date`` objects or raw ``YYYY-MM-DD`` strings from a form.
    """
    billboard_id: Any
    brand_name: Optional[str]
    start_date: Any
    end_date: Any
    message: str = ''
    profile_id: Any = None
    budget: Any = None


# ===== State machine =====

class BookingRequestState(Enum):
    VALIDATING = 'validating'
    CHECKING = 'checking'
    COMMITTING = 'committing'
    COMMITTED = 'committed'
    REJECTED = 'rejected'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset({
    BookingRequestState.COMMITTED,
    BookingRequestState.REJECTED,
    BookingRequestState.FAILED,
})

ALLOWED_TRANSITIONS = {
    BookingRequestState.VALIDATING: {BookingRequestState.CHECKING, BookingRequestState.REJECTED},
    BookingRequestState.CHECKING: {
        BookingRequestState.COMMITTING,
        BookingRequestState.REJECTED,
        BookingRequestState.FAILED,
    },
    BookingRequestState.COMMITTING: {BookingRequestState.COMMITTED, BookingRequestState.FAILED},
}


@dataclass
class BookingAttempt:
    """
    One run of the booking state machine

    Holds no locks; a caller that loses interest can simply drop it.
    """
    command: SubmitBookingRequestCommand
    state: BookingRequestState = BookingRequestState.VALIDATING
    dates: Optional[DateRange] = None
    record: Optional[ReservationRecord] = None
    error: Optional[Exception] = None
    history: List[BookingRequestState] = field(default_factory=list)

    def __post_init__(self):
        self.history.append(self.state)

    def transition_to(self, state: BookingRequestState):
        if state not in ALLOWED_TRANSITIONS.get(self.state, set()):
            raise ValueError(
                f"Cannot move booking request from {self.state.value} to {state.value}"
            )
        self.state = state
        self.history.append(state)

    def reject(self, error: Exception) -> 'BookingAttempt':
        self.error = error
        self.transition_to(BookingRequestState.REJECTED)
        return self

    def fail(self, error: Exception) -> 'BookingAttempt':
        self.error = error
        self.transition_to(BookingRequestState.FAILED)
        return self

    @property
    def conflicting_record(self) -> Optional[ReservationRecord]:
        if isinstance(self.error, ConflictError):
            return self.error.conflicting_record
        return None

    @property
    def succeeded(self) -> bool:
        return self.state == BookingRequestState.COMMITTED


# ===== Coordinator =====

class BookingRequestCoordinator:
    """
    Handler for SubmitBookingRequest

    Validates locally, re-reads the billboard's reservations, checks for
    overlap and asks the gateway to store the request.

    The check and the insert are two separate storage calls, so concurrent
    requests for overlapping dates can both be accepted. Each check re-reads
    storage, which therefore has to be read-after-write consistent.
    """

    def __init__(self, gateway: StorageGateway, bus: Optional[MessageBus] = None):
        self.gateway = gateway
        self.bus = bus or default_message_bus

    async def submit(self, command: SubmitBookingRequestCommand) -> BookingAttempt:
        attempt = BookingAttempt(command=command)

        # VALIDATING: no I/O before the input is sane
        try:
            attempt.dates = self._validate(command)
        except (RequestValidationError, InvalidRangeError) as exc:
            logger.info(f"Booking request for billboard {command.billboard_id} rejected: {exc}")
            return attempt.reject(exc)
        attempt.transition_to(BookingRequestState.CHECKING)

        # CHECKING
        try:
            reservations = await self.gateway.list_reservations_for_asset(command.billboard_id)
        except StorageError as exc:
            logger.error(
                f"Could not load reservations for billboard {command.billboard_id}: {exc}"
            )
            return attempt.fail(exc)

        conflict = find_conflict(reservations, attempt.dates)
        if conflict is not None:
            logger.info(
                f"Booking request {attempt.dates} for billboard {command.billboard_id} "
                f"overlaps reservation {conflict.id} ({conflict.range})"
            )
            return attempt.reject(ConflictError(conflict))
        attempt.transition_to(BookingRequestState.COMMITTING)

        # COMMITTING
        draft = ReservationDraft(
            asset_id=command.billboard_id,
            range=attempt.dates,
            brand_name=command.brand_name.strip(),
            message=(command.message or '').strip(),
            profile_id=command.profile_id,
            budget=command.budget,
        )
        try:
            record = await self.gateway.insert_reservation(draft)
        except StorageError as exc:
            logger.error(
                f"Storing booking request for billboard {command.billboard_id} failed: {exc}"
            )
            return attempt.fail(exc)

        attempt.record = record
        attempt.transition_to(BookingRequestState.COMMITTED)
        logger.info(
            f"Booking request {record.id} stored in {record.source_table} "
            f"for billboard {command.billboard_id}, dates {attempt.dates}"
        )

        self.bus.publish_events([ReservationRequested(
            aggregate_id=record.id,
            reservation_id=record.id,
            billboard_id=command.billboard_id,
            brand_name=draft.brand_name,
            dates=attempt.dates,
            source_table=record.source_table,
            profile_id=command.profile_id,
        )])
        return attempt

    @staticmethod
    def _validate(command: SubmitBookingRequestCommand) -> DateRange:
        if not (command.brand_name or '').strip():
            raise RequestValidationError("Brand name is required")
        if _is_missing(command.start_date) or _is_missing(command.end_date):
            raise RequestValidationError("Start date and end date are required")
        return DateRange(_coerce_day(command.start_date), _coerce_day(command.end_date))


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_day(value: Any) -> date:
    # DateRange normalizes dates and datetimes; strings go through the parser
    if isinstance(value, str):
        return DateRange.parse(value).start
    return value
