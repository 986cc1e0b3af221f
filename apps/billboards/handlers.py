"""Message bus handlers for billboard booking events."""

from __future__ import annotations

import logging

from shared.application.message_bus import MessageBus

from .domain.events import ReservationRequested

audit_logger = logging.getLogger("apps.billboards.audit")


def log_reservation_requested(event: ReservationRequested) -> None:
    """Audit trail entry for every stored booking request."""

    audit_logger.info("reservation_requested %s", event.to_dict())


def register_handlers(bus: MessageBus) -> None:
    bus.register_event_handler(ReservationRequested, log_reservation_requested)
