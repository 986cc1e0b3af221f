"""
Read-side use cases for the billboard marketplace.

Every query re-reads reservations from the gateway; reservation lists are
never cached between calls.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Optional
import asyncio
import logging

from django.utils import timezone  # type: ignore

from shared.domain.value_objects import DateRange

from apps.billboards.domain.availability import check_range, describe_asset, is_range_available
from apps.billboards.domain.entities import AvailabilityVerdict, AvailabilityWindow, ReservationRecord
from apps.billboards.infrastructure.gateway import StorageGateway

logger = logging.getLogger(__name__)


def today() -> date:
    """Reference day for availability labels (UTC calendar day)"""
    return timezone.now().date()


def window_for(billboard) -> AvailabilityWindow:
    return AvailabilityWindow(
        available_from=getattr(billboard, 'available_from', None),
        available_to=getattr(billboard, 'available_to', None),
    )


@dataclass
class MarketplaceEntry:
    billboard: Any
    availability: AvailabilityVerdict


async def get_billboard_availability(
    gateway: StorageGateway,
    billboard,
    reference_date: Optional[date] = None,
) -> AvailabilityVerdict:
    """Browse label for one billboard"""
    reference_date = reference_date or today()
    window = window_for(billboard)
    if window.is_declared:
        # Declared window wins; reservations are not consulted
        return describe_asset([], reference_date, window)
    reservations = await gateway.list_reservations_for_asset(billboard.pk)
    return describe_asset(reservations, reference_date)


async def check_billboard_range(
    gateway: StorageGateway,
    billboard_id: Any,
    candidate: DateRange,
) -> AvailabilityVerdict:
    """Can ``candidate`` be booked on this billboard right now?"""
    reservations = await gateway.list_reservations_for_asset(billboard_id)
    return check_range(reservations, candidate)


async def search_marketplace(
    gateway: StorageGateway,
    billboards: Iterable[Any],
    candidate: Optional[DateRange] = None,
    reference_date: Optional[date] = None,
) -> List[MarketplaceEntry]:
    """
    Pair each billboard with its availability

    With a candidate window, billboards whose active reservations overlap
    it are left out. Region and price filtering happen before this call.
    """
    reference_date = reference_date or today()
    billboards = list(billboards)
    reservation_lists = await asyncio.gather(
        *(gateway.list_reservations_for_asset(board.pk) for board in billboards)
    )

    entries = []
    for board, reservations in zip(billboards, reservation_lists):
        if candidate is not None and not is_range_available(reservations, candidate):
            continue
        entries.append(MarketplaceEntry(
            billboard=board,
            availability=describe_asset(reservations, reference_date, window_for(board)),
        ))

    logger.debug(
        f"Marketplace search matched {len(entries)} of {len(billboards)} billboards "
        f"(window: {candidate or 'any'})"
    )
    return entries


async def list_profile_requests(gateway: StorageGateway, profile_id: Any) -> List[ReservationRecord]:
    """A profile's booking requests, newest first"""
    records = await gateway.list_reservations_for_profile(profile_id)
    return sorted(
        records,
        key=lambda r: (r.created_at is not None, r.created_at),
        reverse=True,
    )
