"""
Billboard Booking Domain Events

Published on the message bus after a booking request is stored.
"""

from dataclasses import dataclass
from typing import Any

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange


@dataclass
class ReservationRequested(DomainEvent):
    """
    Event: A booking request was written to storage

    Triggers:
    - Audit log entry
    - Owner review in the approval workflow
    """
    reservation_id: Any = None
    billboard_id: Any = None
    brand_name: str = ''
    dates: DateRange | None = None
    source_table: str | None = None
    profile_id: Any = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'reservation_id': str(self.reservation_id),
            'billboard_id': str(self.billboard_id),
            'brand_name': self.brand_name,
            'dates': str(self.dates) if self.dates else None,
            'source_table': self.source_table,
            'profile_id': str(self.profile_id) if self.profile_id is not None else None,
        })
        return data
