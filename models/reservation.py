"""
models/reservation.py
---------------------
Domain model for a guest's reservation of a property.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Reservation:
    """
    Represents a single stay.

    Attributes:
        id: Database primary key (None for new records).
        start_date: First night of the stay.
        end_date: Check-out date.
        property_id: The reserved property.
        guest_id: The user who made the reservation.
    """
    start_date: date
    end_date: date
    property_id: int
    guest_id: int
    id: Optional[int] = None

    def nights(self) -> int:
        """Number of nights booked."""
        return (self.end_date - self.start_date).days
