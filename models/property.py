"""
models/property.py
------------------
Domain model for rental property listings.
"""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class Property:
    """
    Represents a listed property.

    Attributes:
        id: Database primary key (None for new records).
        owner_id: The user who lists the property.
        cost_per_night: Nightly cost in cents.
        average_rating: Mean review rating; only set on search results,
            None when the property has no reviews.
    """
    owner_id: int
    title: str
    thumbnail_photo_url: str
    cover_photo_url: str
    country: str
    street: str
    city: str
    province: str
    post_code: str
    cost_per_night: int = 0
    description: Optional[str] = None
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    active: bool = True
    id: Optional[int] = None
    average_rating: Optional[float] = None

    @classmethod
    def from_row(cls, row: dict) -> "Property":
        """Build a Property from a row dict, ignoring unknown columns."""
        names = {f.name for f in fields(cls)}
        data = {k: v for k, v in row.items() if k in names}
        if data.get("average_rating") is not None:
            data["average_rating"] = float(data["average_rating"])
        return cls(**data)

    @property
    def price_per_night(self) -> float:
        """Nightly cost in major currency units."""
        return self.cost_per_night / 100

    def __str__(self) -> str:
        return f"{self.title} | {self.city} | {self.price_per_night:.2f}/night"
