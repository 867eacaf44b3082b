"""
repositories/property_repo.py
------------------------------
Data access layer for property listings, including the filtered search.
"""

from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.property import Property
from queries.property_search import SearchCriteria, build_property_search
from utils.logger import get_logger

logger = get_logger(__name__)

_INSERT_COLUMNS = (
    "owner_id", "title", "description", "thumbnail_photo_url", "cover_photo_url",
    "cost_per_night", "parking_spaces", "number_of_bathrooms", "number_of_bedrooms",
    "country", "street", "city", "province", "post_code", "active",
)


class PropertyRepository:
    """Repository for CRUD operations on the properties table."""

    def __init__(self, db: Database, include_unreviewed: Optional[bool] = None):
        self.db = db
        self.include_unreviewed = include_unreviewed

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Property) -> Property:
        """
        Insert a new property listing.

        Args:
            prop: The Property to persist (cost_per_night in cents).

        Returns:
            The same Property with its `id` populated.
        """
        sql = (
            f"INSERT INTO properties ({', '.join(_INSERT_COLUMNS)}) "
            f"VALUES ({', '.join(['%s'] * len(_INSERT_COLUMNS))}) "
            "RETURNING *;"
        )
        row = self.db.execute_returning(sql, [getattr(prop, c) for c in _INSERT_COLUMNS])
        prop.id = row["id"]
        logger.info(f"Added property #{prop.id} for owner {prop.owner_id}")
        return prop

    # ── READ ──────────────────────────────────────────────

    def get_all(
        self,
        criteria: Union[SearchCriteria, Mapping[str, Any], None] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """
        Search properties, cheapest first, with their average rating.

        Args:
            criteria: Any of owner_id, city, minimum_price_per_night,
                maximum_price_per_night, minimum_rating.
            limit: Maximum number of properties.

        Returns:
            List of Property objects with `average_rating` set.

        Raises:
            QueryError: If the search could not be executed.
        """
        plan = build_property_search(criteria, limit, self.include_unreviewed)
        return [Property.from_row(r) for r in self.db.fetch_plan(plan)]
