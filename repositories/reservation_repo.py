"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations.
"""

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.reservation import Reservation
from utils.logger import get_logger

logger = get_logger(__name__)


class ReservationRepository:
    """Repository for CRUD operations on the reservations table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, reservation: Reservation) -> Reservation:
        """
        Insert a new reservation.

        Returns:
            The same Reservation with its `id` populated.
        """
        sql = """
            INSERT INTO reservations (start_date, end_date, property_id, guest_id)
            VALUES (%s, %s, %s, %s)
            RETURNING *;
        """
        row = self.db.execute_returning(sql, (
            reservation.start_date, reservation.end_date,
            reservation.property_id, reservation.guest_id,
        ))
        reservation.id = row["id"]
        logger.info(
            f"Added reservation #{reservation.id} for guest {reservation.guest_id} "
            f"at property {reservation.property_id}"
        )
        return reservation

    # ── READ ──────────────────────────────────────────────

    def get_all_for_guest(self, guest_id: int, limit: int = DEFAULT_RESULT_LIMIT) -> list[dict]:
        """
        Fetch a guest's reservations together with the reserved properties.

        Args:
            guest_id: The user who made the reservations.
            limit: Maximum number of rows.

        Returns:
            List of row dicts; property columns override reservation columns
            of the same name (`id` is the property id, as `reservation_id`
            keeps the reservation's).
        """
        sql = """
            SELECT reservations.id AS reservation_id, reservations.*, properties.*
            FROM reservations
            JOIN properties ON reservations.property_id = properties.id
            WHERE reservations.guest_id = %s
            ORDER BY reservations.start_date
            LIMIT %s;
        """
        return self.db.fetch_all(sql, (guest_id, limit))
