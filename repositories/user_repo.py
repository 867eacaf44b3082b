"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import Database
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: The User to persist.

        Returns:
            The same User with its `id` populated.
        """
        sql = """
            INSERT INTO users (name, email, password)
            VALUES (%s, %s, %s)
            RETURNING *;
        """
        row = self.db.execute_returning(sql, (user.name, user.email, user.password))
        user.id = row["id"]
        logger.info(f"Added user #{user.id}")
        return user

    # ── READ ──────────────────────────────────────────────

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a single user by email.

        Returns:
            A User or None if not found.
        """
        sql = "SELECT * FROM users WHERE email = %s;"
        row = self.db.fetch_one(sql, (email,))
        return User.from_row(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Fetch a single user by primary key."""
        sql = "SELECT * FROM users WHERE id = %s;"
        row = self.db.fetch_one(sql, (user_id,))
        return User.from_row(row) if row else None
