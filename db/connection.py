"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.

The pool lives on an explicitly constructed `Database` handle that is opened
at startup, handed to the repositories, and closed at shutdown:

    with Database(DATABASE_URL) as db:
        properties = PropertyRepository(db).get_all({"city": "Vancouver"})
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

import psycopg2
from psycopg2 import pool, extras

from db.errors import DatabaseConnectionError, DatabaseNotOpenError, QueryError
from utils.logger import get_logger

logger = get_logger(__name__)


def safe_rollback(conn) -> None:
    """
    Roll back the current transaction.

    A connection the server already dropped cannot roll back; that failure is
    logged so the original error is the one the caller sees.
    """
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.warning(f"Rollback failed: {e}")


class Database:
    """Persistence handle owning a psycopg2 connection pool."""

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 5):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: pool.SimpleConnectionPool | None = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    # ── LIFECYCLE ─────────────────────────────────────────

    def open(self) -> "Database":
        """
        Initialize the database connection pool.

        Returns:
            The handle itself, so it can be chained.

        Raises:
            DatabaseConnectionError: If the database is unreachable.
        """
        if self._pool is not None:
            return self
        try:
            self._pool = pool.SimpleConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e
        return self

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── CONNECTIONS ───────────────────────────────────────

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Borrow a connection from the pool and always give it back.

        Raises:
            DatabaseNotOpenError: If the pool has not been opened.
            DatabaseConnectionError: If no connection can be obtained.
        """
        if self._pool is None:
            raise DatabaseNotOpenError("Database pool not initialized. Call open() first.")
        try:
            conn = self._pool.getconn()
        except (psycopg2.OperationalError, pool.PoolError) as e:
            logger.error(f"Could not obtain a database connection: {e}")
            raise DatabaseConnectionError(f"Could not obtain a database connection: {e}") from e
        try:
            yield conn
        finally:
            self._pool.putconn(conn)

    # ── QUERIES ───────────────────────────────────────────

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[dict]:
        """
        Run a read query and return every row as a dict.

        Raises:
            QueryError: If the statement fails.
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    return [dict(r) for r in cur.fetchall()]
            except psycopg2.Error as e:
                safe_rollback(conn)
                raise self._query_error(e, sql, params) from e

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[dict]:
        """Run a read query and return the first row, or None."""
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone()
                    return dict(row) if row else None
            except psycopg2.Error as e:
                safe_rollback(conn)
                raise self._query_error(e, sql, params) from e

    def execute_returning(self, sql: str, params: Sequence[Any] = ()) -> Optional[dict]:
        """
        Run a write statement with a RETURNING clause and commit it.

        Returns:
            The returned row as a dict, or None if nothing was returned.

        Raises:
            QueryError: If the statement fails (the transaction is rolled back).
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone()
                conn.commit()
                return dict(row) if row else None
            except psycopg2.Error as e:
                safe_rollback(conn)
                raise self._query_error(e, sql, params) from e

    def fetch_plan(self, plan) -> list[dict]:
        """Execute a QueryPlan built by one of the query builders."""
        return self.fetch_all(plan.to_sql(), plan.params)

    @staticmethod
    def _query_error(e: Exception, sql: str, params: Sequence[Any]) -> QueryError:
        logger.error(f"Query failed: {e}")
        if isinstance(e, psycopg2.OperationalError):
            return DatabaseConnectionError(str(e).strip(), sql, params)
        return QueryError(str(e).strip(), sql, params)
