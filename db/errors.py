"""
db/errors.py
------------
Exceptions raised by the database layer.

Hierarchy:
    LightBnBError
    ├── QueryError
    │   └── DatabaseConnectionError
    └── DatabaseNotOpenError
"""

from typing import Any, Optional, Sequence


class LightBnBError(Exception):
    """Base exception for all LightBnB data-access errors."""


class QueryError(LightBnBError):
    """
    A statement could not be executed.

    Attributes:
        sql: The SQL text that failed (None for connection-level failures).
        params: The parameters bound to it.
    """

    def __init__(
        self,
        message: str,
        sql: Optional[str] = None,
        params: Optional[Sequence[Any]] = None,
    ):
        super().__init__(message)
        self.sql = sql
        self.params = list(params) if params is not None else []


class DatabaseConnectionError(QueryError):
    """The database server could not be reached."""


class DatabaseNotOpenError(LightBnBError, RuntimeError):
    """The Database handle was used before open() or after close()."""
