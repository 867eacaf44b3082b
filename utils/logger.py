"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.
The level comes from LOG_LEVEL; set it to DEBUG to see every built search query.
"""

import logging
import sys
from typing import Optional

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_handler: Optional[logging.Handler] = None


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Attach the stdout handler to the root logger (once) and set its level.

    Args:
        level: A logging level name such as "DEBUG" or "INFO".
            Unknown names fall back to INFO.
    """
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    if _handler is None:
        configure_logging()
    return logging.getLogger(name)
