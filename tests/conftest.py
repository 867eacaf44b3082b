"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Make the flat top-level packages (db, models, queries, ...) importable
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture
def mock_db():
    """A Database stand-in whose query helpers are MagicMocks."""
    from db.connection import Database

    return MagicMock(spec=Database)


@pytest.fixture
def property_row() -> dict:
    """A row as returned by the property search."""
    return {
        "id": 7,
        "owner_id": 3,
        "title": "Harbour loft",
        "description": "Two blocks from the seawall",
        "thumbnail_photo_url": "https://img.example/7-thumb.jpg",
        "cover_photo_url": "https://img.example/7-cover.jpg",
        "cost_per_night": 12550,
        "parking_spaces": 1,
        "number_of_bathrooms": 1,
        "number_of_bedrooms": 2,
        "country": "Canada",
        "street": "1 Water St",
        "city": "Vancouver",
        "province": "BC",
        "post_code": "V6B 1A1",
        "active": True,
        "average_rating": "4.5000000000000000",
    }
