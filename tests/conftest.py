"""Pytest fixtures for backend tests."""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# main creates its own database at import time; keep it off disk
os.environ.setdefault("DB_PATH", ":memory:")

# Ensure backend root is on path
_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

from config import set_db_instance
from database import Database
from api.cache import clear_cache


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for tests."""
    db = Database(db_path=":memory:")
    db.create_tables()
    set_db_instance(db)
    clear_cache()
    yield db
    clear_cache()
    db.close()


@pytest.fixture
def db_session(test_db):
    """Session on the test database, for seeding rows directly."""
    session = test_db.get_session()
    yield session
    session.close()


@pytest.fixture
def app(test_db):
    """Create FastAPI app with test database. Patch set_db_instance so main does not overwrite."""
    with patch("config.set_db_instance", lambda x: None):
        from main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def client(app):
    """Test client for the FastAPI app."""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def owner_headers():
    return {"X-User-Id": "owner-1"}


@pytest.fixture
def make_listing(db_session):
    """Insert a listing and return it."""
    from database import ListingRepository

    def _make(user_id="owner-1", **overrides):
        data = {
            "title": "3 Bed House in Gulberg",
            "description": "Corner house near the market",
            "price": 25_000_000,
            "price_unit": "total",
            "property_type": "house",
            "listing_type": "sale",
            "city": "Lahore",
            "area": "Gulberg",
            "size_value": 10,
            "size_unit": "marla",
            "bedrooms": 3,
            "bathrooms": 2,
            "amenities": ["Parking", "Security"],
            "images": [],
        }
        data.update(overrides)
        listing = ListingRepository(db_session).create_listing(user_id, data)
        db_session.commit()
        db_session.refresh(listing)
        return listing

    return _make


@pytest.fixture
def make_spot(db_session):
    """Insert a spot and return it."""
    from database import SpotRepository

    def _make(**overrides):
        data = {
            "name": "Beaconhouse School",
            "category": "education",
            "city": "Lahore",
            "area": "Gulberg",
        }
        data.update(overrides)
        spot = SpotRepository(db_session).create_spot(data)
        db_session.commit()
        db_session.refresh(spot)
        return spot

    return _make
