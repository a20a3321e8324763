"""Shared test fixtures for FoodFresh."""

from datetime import date, timedelta

import pytest

from foodfresh.food_store import FoodStore
from foodfresh.kv_store import JSONFileKeyValueStore
from foodfresh.models import FoodItemInput
from foodfresh.persistence import FoodPersistence


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary data directory."""
    data_dir = tmp_path / "test_data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def kv_store(temp_data_dir):
    """Create a JSON file key-value store in a temporary directory."""
    return JSONFileKeyValueStore(data_dir=temp_data_dir)


@pytest.fixture
def persistence(kv_store):
    """Create a FoodPersistence over temporary storage."""
    return FoodPersistence(kv_store)


@pytest.fixture
def food_store(persistence):
    """Create a FoodStore with temporary storage."""
    return FoodStore(persistence=persistence)


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def make_input(today):
    """Build a FoodItemInput expiring a number of days from today."""

    def _make(name="Milk", days=5, price=2.5, location=None):
        return FoodItemInput(
            name=name,
            expiration_date=today + timedelta(days=days),
            storage_location=location,
            price=price,
        )

    return _make
