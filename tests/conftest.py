"""Shared fixtures for the Restaurant Ordering API tests."""

import pytest
from fastapi.testclient import TestClient

from restaurant_api.core.config import Settings
from restaurant_api.main import create_app
from restaurant_api.services.ids import SequentialIdGenerator
from restaurant_api.store import Store


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, id_strategy="sequential", seed_file=None)


@pytest.fixture
def client(settings):
    """Test client with the lifespan (and so the store) running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def store(client) -> Store:
    return client.app.state.store


@pytest.fixture
def bare_store() -> Store:
    """Store without an application around it."""
    return Store(SequentialIdGenerator())


@pytest.fixture
def dish_payload():
    return {
        "name": "Dolcelatte and chickpea spaghetti",
        "description": "Spaghetti topped with a blend of dolcelatte and fresh chickpeas",
        "price": 19,
        "image_url": "https://images.example.com/spaghetti.jpg",
    }


@pytest.fixture
def order_payload():
    return {
        "deliverTo": "308 Negra Arroyo Lane",
        "mobileNumber": "(505) 143-3369",
        "dishes": [{"dishId": "1", "quantity": 2}],
    }
