"""
Shared fixtures: an in-memory Motor-compatible store and an app wired to it.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.config import Settings
from app.database.mongo import MongoStore
from app.main import create_app


@pytest.fixture
def settings():
    return Settings(MONGO_URI="mongodb://localhost:27017", MONGO_DB="test_products")


@pytest.fixture
def store():
    """Store backed by mongomock, so find/aggregate run real query semantics."""
    return MongoStore(client=AsyncMongoMockClient(), db_name="test_products")


@pytest.fixture
def collection(store):
    return store.products


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    # no `with`: the lifespan (ping) is exercised separately in test_app.py
    return TestClient(app)


@pytest.fixture
def seeded_client(client):
    response = client.post("/api/init-products")
    assert response.status_code == 201
    return client


@pytest.fixture
def failing_collection():
    """Collection whose every operation fails the way a dropped connection does."""
    from pymongo.errors import ServerSelectionTimeoutError

    error = ServerSelectionTimeoutError("No servers found")
    collection = Mock()
    collection.delete_many = AsyncMock(side_effect=error)
    collection.insert_many = AsyncMock(side_effect=error)
    collection.count_documents = AsyncMock(side_effect=error)
    collection.find.return_value.to_list = AsyncMock(side_effect=error)
    collection.aggregate.return_value.to_list = AsyncMock(side_effect=error)
    return collection


@pytest.fixture
def failing_client(settings, failing_collection):
    store = Mock()
    store.products = failing_collection
    return TestClient(create_app(settings, store))
