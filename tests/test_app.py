from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.database.mongo import MongoStore
from app.main import create_app


def _mock_client(ping_error=None):
    mongo_client = MagicMock()
    mongo_client.admin.command = AsyncMock(side_effect=ping_error, return_value={"ok": 1.0})
    return mongo_client


def test_startup_aborts_when_store_unreachable(settings):
    store = MongoStore(client=_mock_client(ServerSelectionTimeoutError("timed out")), db_name="x")
    app = create_app(settings, store)

    with pytest.raises(ServerSelectionTimeoutError):
        with TestClient(app):
            pass


def test_startup_connects_and_shutdown_closes(settings):
    mongo_client = _mock_client()
    app = create_app(settings, MongoStore(client=mongo_client, db_name="x"))

    with TestClient(app) as client:
        assert client.get("/").json()["status"] == "running"
        mongo_client.admin.command.assert_awaited_with("ping")

    mongo_client.close.assert_called_once()


def test_health(settings):
    client = TestClient(create_app(settings, MongoStore(client=_mock_client(), db_name="x")))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_health_reports_unreachable_store(settings):
    store = MongoStore(client=_mock_client(ServerSelectionTimeoutError("timed out")), db_name="x")
    client = TestClient(create_app(settings, store))

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy"}


@pytest.mark.parametrize("method, path", [
    ("get", "/api/nothing-here"),
    ("get", "/products"),
    ("delete", "/api/products"),
])
def test_unknown_routes_are_404(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_unhandled_errors_are_generic_500s(settings):
    collection = Mock()
    collection.count_documents = AsyncMock(side_effect=RuntimeError("secret detail"))
    store = Mock()
    store.products = collection
    client = TestClient(create_app(settings, store), raise_server_exceptions=False)

    response = client.get("/api/products")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert "secret detail" not in response.text


def test_store_requires_uri_or_client():
    with pytest.raises(ValueError):
        MongoStore()
