import pytest

import database
from database import get_store
from errors import StoreConnectionError
from main import app, prepare_store


def test_index_lists_routes(client):
    response = client.get("/")
    assert response.status_code == 200

    body = response.json()
    assert "habitaciones" in body["apis"]
    assert body["apis"]["reservas"]["crear"] == {
        "metodo": "POST",
        "descripcion": "Crear una reserva",
        "ruta": "/bookings",
    }


def test_prepare_store_creates_tables(store):
    prepare_store(store, create_tables=True)
    assert store.fetch_all("SELECT codigo FROM habitaciones") == []


def test_prepare_store_fails_when_database_unreachable():
    from sqlalchemy import create_engine
    from database import Store

    unreachable = Store(create_engine("sqlite:////nonexistent-dir/hotel.db"))
    with pytest.raises(StoreConnectionError):
        prepare_store(unreachable, create_tables=False)


def test_uninitialized_store_returns_500(client, monkeypatch):
    app.dependency_overrides.pop(get_store)
    monkeypatch.setattr(database, "_store", None)

    response = client.get("/rooms")
    assert response.status_code == 500
    assert response.json()["error"]["codigo"] == "STORE_CONNECTION_ERROR"


def test_validation_errors_use_error_envelope(client):
    response = client.post("/rooms", json={"numero": "101"})
    assert response.status_code == 422

    body = response.json()
    assert body["error"]["codigo"] == "VALIDATION_ERROR"
    missing = {tuple(e["loc"]) for e in body["error"]["detalle"]}
    assert ("body", "tipo") in missing
    assert ("body", "valor") in missing


def test_non_integer_code_is_rejected(client):
    response = client.get("/rooms/abc")
    assert response.status_code == 422


def test_startup_fails_when_database_unreachable(monkeypatch):
    from fastapi.testclient import TestClient
    from sqlalchemy import create_engine
    from database import Store

    monkeypatch.setattr(database, "_store", Store(create_engine("sqlite:////nonexistent-dir/hotel.db")))
    with pytest.raises(StoreConnectionError):
        with TestClient(app):
            pass


def test_startup_creates_tables_and_shutdown_closes_store(monkeypatch):
    from fastapi.testclient import TestClient
    from sqlalchemy import create_engine
    from sqlalchemy.pool import StaticPool
    from database import Store

    fresh = Store(create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))
    monkeypatch.setattr(database, "_store", fresh)
    app.dependency_overrides.pop(get_store)

    with TestClient(app) as client:
        response = client.get("/rooms")
        assert response.status_code == 200
        assert response.json()["habitaciones"] == []

    assert database._store is None
