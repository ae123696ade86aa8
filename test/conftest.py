"""Shared fixtures: an in-memory Mongo database and API clients per account."""

import mongomock
import pytest
from fastapi.testclient import TestClient

from auth.utils import hash_password
from main import create_app
from repositories.user_repository import create_user

PASSWORD = "secret123"


@pytest.fixture
def db():
    return mongomock.MongoClient()["tynda_test"]


@pytest.fixture
def app(db):
    return create_app(database=db)


@pytest.fixture
def make_client(app):
    """Factory for independent clients (one cookie jar each) on the same app."""
    opened = []

    def _make(raise_server_exceptions: bool = True) -> TestClient:
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        opened.append(client)
        return client

    yield _make
    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def anon_client(make_client):
    return make_client()


@pytest.fixture
def register(make_client):
    """Register ``username`` on a fresh client; returns (client, profile)."""

    def _register(username: str, email: str = None, password: str = PASSWORD):
        client = make_client()
        resp = client.post("/api/auth/register", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        })
        assert resp.status_code == 201, resp.text
        return client, resp.json()["user"]

    return _register


@pytest.fixture
def alice(register):
    return register("alice")


@pytest.fixture
def bob(register):
    return register("bob")


@pytest.fixture
def admin(db, make_client):
    user_id = create_user(db, "root", "root@example.com", hash_password(PASSWORD), role="admin")
    client = make_client()
    resp = client.post("/api/auth/login", json={"email": "root@example.com", "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return client, {"id": str(user_id), "username": "root", "role": "admin"}


@pytest.fixture
def create_track():
    def _create(client: TestClient, **fields):
        payload = {"title": "Song", "artist": "Band"}
        payload.update(fields)
        resp = client.post("/api/tracks", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
