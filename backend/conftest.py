# backend/conftest.py
# Shared fixtures: every test gets its own throwaway SQLite database

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point DATABASE_URL at a fresh SQLite file for this test."""
    url = f"sqlite:///{tmp_path / 'assets_test.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url


@pytest.fixture
def db(database_url):
    """Initialised engine + schema without going through the HTTP app."""
    from backend.db import dispose_engine, init_engine
    from backend.migrate import run_migrations

    init_engine(database_url)
    run_migrations()
    yield
    dispose_engine()


@pytest.fixture
def client(database_url):
    """TestClient with startup/shutdown hooks run against the test database."""
    from backend.main import app

    with TestClient(app) as test_client:
        yield test_client
