"""
Pytest configuration and shared fixtures.

The application reads its settings at import time, so the in-memory SQLite
database and the testing environment are selected here, before any project
module is imported. This file also ensures the project root is in sys.path.
"""

import os
import sys
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORAGE_BACKEND"] = "local"
os.environ.pop("ADMIN_API_KEY", None)

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from domain.models import Base, SessionLocal, engine, get_db_session
from adapters import storage_adapter
from adapters.storage_adapter import LocalStorageBackend


@pytest.fixture
def db_session():
    """Fresh schema per test; the session is shared with the API under test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path):
    """Local storage backend writing into the test's temporary directory."""
    backend = LocalStorageBackend(str(tmp_path / "storage"), "http://testserver/static")
    storage_adapter.configure(backend)
    yield backend
    storage_adapter.close()


@pytest.fixture
def client(db_session, storage):
    from main import app

    def _override():
        yield db_session

    app.dependency_overrides[get_db_session] = _override
    try:
        # No context manager: the lifespan (DB init, storage connect) is skipped
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
