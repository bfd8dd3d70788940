"""Shared test fixtures.

Every test gets its own SQLite file built from ``db/schema.sql`` and
``db/seeds.sql`` (3 parties, 10 candidates; candidates 7 and 10 have no
party).  ``test_client`` runs the full application lifespan against it.
"""

import sqlite3
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from election_api.core.config import Settings
from election_api.db.storage import Storage, get_storage
from election_api.main import create_app

DB_DIR = Path(__file__).resolve().parent.parent / "db"


@pytest.fixture()
def database_path(tmp_path: Path) -> Path:
    """Create a seeded election database in a temporary directory."""
    path = tmp_path / "election.db"
    conn = sqlite3.connect(path)
    try:
        conn.executescript((DB_DIR / "schema.sql").read_text(encoding="utf-8"))
        conn.executescript((DB_DIR / "seeds.sql").read_text(encoding="utf-8"))
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture()
def app_settings(database_path: Path) -> Settings:
    return Settings(DATABASE_PATH=str(database_path), LOG_LEVEL="WARNING")


@pytest.fixture()
def storage(database_path: Path) -> Generator[Storage, None, None]:
    """An opened storage handle on the seeded database."""
    store = Storage(str(database_path))
    store.open()
    yield store
    store.close()


@pytest.fixture()
def test_client(app_settings: Settings) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient bound to the seeded database."""
    app = create_app(app_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def mock_storage(test_client: TestClient) -> Generator[MagicMock, None, None]:
    """Swap the storage dependency for a mock on the running test app."""
    mock = MagicMock(spec=Storage)
    mock.database_path = "mock.db"
    test_client.app.dependency_overrides[get_storage] = lambda: mock
    yield mock
    test_client.app.dependency_overrides.clear()
