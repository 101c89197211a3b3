"""Pytest fixtures — file-backed SQLite per test, controllable clock."""
import os

# Keep the app's own engine off the working directory during tests
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.config import settings  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.dependencies import get_now  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402, F401

TEST_API_KEY = "test-api-key"


class FrozenClock:
    """Mutable 'now' shared between a test and the get_now override."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def clock():
    return FrozenClock(datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc))


@pytest.fixture(scope="function")
def client(session_factory, clock, monkeypatch):
    """TestClient with SQLite, a frozen clock and a configured API key."""
    monkeypatch.setattr(settings, "API_KEY", TEST_API_KEY)

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_now] = clock
    with TestClient(app, headers={"X-API-Key": TEST_API_KEY}) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Helper — POST /register and return response JSON."""

    def _register(name: str = "alice", password: str = "pw123") -> dict:
        resp = client.post("/register", json={"name": name, "pass": password})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _register
