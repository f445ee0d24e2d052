"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from studygroup.core import container
from studygroup.database import Base, enable_sqlite_foreign_keys, get_db
from studygroup.main import app

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

START = datetime(2024, 10, 7, 9, 0, tzinfo=UTC)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def advance(clock: FrozenClock) -> Callable[[timedelta], None]:
    """Move the shared test clock forward."""
    return clock.advance


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def other_db_session(db_session: Session) -> Generator[Session, None, None]:
    """A second session on the same database, standing in for a concurrent request."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session: Session, clock: FrozenClock) -> Generator[TestClient, Any, None]:
    """Create a test client with database session and the frozen clock."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with container.clock.override(clock), TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def tutor_id() -> UUID:
    return uuid4()


@pytest.fixture
def student_id() -> UUID:
    return uuid4()


@pytest.fixture
def headers(tutor_id: UUID) -> dict[str, str]:
    """Request headers identifying the tutor as caller."""
    return {"X-User-Id": str(tutor_id)}


@pytest.fixture
def authorized_client(client: TestClient, headers: dict[str, str]) -> TestClient:
    """Test client sending the tutor's identity on every request."""
    client.headers.update(headers)
    return client


@pytest.fixture
def test_group(authorized_client: TestClient, student_id: UUID) -> dict[str, Any]:
    """Create the "Algorithms A" group with one registered student."""
    response = authorized_client.post("/api/v1/groups", json={"name": "Algorithms A"})
    assert response.status_code == 201
    group = response.json()

    response = authorized_client.put(f"/api/v1/groups/{group['id']}/students/{student_id}")
    assert response.status_code == 200
    return group


@pytest.fixture
def test_session(authorized_client: TestClient, test_group: dict[str, Any]) -> dict[str, Any]:
    """Schedule a two hour tutorial in the test group."""
    response = authorized_client.post(
        f"/api/v1/groups/{test_group['id']}/sessions",
        json={
            "session_type": "tutorial",
            "location": "Room 101",
            "begins": START.isoformat(),
            "ends": (START + timedelta(hours=2)).isoformat(),
        },
    )
    assert response.status_code == 201
    return response.json()
