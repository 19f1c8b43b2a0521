"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from datetime import UTC, date, datetime
from typing import Any
from uuid import UUID

# Settings are read once; point them at a throwaway database before the app loads
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("AUTH_MODE", "mock")

import pytest
from fastapi import Request
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from learnlog import models
from learnlog.database import Base, create_database_engine, create_session_factory, get_db
from learnlog.domain.common.resource_state import ResourceState
from learnlog.infrastructure.common.tenant_guard import BYPASS_TENANT_GUARD
from learnlog.infrastructure.identity import get_identity_resolver
from learnlog.main import app

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

USER_A = UUID("00000000-0000-0000-0000-00000000000a")
USER_B = UUID("00000000-0000-0000-0000-00000000000b")

# Create test engine and a session factory with the tenant guard installed
test_engine = create_database_engine(TEST_DATABASE_URL)
TestSessionLocal = create_session_factory(test_engine)


class SwitchableIdentityResolver:
    """Identity resolver whose owner can be changed mid-test; None means anonymous."""

    def __init__(self, owner_id: UUID | None = USER_A) -> None:
        self.owner_id = owner_id

    def resolve(self, request: Request) -> UUID | None:
        return self.owner_id


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
def identity() -> SwitchableIdentityResolver:
    return SwitchableIdentityResolver()


@pytest.fixture
def client(
    db_session: Session, identity: SwitchableIdentityResolver
) -> Generator[TestClient, Any, None]:
    """Create a test client with database session, authenticated as USER_A."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_resolver] = lambda: identity

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


CreateFunc = Callable[..., dict[str, Any]]


@pytest.fixture
def create_theme(client: TestClient) -> CreateFunc:
    """Fixture factory creating a theme via POST /themes."""

    def _create_theme(**overrides: Any) -> dict[str, Any]:  # noqa: ANN401
        payload = {"name": "Rust", "goal": "Read the Rust book"} | overrides
        response = client.post("/themes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_theme


@pytest.fixture
def create_log(client: TestClient) -> CreateFunc:
    """Fixture factory creating a log via POST /logs."""

    def _create_log(theme_id: str, **overrides: Any) -> dict[str, Any]:  # noqa: ANN401
        payload = {"themeId": theme_id, "date": "2025-01-15", "summary": "Ownership"} | overrides
        response = client.post("/logs", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_log


@pytest.fixture
def create_note(client: TestClient) -> CreateFunc:
    """Fixture factory creating a note via POST /notes."""

    def _create_note(**overrides: Any) -> dict[str, Any]:  # noqa: ANN401
        payload = {"category": "INSIGHT", "body": "Borrowing clicked today"} | overrides
        response = client.post("/notes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_note


def load_row(db_session: Session, model: type[Any], row_id: str | UUID) -> Any:  # noqa: ANN401
    """Load a row regardless of owner and state, bypassing the tenant guard."""
    stmt = (
        select(model)
        .where(model.id == (row_id if isinstance(row_id, UUID) else UUID(row_id)))
        .execution_options(populate_existing=True, **{BYPASS_TENANT_GUARD: True})
    )
    return db_session.execute(stmt).scalar_one()


def insert_theme(
    db_session: Session,
    owner_id: UUID = USER_A,
    state: ResourceState = ResourceState.ACTIVE,
    **overrides: Any,  # noqa: ANN401
) -> models.Theme:
    """Insert a theme row directly, e.g. in a state the API never produces."""
    now = datetime.now(UTC)
    theme = models.Theme(
        owner_id=owner_id,
        name=overrides.pop("name", "Archived theme"),
        goal=overrides.pop("goal", "Kept for reference"),
        state=state,
        state_changed_at=now,
        created_at=overrides.pop("created_at", now),
        updated_at=now,
        **overrides,
    )
    db_session.add(theme)
    db_session.commit()
    return theme


def insert_log(
    db_session: Session,
    theme_id: UUID,
    owner_id: UUID = USER_A,
    log_date: date = date(2025, 1, 15),
    state: ResourceState = ResourceState.ACTIVE,
    **overrides: Any,  # noqa: ANN401
) -> models.LearningLogEntry:
    """Insert a log row directly."""
    now = datetime.now(UTC)
    log = models.LearningLogEntry(
        owner_id=owner_id,
        theme_id=theme_id,
        date=log_date,
        summary=overrides.pop("summary", "Inserted log"),
        tags=overrides.pop("tags", []),
        state=state,
        state_changed_at=now,
        created_at=overrides.pop("created_at", now),
        updated_at=now,
        **overrides,
    )
    db_session.add(log)
    db_session.commit()
    return log
