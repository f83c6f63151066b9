"""Test fixtures for API, database, mail and rate-limit clock."""

from __future__ import annotations

import os
import smtplib
from datetime import UTC, datetime, timedelta
from pathlib import Path

TESTS_ROOT = Path(__file__).parent

# Set env *before* importing landing modules so the app neither opens the
# default database path nor tries to reach an SMTP server.
os.environ.setdefault("DATABASE_URL", "sqlite:///test_app.db")
os.environ.setdefault("EMAIL_ENABLED", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from landing.database import Base  # noqa: E402
from landing.database import get_db as db_dependency  # noqa: E402
from landing.main import app  # noqa: E402
from landing.models import submission  # noqa: E402,F401 - ensure metadata is populated
from landing.security.rate_limit import limiter  # noqa: E402
from landing.services.contact import ContactService, get_contact_service  # noqa: E402
from landing.services.mailer import Mailer  # noqa: E402
from landing.services.rate_window import (  # noqa: E402
    InMemoryRateLimitStore,
    SubmissionRateLimiter,
)
from landing.services.submissions import SubmissionRepository  # noqa: E402

# Disable the coarse system-endpoint limiter to prevent cross-test 429 flakes
limiter.enabled = False

TEST_DB_PATH = Path("test_app.db")
TESTING_SESSION_FACTORY: sessionmaker | None = None
ADMIN_ADDR = "admin@test.local"


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingMailer(Mailer):
    """Mailer that records messages; ``fail_on`` makes the nth send raise."""

    def __init__(self, fail_on: int | None = None) -> None:
        super().__init__()
        self.sent: list[dict] = []
        self.fail_on = fail_on

    def send(self, subject, html, to_addr, from_addr=None, reply_to=None) -> None:
        if self.fail_on is not None and len(self.sent) == self.fail_on:
            raise smtplib.SMTPException("connection refused")
        self.sent.append(
            {
                "subject": subject,
                "html": html,
                "to": to_addr,
                "from": from_addr,
                "reply_to": reply_to,
            }
        )


@pytest.fixture(scope="session")
def client():
    global TESTING_SESSION_FACTORY
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

    engine = create_engine(
        f"sqlite:///{TEST_DB_PATH}",
        connect_args={"check_same_thread": False},
    )
    TESTING_SESSION_FACTORY = sessionmaker(
        bind=engine, autocommit=False, autoflush=False
    )
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TESTING_SESSION_FACTORY()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[db_dependency] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(db_dependency, None)
    engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture
def db_session(client):
    if TESTING_SESSION_FACTORY is None:
        raise RuntimeError("Session factory not initialized")
    session = TESTING_SESSION_FACTORY()
    try:
        yield session
    finally:
        # Ensure database state is isolated between tests
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def rate_store() -> InMemoryRateLimitStore:
    return InMemoryRateLimitStore()


@pytest.fixture
def contact_service(clock, mailer, rate_store) -> ContactService:
    rate_limiter = SubmissionRateLimiter(
        rate_store, max_requests=5, window=timedelta(hours=1), clock=clock
    )
    return ContactService(
        rate_limiter,
        SubmissionRepository(),
        mailer,
        admin_addr=ADMIN_ADDR,
        clock=clock,
    )


@pytest.fixture
def contact_client(client, db_session, contact_service):
    """Client whose contact route uses the fixture-built service."""
    app.dependency_overrides[get_contact_service] = lambda: contact_service
    yield client
    app.dependency_overrides.pop(get_contact_service, None)
