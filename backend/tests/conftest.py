from __future__ import annotations

from io import BytesIO
from typing import Iterable, Sequence

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cirec_admin import models  # noqa: F401
from cirec_admin.auth import get_current_admin, get_password_hash
from cirec_admin.config import Settings, get_settings
from cirec_admin.database import Base, get_db
from cirec_admin.main import app

TEST_JWT_SECRET = "test-jwt-secret"


@pytest.fixture(scope="session")
def engine():
    """In-memory SQLite engine shared by the whole test session."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        # Fresh tables for the next test.
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        PUBLIC_DIR=str(tmp_path / "public"),
    )


def _override_dependencies(db_session, settings) -> None:
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_settings] = lambda: settings


@pytest.fixture
def client(db_session, settings):
    """Client whose requests are already authenticated as an admin."""
    _override_dependencies(db_session, settings)
    app.dependency_overrides[get_current_admin] = lambda: models.Admin(login="tester", password_hash="unused")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db_session, settings):
    _override_dependencies(db_session, settings)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_account(db_session):
    admin = models.Admin(login="editor", password_hash=get_password_hash("s3cret-pass"))
    db_session.add(admin)
    db_session.commit()
    return admin


@pytest.fixture
def subscriber(db_session):
    subscriber = models.Subscriber(
        id=1,
        title="Ms",
        first_name="Jane",
        last_name="Doe",
        username="jdoe",
        password_hash="unused",
        type="C",
        status="1",
        paid="0",
    )
    db_session.add(subscriber)
    db_session.commit()
    return subscriber


def workbook_bytes(rows: Iterable[Sequence[object]]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(list(row))
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_workbook():
    return workbook_bytes
