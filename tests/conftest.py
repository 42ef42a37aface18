import os

# Point the app at a throwaway in-memory database before anything imports it
os.environ["WORKHOURS_DB_URL"] = "sqlite://"
os.environ["WORKHOURS_DB_SCHEMA"] = ""
os.environ["WORKHOURS_DEBUG"] = "false"

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.database import SessionLocal, drop_db, init_db
from app.dependencies import get_clock
from app.main import app
from app.models.time_entry import EntryStatus, TimeEntry
from app.models.user import User
from app.models.user_session import UserSession
from app.services.auth import AuthService
from app.services.clock import FixedClock


# Wednesday; its week runs Monday 2025-01-13 to Sunday 2025-01-19
NOW = datetime(2025, 1, 15, 17, 30)
TODAY = NOW.date()


@pytest.fixture(autouse=True)
def reset_database():
    init_db()
    yield
    drop_db()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def client(clock):
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    user = AuthService(db).create_user("jsmith", "Jane Smith")
    db.commit()
    return user


@pytest.fixture
def other_user(db):
    user = AuthService(db).create_user("bjones", "Bob Jones")
    db.commit()
    return user


@pytest.fixture
def auth_headers(db, user):
    return {"Authorization": f"Bearer {issue_token(db, user)}"}


def issue_token(db, user: User, expires_in: timedelta = timedelta(hours=8)) -> str:
    """Create a session row directly, skipping the bcrypt round trip."""
    session = UserSession.issue(user.user_id, expires_in)
    db.add(session)
    db.commit()
    return session.session_token


def add_entry(
    db,
    user: User,
    entry_date: date,
    hours: str = "8.0",
    status: EntryStatus = EntryStatus.PENDING,
    login: bool = True,
    logout: bool = True,
) -> TimeEntry:
    """Insert a time entry the way the upstream pipeline would."""
    start = datetime.combine(entry_date, datetime.min.time()) + timedelta(hours=8)
    entry = TimeEntry(
        user_id=user.user_id,
        entry_date=entry_date,
        login_time=start if login else None,
        logout_time=start + timedelta(hours=float(hours)) if logout else None,
        total_hours=Decimal(hours),
        status=status,
    )
    db.add(entry)
    db.commit()
    return entry


def reload(db, entry: TimeEntry) -> TimeEntry:
    db.expire_all()
    return db.get(TimeEntry, entry.id)
