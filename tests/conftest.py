"""
Shared pytest fixtures.

Uses a throwaway SQLite database so no server is required for tests.
All clocks are frozen at noon in the calendar timezone so "today" never
flips mid-test.
"""
import time
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from readiness.core.clock import calendar_timezone, localize
from readiness.core.config import settings
from readiness.db.base import Base, get_db
from readiness.main import app
from readiness.models.kv_blob import KeyValueBlob
from readiness.routers.checkins import get_clock
from readiness.schemas.checkin import CheckInRecord
from readiness.services.blob_store import InMemoryBlobStore

SQLITE_URL = "sqlite:///./test_readiness.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FrozenClock:
    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        self.moment = self.moment + timedelta(**kwargs)


def make_check_in(
    date: datetime,
    sleep: int = 3,
    stress: int = 3,
    soreness: int = 3,
    motivation: int = 3,
    time: int = 30,
) -> CheckInRecord:
    return CheckInRecord(
        date=date,
        sleep_quality=sleep,
        stress_level=stress,
        muscle_soreness=soreness,
        motivation=motivation,
        time_available=time,
    )


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.query(KeyValueBlob).delete()
        db.commit()
        db.close()


@pytest.fixture()
def now() -> datetime:
    return localize(datetime(2026, 2, 20, 12, 0), calendar_timezone())


@pytest.fixture()
def new_york_host(monkeypatch):
    """Host local time is America/New_York and CALENDAR_TIMEZONE is unset."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setattr(settings, "CALENDAR_TIMEZONE", "")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    if time.tzname[0] != "EST":
        monkeypatch.undo()
        time.tzset()
        pytest.skip("system tz database lacks America/New_York")
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture()
def clock(now) -> FrozenClock:
    return FrozenClock(now)


@pytest.fixture()
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture()
def client(db, clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
