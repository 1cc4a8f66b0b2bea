# tests/conftest.py

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.auth import create_access_token, hash_password
from app.clock import get_now
from app.db import create_db_and_tables, get_session
from app.main import app
from app.models import Service, User
from app.notifications import get_dispatcher
from app.rate_limiter import booking_limiter, limit_booking_attempts
from app.storage import Storage

SHOP_TZ = timezone(timedelta(hours=-3))
TODAY = "2026-03-10"
TOMORROW = "2026-03-11"
YESTERDAY = "2026-03-09"
# "now" for every test: today at 10:00 shop time
NOW = datetime(2026, 3, 10, 10, 0, tzinfo=SHOP_TZ)


class RecordingDispatcher:
    def __init__(self):
        self.events = []

    def booking_created(self, event):
        self.events.append(event)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return Storage(session)


@pytest.fixture
def cut(store):
    return store.insert_service(
        Service(name="Precision Cut", description="Cut", price=4500, duration=45, category="main")
    )


@pytest.fixture
def beard(store):
    return store.insert_service(
        Service(name="Beard Sculpt", description="Beard", price=3500, duration=30, category="main")
    )


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    booking_limiter.reset()
    yield
    booking_limiter.reset()


@pytest.fixture
def client(session, dispatcher, cut, beard):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_now] = lambda: NOW
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    app.dependency_overrides[limit_booking_attempts] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(store):
    return store.insert_user(
        User(username="admin", password_hash=hash_password("barber-secret"), name="Admin")
    )


@pytest.fixture
def admin_headers(admin):
    token = create_access_token({"sub": admin.username})
    return {"Authorization": f"Bearer {token}"}
