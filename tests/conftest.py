import time

import pytest
from datetime import date, datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from bus_booking.database import init_db, make_session_factory
from bus_booking.bookings.ledger_service import ReservationLedger
from bus_booking.bookings.storage import BookingStore
from bus_booking.main import create_app

NOW = datetime(2026, 10, 17, 9, 30)
TODAY = NOW.date()
TRAVEL_DATE = date(2026, 10, 20)
PAST_DATE = date(2026, 10, 16)
MOBILE = "9876543210"
OTHER_MOBILE = "9123456780"


def fixed_clock():
    return NOW


def slow_clock():
    time.sleep(0.05)
    return NOW


# ------------------ engine ------------------
@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return BookingStore(make_session_factory(engine))


# ------------------ ledger ------------------
@pytest.fixture
def ledger():
    """Ledger without persistence"""
    return ReservationLedger(clock=fixed_clock)


@pytest.fixture
def persistent_ledger(store):
    return ReservationLedger(store=store, clock=fixed_clock)


# ------------------ client ------------------
@pytest.fixture
def client(persistent_ledger):
    app = create_app(ledger=persistent_ledger)
    with TestClient(app) as test_client:
        yield test_client
