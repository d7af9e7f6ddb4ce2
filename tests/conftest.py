"""
Pytest configuration and fixtures.
Each test gets its own in-memory SQLite database, never the configured one.
"""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

# Point the app at a throwaway database BEFORE importing it
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'cabinstay_test.db')
os.environ['DATABASE_URL'] = f'sqlite:///{TEST_DB_PATH}'

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import init_db
from app.models import Booking, BookingStatus, Cabin, Guest, Settings
from app.services.data_service import DataService


@pytest.fixture(scope='session', autouse=True)
def cleanup_test_database():
    """Remove the file database the app module may have touched."""
    yield
    if os.path.exists(TEST_DB_PATH):
        try:
            os.remove(TEST_DB_PATH)
        except PermissionError:
            pass  # Windows may have file locked


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every connection of one test."""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def service(db):
    return DataService(db)


@pytest.fixture
def seed(db):
    """Two cabins, one guest and the settings row."""
    small = Cabin(name='001', max_capacity=2, regular_price=Decimal('250.00'), discount=Decimal('0'), image='https://img.example.com/001.jpg')
    large = Cabin(name='008', max_capacity=10, regular_price=Decimal('1000.00'), discount=Decimal('100.00'), description='Family cabin', image='https://img.example.com/008.jpg')
    guest = Guest(full_name='Jonas Schmedtmann', email='hello@jonas.io', nationality='Portugal', national_id='3525436345')
    settings_row = Settings(min_booking_length=3, max_booking_length=90, max_guests_per_booking=8, breakfast_price=Decimal('15.00'))
    db.add_all([large, small, guest, settings_row])
    db.commit()
    return {'small': small, 'large': large, 'guest': guest, 'settings': settings_row}


@pytest.fixture
def add_booking(db, seed):
    """Insert a booking directly, bypassing the service checks."""
    def _add(start: date, end: date, cabin=None, status=BookingStatus.UNCONFIRMED, guest=None, num_guests=2):
        booking = Booking(
            start_date=start,
            end_date=end,
            num_nights=(end - start).days,
            num_guests=num_guests,
            total_price=Decimal('500.00'),
            status=status,
            cabin_id=(cabin or seed['small']).id,
            guest_id=(guest or seed['guest']).id,
        )
        db.add(booking)
        db.commit()
        return booking
    return _add
