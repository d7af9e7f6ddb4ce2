import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from .config import settings

logger = logging.getLogger(__name__)

class Base(DeclarativeBase):
    pass

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Helper indexes for the availability and guest-bookings queries (IF NOT EXISTS works on SQLite and PG 9.5+)
_HELPER_INDEXES = [
    "CREATE INDEX IF NOT EXISTS ix_bookings_cabin_start_end ON bookings(cabin_id, start_date, end_date);",
    "CREATE INDEX IF NOT EXISTS ix_bookings_guest_start ON bookings(guest_id, start_date);",
]


def init_db(bind: Engine | None = None) -> None:
    """
    Create missing tables for environments running without Alembic (dev, tests),
    then add the helper indexes. Index creation is best-effort: a failure is logged
    and startup continues.
    """
    # Register all mapped classes on Base.metadata
    from . import models  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    with bind.connect() as conn:
        for ddl in _HELPER_INDEXES:
            try:
                conn.exec_driver_sql(ddl)
            except Exception as e:
                logger.warning("Could not create helper index (%s): %s", ddl, e)
        conn.commit()


def ensure_settings_row(db: Session) -> None:
    """Seed the singleton settings row from configuration when it is missing."""
    from .models import Settings

    if db.query(Settings).first():
        return
    db.add(
        Settings(
            min_booking_length=settings.DEFAULT_MIN_BOOKING_LENGTH,
            max_booking_length=settings.DEFAULT_MAX_BOOKING_LENGTH,
            max_guests_per_booking=settings.DEFAULT_MAX_GUESTS_PER_BOOKING,
            breakfast_price=settings.DEFAULT_BREAKFAST_PRICE,
        )
    )
    db.commit()
    logger.info("Default settings row created.")
