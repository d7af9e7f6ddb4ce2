"""
Booking & availability data service.

All reads and writes of cabins, guests, bookings and settings go through
``DataService``. The SQLAlchemy session is injected, so callers (FastAPI
dependencies, scripts, tests) decide which engine it talks to.

Store faults are logged here and surfaced as a ``DataServiceError`` whose
message names the entity and the action ("Booking could not be created").
The underlying database error is never part of that message.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Generic, List, Mapping, NoReturn, Optional, TypeVar

from sqlalchemy import inspect as sa_inspect, or_
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, load_only

from ..models import ACTIVE_STATUSES, Booking, BookingStatus, Cabin, Guest, Settings
from .availability import expand_booked_dates, utc_today

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Assigned by the database on insert; callers may not supply or change them
_SERVER_ASSIGNED = frozenset({"id", "created_at"})

# Booking fields that affect the date-range and capacity checks
_BOOKING_GUARDED = ("start_date", "end_date", "num_nights", "num_guests", "cabin_id", "status")


class DataServiceError(Exception):
    """Coarse, user-facing failure of a data-service operation."""


class RecordNotFoundError(DataServiceError):
    """No row matched the given identity."""


class RecordValidationError(DataServiceError):
    """Input rejected before reaching the store. Nothing was written."""

    def __init__(self, message: str, reason: str):
        super().__init__(f"{message}: {reason}")
        self.message = message
        self.reason = reason


class BookingConflictError(RecordValidationError):
    """The booking would overlap another active booking of the same cabin."""


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Outcome of an identity lookup where absence is a normal result."""
    status: str  # "ok" | "not_found" | "fault"
    data: Optional[T] = None

    @property
    def found(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True)
class CabinPrice:
    regular_price: Decimal
    discount: Decimal


def _as_date(value: Any) -> Any:
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


class DataService:
    def __init__(self, db: Session):
        self.db = db

    # ---- internals ----

    def _fail(self, message: str, error: Exception) -> NoReturn:
        logger.error("%s: %s", message, error)
        self.db.rollback()
        raise DataServiceError(message) from None

    def _missing(self, message: str, detail: str) -> NoReturn:
        logger.error("%s: %s", message, detail)
        raise RecordNotFoundError(message) from None

    def _violation(self, message: str, error: IntegrityError) -> NoReturn:
        # a constraint rejected the supplied values
        logger.warning("%s: %s", message, error.orig)
        self.db.rollback()
        raise RecordValidationError(message, "a unique or required value is invalid") from None

    def _reject(self, message: str, reason: str, conflict: bool = False) -> NoReturn:
        logger.warning("%s: %s", message, reason)
        if conflict:
            raise BookingConflictError(message, reason)
        raise RecordValidationError(message, reason)

    def _writable(self, model: type, fields: Mapping[str, Any], message: str) -> Dict[str, Any]:
        allowed = {attr.key for attr in sa_inspect(model).column_attrs} - _SERVER_ASSIGNED
        unknown = sorted(set(fields) - allowed)
        if unknown:
            self._reject(message, f"unsupported fields: {', '.join(unknown)}")
        return dict(fields)

    def _coerce_booking_fields(self, fields: Dict[str, Any], message: str) -> None:
        try:
            for key in ("start_date", "end_date"):
                if key in fields:
                    fields[key] = _as_date(fields[key])
            if "status" in fields:
                fields["status"] = BookingStatus(fields["status"])
        except ValueError as e:
            self._reject(message, str(e))

    def _check_booking(self, message: str, booking: Mapping[str, Any], exclude_id: int | None = None) -> None:
        """Validate the date range, night count, capacity and overlap of a booking's final state."""
        start, end = booking.get("start_date"), booking.get("end_date")
        if start is None or end is None:
            self._reject(message, "start_date and end_date are required")
        if end <= start:
            self._reject(message, "end_date must be after start_date")
        nights = (end - start).days
        if booking.get("num_nights") != nights:
            self._reject(message, f"num_nights must be {nights} for {start.isoformat()} to {end.isoformat()}")

        try:
            cabin = self.db.get(Cabin, booking.get("cabin_id"))
        except SQLAlchemyError as e:
            self._fail(message, e)
        if cabin is None:
            self._reject(message, f"cabin {booking.get('cabin_id')} does not exist")
        num_guests = booking.get("num_guests")
        if num_guests is not None and num_guests > cabin.max_capacity:
            self._reject(message, f"{cabin.name} holds at most {cabin.max_capacity} guests")

        if booking.get("status", BookingStatus.UNCONFIRMED) not in ACTIVE_STATUSES:
            return
        # [start, end) overlap with another active booking of the same cabin
        q = self.db.query(Booking.id).filter(
            Booking.cabin_id == cabin.id,
            Booking.status.in_(ACTIVE_STATUSES),
            Booking.start_date < end,
            Booking.end_date > start,
        )
        if exclude_id is not None:
            q = q.filter(Booking.id != exclude_id)
        try:
            clash = q.first()
        except SQLAlchemyError as e:
            self._fail(message, e)
        if clash:
            self._reject(message, f"overlaps booking {clash.id}", conflict=True)

    def _insert(self, row: Any, message: str) -> None:
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except IntegrityError as e:
            self._violation(message, e)
        except SQLAlchemyError as e:
            self._fail(message, e)

    def _update(self, model: type, row_id: int, fields: Dict[str, Any], message: str, guard=None) -> Any:
        try:
            row = self.db.get(model, row_id)
        except SQLAlchemyError as e:
            self._fail(message, e)
        if row is None:
            self._missing(message, f"no {model.__tablename__} row with id {row_id}")
        if guard is not None:
            guard(row)
        # Only the supplied fields are written
        for key, value in fields.items():
            setattr(row, key, value)
        try:
            self.db.commit()
            self.db.refresh(row)
        except IntegrityError as e:
            self._violation(message, e)
        except SQLAlchemyError as e:
            self._fail(message, e)
        return row

    # ---- reads ----

    def find_cabin(self, cabin_id: int) -> Lookup[Cabin]:
        try:
            cabin = self.db.get(Cabin, cabin_id)
        except SQLAlchemyError as e:
            logger.error("Cabin %s could not be loaded: %s", cabin_id, e)
            self.db.rollback()
            return Lookup("fault")
        return Lookup("ok", cabin) if cabin else Lookup("not_found")

    def get_cabin(self, cabin_id: int) -> Optional[Cabin]:
        return self.find_cabin(cabin_id).data

    def get_cabin_price(self, cabin_id: int) -> Optional[CabinPrice]:
        """Only the pricing columns, for checkout summaries."""
        try:
            row = (
                self.db.query(Cabin.regular_price, Cabin.discount)
                .filter(Cabin.id == cabin_id)
                .one_or_none()
            )
        except SQLAlchemyError as e:
            logger.error("Price of cabin %s could not be loaded: %s", cabin_id, e)
            self.db.rollback()
            return None
        if row is None:
            return None
        return CabinPrice(regular_price=row.regular_price, discount=row.discount)

    def get_cabins(self) -> List[Cabin]:
        try:
            return (
                self.db.query(Cabin)
                .options(load_only(Cabin.id, Cabin.name, Cabin.max_capacity, Cabin.regular_price, Cabin.discount, Cabin.image))
                .order_by(Cabin.name.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Cabins could not be loaded", e)

    def find_guest(self, email: str) -> Lookup[Guest]:
        """Guests are uniquely identified by their email address."""
        try:
            guest = self.db.query(Guest).filter(Guest.email == email).one_or_none()
        except SQLAlchemyError as e:
            logger.error("Guest %s could not be loaded: %s", email, e)
            self.db.rollback()
            return Lookup("fault")
        return Lookup("ok", guest) if guest else Lookup("not_found")

    def get_guest(self, email: str) -> Optional[Guest]:
        # None for an unknown email; sign-in decides whether to create the guest
        return self.find_guest(email).data

    def get_booking(self, booking_id: int) -> Booking:
        try:
            return self.db.query(Booking).filter(Booking.id == booking_id).one()
        except NoResultFound:
            self._missing("Booking could not be loaded", f"no bookings row with id {booking_id}")
        except SQLAlchemyError as e:
            self._fail("Booking could not be loaded", e)

    def get_bookings(self, guest_id: int) -> List[Booking]:
        """A guest's bookings by start date, each with its cabin's name and image loaded."""
        try:
            return (
                self.db.query(Booking)
                .options(joinedload(Booking.cabin).load_only(Cabin.name, Cabin.image))
                .filter(Booking.guest_id == guest_id)
                .order_by(Booking.start_date.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Bookings could not be loaded", e)

    def get_booked_dates_by_cabin_id(self, cabin_id: int, today: date | None = None) -> List[date]:
        """
        Dates a cabin is unavailable, for the date picker.

        Considers bookings starting today or later plus any booking currently
        checked in (which may have started in the past). Each booking covers
        every day from start_date to end_date inclusive.
        """
        today = today or utc_today()
        try:
            bookings = (
                self.db.query(Booking)
                .filter(
                    Booking.cabin_id == cabin_id,
                    or_(Booking.start_date >= today, Booking.status == BookingStatus.CHECKED_IN),
                )
                .order_by(Booking.start_date.asc(), Booking.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("Bookings could not be loaded", e)
        return expand_booked_dates(bookings)

    def get_settings(self) -> Settings:
        try:
            return self.db.query(Settings).one()
        except NoResultFound:
            self._missing("Settings could not be loaded", "settings row is missing")
        except SQLAlchemyError as e:
            self._fail("Settings could not be loaded", e)

    # ---- creates ----

    def create_guest(self, new_guest: Mapping[str, Any]) -> Guest:
        message = "Guest could not be created"
        guest = Guest(**self._writable(Guest, new_guest, message))
        self._insert(guest, message)
        logger.info("Created guest %s", guest.id)
        return guest

    def create_booking(self, new_booking: Mapping[str, Any]) -> Booking:
        """Insert a booking and return the stored row, including its id and created_at."""
        message = "Booking could not be created"
        fields = self._writable(Booking, new_booking, message)
        self._coerce_booking_fields(fields, message)
        if fields.get("start_date") is not None and fields.get("end_date") is not None:
            fields.setdefault("num_nights", (fields["end_date"] - fields["start_date"]).days)
        self._check_booking(message, fields)
        booking = Booking(**fields)
        self._insert(booking, message)
        logger.info("Created booking %s for cabin %s", booking.id, booking.cabin_id)
        return booking

    # ---- updates ----

    # updated_fields should ONLY contain the changed data
    def update_guest(self, guest_id: int, updated_fields: Mapping[str, Any]) -> Guest:
        message = "Guest could not be updated"
        fields = self._writable(Guest, updated_fields, message)
        return self._update(Guest, guest_id, fields, message)

    def update_booking(self, booking_id: int, updated_fields: Mapping[str, Any]) -> Booking:
        message = "Booking could not be updated"
        fields = self._writable(Booking, updated_fields, message)
        self._coerce_booking_fields(fields, message)

        def guard(booking: Booking) -> None:
            if not any(key in fields for key in _BOOKING_GUARDED):
                return
            final = {key: getattr(booking, key) for key in _BOOKING_GUARDED}
            final.update({key: fields[key] for key in _BOOKING_GUARDED if key in fields})
            self._check_booking(message, final, exclude_id=booking.id)

        return self._update(Booking, booking_id, fields, message, guard=guard)

    # ---- deletes ----

    def delete_booking(self, booking_id: int) -> Booking:
        """Delete a booking and return a detached copy of the removed row."""
        message = "Booking could not be deleted"
        try:
            booking = self.db.get(Booking, booking_id)
        except SQLAlchemyError as e:
            self._fail(message, e)
        if booking is None:
            self._missing(message, f"no bookings row with id {booking_id}")
        deleted = Booking(**{attr.key: getattr(booking, attr.key) for attr in sa_inspect(Booking).column_attrs})
        try:
            self.db.delete(booking)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(message, e)
        logger.info("Deleted booking %s", booking_id)
        return deleted
