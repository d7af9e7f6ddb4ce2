from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from enum import Enum as PyEnum
from sqlalchemy import Integer, ForeignKey, Date, Numeric, Text, Enum, DateTime, Boolean, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base

if TYPE_CHECKING:
    from .cabin import Cabin
    from .guest import Guest

class BookingStatus(str, PyEnum):
    UNCONFIRMED = "unconfirmed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"

# Bookings that still hold their cabin for [start_date, end_date)
ACTIVE_STATUSES = (BookingStatus.UNCONFIRMED, BookingStatus.CHECKED_IN)

class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    num_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    num_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    cabin_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    extras_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=0)
    total_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="bookingstatus", values_callable=lambda e: [m.value for m in e]),
        default=BookingStatus.UNCONFIRMED,
        nullable=False,
    )
    has_breakfast: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    observations: Mapped[str | None] = mapped_column(Text)
    cabin_id: Mapped[int] = mapped_column(ForeignKey("cabins.id"), nullable=False, index=True)
    guest_id: Mapped[int] = mapped_column(ForeignKey("guests.id"), nullable=False, index=True)

    # Relationships
    cabin: Mapped[Cabin] = relationship(back_populates="bookings")
    guest: Mapped[Guest] = relationship(back_populates="bookings")
