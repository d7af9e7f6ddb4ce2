from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, Numeric, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base

if TYPE_CHECKING:
    from .booking import Booking

class Cabin(Base):
    __tablename__ = "cabins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    regular_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    # Absolute amount off regular_price, never more than regular_price
    discount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str | None] = mapped_column(String(500))

    bookings: Mapped[list[Booking]] = relationship(back_populates="cabin")
