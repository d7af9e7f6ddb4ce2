from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base

if TYPE_CHECKING:
    from .booking import Booking

class Guest(Base):
    __tablename__ = "guests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    # Natural key: guests are looked up by email on sign-in
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    nationality: Mapped[str | None] = mapped_column(String(100))
    national_id: Mapped[str | None] = mapped_column(String(50))
    country_flag: Mapped[str | None] = mapped_column(String(500))

    bookings: Mapped[list[Booking]] = relationship(back_populates="guest")
