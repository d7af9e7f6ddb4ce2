from datetime import datetime
from decimal import Decimal
from sqlalchemy import Integer, Numeric, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from ..db import Base

class Settings(Base):
    """Global booking policy. Exactly one row is expected."""
    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    min_booking_length: Mapped[int] = mapped_column(Integer, nullable=False)
    max_booking_length: Mapped[int] = mapped_column(Integer, nullable=False)
    max_guests_per_booking: Mapped[int] = mapped_column(Integer, nullable=False)
    breakfast_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
