from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List

from ..models import Booking


class InvalidDateRange(ValueError):
    """Raised when an interval ends before it starts."""


def utc_today() -> date:
    """Current calendar date at midnight UTC."""
    return datetime.now(timezone.utc).date()


def each_day_of_interval(start: date, end: date) -> List[date]:
    """
    Every calendar day in the closed interval [start, end].
    Works on dates, not timestamps, so DST changes never add or drop a day.
    """
    if end < start:
        raise InvalidDateRange(f"Interval ends ({end.isoformat()}) before it starts ({start.isoformat()})")
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def expand_booked_dates(bookings: Iterable[Booking]) -> List[date]:
    """Flatten bookings into the dates they occupy, in booking order. Duplicates are kept."""
    booked: List[date] = []
    for b in bookings:
        booked.extend(each_day_of_interval(b.start_date, b.end_date))
    return booked
