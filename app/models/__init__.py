from .cabin import Cabin
from .guest import Guest
from .booking import Booking, BookingStatus, ACTIVE_STATUSES
from .settings import Settings
