from .enums import UserRole, UserStatus, FacilityStatus, BookingStatus, SportType
from .user import User
from .facility import Facility
from .court import Court, BlockedSlot
from .booking import Booking

__all__ = [
    "UserRole", "UserStatus", "FacilityStatus", "BookingStatus", "SportType",
    "User", "Facility", "Court", "BlockedSlot", "Booking",
]
