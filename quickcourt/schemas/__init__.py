from .auth import *
from .user import *
from .facility import *
from .court import *
from .booking import *

__all__ = [
    # Auth
    "Token", "TokenUser", "Login", "Register",

    # User
    "UserResponse", "ProfileUpdate", "UserStatusUpdate", "UserPage",

    # Facility
    "DayHours", "FacilityCreate", "FacilityUpdate", "FacilityReview", "FacilityResponse",
    "FacilityAdminResponse", "FacilityListItem", "FacilityPage", "FacilityDetailResponse",
    "OwnerFacilityResponse",

    # Court
    "CourtCreate", "CourtUpdate", "CourtResponse", "CourtDetailResponse",
    "BlockedSlotCreate", "BlockedSlotResponse",

    # Booking
    "BookingCreate", "BookingCancel", "BookingResponse", "OwnerBookingResponse",
    "BookingPage", "OwnerBookingPage", "AvailabilitySlot",
]
