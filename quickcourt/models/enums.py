from enum import Enum


class UserRole(str, Enum):
    user = "user"
    facility_owner = "facility_owner"
    admin = "admin"


class UserStatus(str, Enum):
    active = "active"
    banned = "banned"


class FacilityStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class BookingStatus(str, Enum):
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class SportType(str, Enum):
    badminton = "badminton"
    tennis = "tennis"
    basketball = "basketball"
    football = "football"
    cricket = "cricket"
    volleyball = "volleyball"
