from .auth import router as auth_router
from .users import router as users_router
from .facilities import router as facilities_router
from .courts import router as courts_router
from .bookings import router as bookings_router

__all__ = [
    "auth_router", "users_router", "facilities_router", "courts_router", "bookings_router",
]
