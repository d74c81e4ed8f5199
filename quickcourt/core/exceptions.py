# quickcourt/core/exceptions.py

from fastapi import HTTPException, status

class AuthException(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

# =======================================================
# Domain errors. Raised by services, rendered by the
# exception handler registered in quickcourt.main
# =======================================================
class QuickCourtError(Exception):
    """
    Base class for every user-facing error of the booking domain.
    Each subclass carries the HTTP status and a stable machine code.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"
    default_detail = "Request could not be processed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

class NotFoundError(QuickCourtError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Resource not found"

class FacilityNotApprovedError(QuickCourtError):
    code = "facility_not_approved"
    default_detail = "Facility not approved for bookings"

class SlotConflictError(QuickCourtError):
    status_code = status.HTTP_409_CONFLICT
    code = "slot_conflict"
    default_detail = "Time slot already booked"

class SlotBlockedError(QuickCourtError):
    status_code = status.HTTP_409_CONFLICT
    code = "slot_blocked"
    default_detail = "Time slot is blocked for maintenance"

class NotAuthorizedError(QuickCourtError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "not_authorized"
    default_detail = "Not authorized"

class AlreadyCancelledError(QuickCourtError):
    code = "already_cancelled"
    default_detail = "Booking already cancelled"

class BookingInPastError(QuickCourtError):
    code = "booking_in_past"
    default_detail = "Cannot cancel past bookings"

class ValidationError(QuickCourtError):
    code = "validation_error"
    default_detail = "Invalid request"

class InvalidTransitionError(ValidationError):
    code = "invalid_transition"
    default_detail = "Status transition not allowed"
