"""
Access policy for QuickCourt.

Every permission decision in the API goes through ``is_allowed``: it takes the
acting user, the action being attempted and (when the action targets a
specific record) that record. Routers never compare roles themselves.
"""
from enum import Enum
from typing import Any, Optional

from quickcourt.core.exceptions import NotAuthorizedError
from quickcourt.models.enums import UserRole, UserStatus


class Action(str, Enum):
    FACILITY_CREATE = "facility.create"
    FACILITY_UPDATE = "facility.update"
    FACILITY_DELETE = "facility.delete"
    FACILITY_REVIEW = "facility.review"
    FACILITY_LIST_ALL = "facility.list_all"
    FACILITY_LIST_OWN = "facility.list_own"
    COURT_MANAGE = "court.manage"
    BOOKING_CREATE = "booking.create"
    BOOKING_CANCEL = "booking.cancel"
    BOOKING_LIST_FACILITY = "booking.list_facility"
    BOOKING_LIST_ALL = "booking.list_all"
    USER_MANAGE = "user.manage"
    OWNER_DASHBOARD = "owner.dashboard"


ROLE_ACTIONS = {
    Action.FACILITY_CREATE: {UserRole.facility_owner},
    Action.FACILITY_UPDATE: {UserRole.facility_owner},
    Action.FACILITY_DELETE: {UserRole.facility_owner},
    Action.FACILITY_LIST_OWN: {UserRole.facility_owner},
    Action.COURT_MANAGE: {UserRole.facility_owner},
    Action.BOOKING_LIST_FACILITY: {UserRole.facility_owner},
    Action.OWNER_DASHBOARD: {UserRole.facility_owner},
    Action.FACILITY_REVIEW: {UserRole.admin},
    Action.FACILITY_LIST_ALL: {UserRole.admin},
    Action.BOOKING_LIST_ALL: {UserRole.admin},
    Action.USER_MANAGE: {UserRole.admin},
    Action.BOOKING_CREATE: set(UserRole),
    Action.BOOKING_CANCEL: set(UserRole),
}


def _owns_facility(actor: Any, facility: Any) -> bool:
    return facility is not None and facility.owner_id == actor.id


def _resource_check(actor: Any, action: Action, resource: Any) -> bool:
    if action in (Action.FACILITY_UPDATE, Action.FACILITY_DELETE):
        return _owns_facility(actor, resource)
    if action == Action.COURT_MANAGE:
        # Accepts the court itself or, on creation, its parent facility
        facility = getattr(resource, "facility", resource)
        return _owns_facility(actor, facility)
    if action == Action.BOOKING_CANCEL:
        return resource is not None and resource.user_id == actor.id
    return True


def is_allowed(actor: Any, action: Action, resource: Optional[Any] = None) -> bool:
    """Return whether ``actor`` may perform ``action`` on ``resource``."""
    if actor is None or actor.status != UserStatus.active.value:
        return False

    try:
        role = UserRole(actor.role)
    except ValueError:
        return False

    if role not in ROLE_ACTIONS.get(action, set()):
        return False

    return _resource_check(actor, action, resource)


def require(actor: Any, action: Action, resource: Optional[Any] = None, detail: str = None) -> None:
    if not is_allowed(actor, action, resource):
        raise NotAuthorizedError(detail or "Access denied. Insufficient permissions.")
