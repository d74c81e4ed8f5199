import logging
from typing import Optional
from sqlalchemy.orm import Session
from quickcourt.core.exceptions import InvalidTransitionError, ValidationError
from quickcourt.models.enums import FacilityStatus
from quickcourt.models.facility import Facility

logger = logging.getLogger(__name__)

# Admin transitions. Re-applying the same decision only refreshes the comments.
ADMIN_TRANSITIONS = {
    FacilityStatus.pending: {FacilityStatus.approved, FacilityStatus.rejected},
    FacilityStatus.approved: {FacilityStatus.approved, FacilityStatus.rejected},
    FacilityStatus.rejected: {FacilityStatus.approved, FacilityStatus.rejected},
}


def can_review(current: str, target: str) -> bool:
    try:
        return FacilityStatus(target) in ADMIN_TRANSITIONS[FacilityStatus(current)]
    except (ValueError, KeyError):
        return False


def review_facility(db: Session, facility: Facility, status: str, comments: Optional[str] = None) -> Facility:
    """Admin decision on a facility. Moving back to pending is never an admin action."""
    try:
        target = FacilityStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid status '{status}'")

    if not can_review(facility.status, target.value):
        logger.warning(f"❌ [FACILITIES] Rejected transition {facility.status} -> {target.value} for facility {facility.id}")
        raise InvalidTransitionError(f"Cannot move facility from {facility.status} to {target.value}")

    previous = facility.status
    facility.status = target.value
    facility.admin_comments = comments or ""
    db.commit()
    db.refresh(facility)

    logger.info(f"📋 [FACILITIES] Facility {facility.id}: {previous} -> {facility.status}")
    return facility


def apply_owner_edit(db: Session, facility: Facility, changes: dict) -> Facility:
    """Owner edit: apply the changes and send the facility back for review."""
    for field, value in changes.items():
        setattr(facility, field, value)

    previous = facility.status
    facility.status = FacilityStatus.pending.value
    db.commit()
    db.refresh(facility)

    if previous != FacilityStatus.pending.value:
        logger.info(f"🔁 [FACILITIES] Facility {facility.id} edited by owner: {previous} -> pending")
    return facility
