import pytest

from quickcourt.core.exceptions import InvalidTransitionError, ValidationError
from quickcourt.models import FacilityStatus
from quickcourt.services.facility_workflow import apply_owner_edit, can_review, review_facility


@pytest.mark.parametrize("current, target, expected", [
    ("pending", "approved", True),
    ("pending", "rejected", True),
    ("approved", "rejected", True),
    ("rejected", "approved", True),
    ("approved", "approved", True),
    ("rejected", "rejected", True),
    ("pending", "pending", False),
    ("approved", "pending", False),
    ("rejected", "pending", False),
    ("approved", "archived", False),
])
def test_can_review(current, target, expected):
    assert can_review(current, target) is expected


def test_admin_approves_then_rejects(db, owner, make_facility):
    facility = make_facility(owner, status=FacilityStatus.pending)

    review_facility(db, facility, "approved", "Looks good")
    assert facility.status == "approved"
    assert facility.admin_comments == "Looks good"

    review_facility(db, facility, "rejected")
    assert facility.status == "rejected"
    assert facility.admin_comments == ""

    review_facility(db, facility, "approved", "Fixed")
    assert facility.status == "approved"


def test_reapplying_same_decision_refreshes_comments(db, owner, make_facility):
    facility = make_facility(owner, status=FacilityStatus.approved)

    review_facility(db, facility, "approved", "Re-checked lighting")

    assert facility.status == "approved"
    assert facility.admin_comments == "Re-checked lighting"


@pytest.mark.parametrize("start", [FacilityStatus.pending, FacilityStatus.approved, FacilityStatus.rejected])
def test_admin_can_never_set_pending(db, owner, make_facility, start):
    facility = make_facility(owner, status=start)

    with pytest.raises(InvalidTransitionError) as exc_info:
        review_facility(db, facility, "pending")

    assert isinstance(exc_info.value, ValidationError)
    db.refresh(facility)
    assert facility.status == start.value


def test_unknown_status_is_a_validation_error(db, owner, make_facility):
    facility = make_facility(owner, status=FacilityStatus.pending)

    with pytest.raises(ValidationError):
        review_facility(db, facility, "archived")


def test_owner_edit_resets_to_pending(db, owner, make_facility):
    facility = make_facility(owner, status=FacilityStatus.approved)

    apply_owner_edit(db, facility, {"name": "Smash Arena 2.0", "amenities": ["parking", "showers"]})

    db.refresh(facility)
    assert facility.status == "pending"
    assert facility.name == "Smash Arena 2.0"
    assert facility.amenities == ["parking", "showers"]
