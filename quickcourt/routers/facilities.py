# quickcourt/routers/facilities.py
import logging
import math
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from quickcourt.database import get_db
from quickcourt.core.exceptions import NotFoundError, ValidationError
from quickcourt.core.policy import Action, require
from quickcourt.core.security import get_current_user
from quickcourt.models.court import Court
from quickcourt.models.enums import FacilityStatus, SportType
from quickcourt.models.facility import Facility
from quickcourt.models.user import User
from quickcourt.schemas.court import CourtResponse
from quickcourt.schemas.facility import (
    FacilityAdminResponse,
    FacilityCreate,
    FacilityDetailResponse,
    FacilityListItem,
    FacilityPage,
    FacilityResponse,
    FacilityReview,
    FacilityUpdate,
    OwnerFacilityResponse,
)
from quickcourt.services import booking_service, facility_workflow

logger = logging.getLogger(__name__)
router = APIRouter()


def get_facility_or_404(db: Session, facility_id: int) -> Facility:
    facility = db.query(Facility).filter(Facility.id == facility_id).first()
    if not facility:
        raise NotFoundError("Facility not found")
    return facility


def _active_courts(facility: Facility) -> List[Court]:
    return [court for court in facility.courts if court.is_active]


def _starting_price(courts: List[Court]) -> Decimal:
    return min((court.price_per_hour for court in courts), default=Decimal("0"))


@router.get("/", response_model=FacilityPage)
def get_facilities(
    sport: Optional[SportType] = None,
    search: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Approved facilities with court count and starting price (public)"""
    query = db.query(Facility).options(joinedload(Facility.courts)).filter(
        Facility.status == FacilityStatus.approved.value
    )
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Facility.name.ilike(pattern), Facility.city.ilike(pattern)))

    items = []
    for facility in query.order_by(Facility.rating_average.desc(), Facility.id).all():
        if sport and sport.value not in (facility.sports_supported or []):
            continue

        courts = _active_courts(facility)
        starting_price = _starting_price(courts)
        if min_price is not None and starting_price < min_price:
            continue
        if max_price is not None and starting_price > max_price:
            continue

        items.append(FacilityListItem(
            **FacilityResponse.model_validate(facility).model_dump(),
            courts=len(courts),
            starting_price=starting_price,
        ))

    total = len(items)
    start = (page - 1) * limit
    return {
        "items": items[start:start + limit],
        "total": total,
        "total_pages": math.ceil(total / limit) if total else 0,
        "current_page": page,
    }


@router.get("/owner/my-facilities", response_model=List[OwnerFacilityResponse])
def get_my_facilities(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require(current_user, Action.FACILITY_LIST_OWN)

    facilities = db.query(Facility).options(joinedload(Facility.courts)).filter(
        Facility.owner_id == current_user.id
    ).order_by(Facility.created_at.desc(), Facility.id.desc()).all()

    return [
        OwnerFacilityResponse(
            **FacilityResponse.model_validate(facility).model_dump(),
            total_courts=len(facility.courts),
            active_courts=len(_active_courts(facility)),
        )
        for facility in facilities
    ]


@router.get("/admin/all", response_model=List[FacilityAdminResponse])
def get_all_facilities(
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All facilities, optionally filtered by status ('all' disables the filter)"""
    require(current_user, Action.FACILITY_LIST_ALL)

    query = db.query(Facility).options(joinedload(Facility.owner))
    if status_filter and status_filter != "all":
        query = query.filter(Facility.status == status_filter)
    return query.order_by(Facility.created_at.desc(), Facility.id.desc()).all()


@router.get("/admin/pending", response_model=List[FacilityAdminResponse])
def get_pending_facilities(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require(current_user, Action.FACILITY_LIST_ALL)

    return db.query(Facility).options(joinedload(Facility.owner)).filter(
        Facility.status == FacilityStatus.pending.value
    ).order_by(Facility.created_at.desc(), Facility.id.desc()).all()


@router.patch("/admin/{facility_id}/review", response_model=FacilityAdminResponse)
def review_facility(
    facility_id: int,
    review: FacilityReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Approve or reject a facility"""
    require(current_user, Action.FACILITY_REVIEW)

    facility = get_facility_or_404(db, facility_id)
    return facility_workflow.review_facility(db, facility, review.status.value, review.comments)


@router.get("/{facility_id}", response_model=FacilityDetailResponse)
def get_facility(facility_id: int, db: Session = Depends(get_db)):
    """Facility with its active courts (public)"""
    facility = get_facility_or_404(db, facility_id)
    return FacilityDetailResponse(
        **FacilityAdminResponse.model_validate(facility).model_dump(),
        courts=[CourtResponse.model_validate(court) for court in _active_courts(facility)],
    )


@router.post("/", response_model=FacilityResponse, status_code=status.HTTP_201_CREATED)
def create_facility(
    facility_data: FacilityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """New facilities always start as pending"""
    require(current_user, Action.FACILITY_CREATE)

    facility = Facility(
        **facility_data.model_dump(mode="json"),
        owner_id=current_user.id,
        status=FacilityStatus.pending.value,
    )
    db.add(facility)
    db.commit()
    db.refresh(facility)

    logger.info(f"🏟️ [FACILITIES] Facility {facility.id} created by owner {current_user.id}")
    return facility


@router.put("/{facility_id}", response_model=FacilityResponse)
def update_facility(
    facility_id: int,
    facility_data: FacilityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Owner edit. The facility goes back to pending review."""
    facility = get_facility_or_404(db, facility_id)
    require(current_user, Action.FACILITY_UPDATE, facility, detail="Not authorized")

    changes = facility_data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    return facility_workflow.apply_owner_edit(db, facility, changes)


@router.delete("/{facility_id}")
def delete_facility(
    facility_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    facility = get_facility_or_404(db, facility_id)
    require(current_user, Action.FACILITY_DELETE, facility, detail="Not authorized")

    if booking_service.has_upcoming_bookings(db, facility_id=facility.id):
        raise ValidationError("Facility has upcoming bookings and cannot be deleted")
    if facility.bookings:
        raise ValidationError("Facility has booking history and cannot be deleted")

    db.delete(facility)
    db.commit()

    logger.info(f"🗑️ [FACILITIES] Facility {facility_id} deleted by owner {current_user.id}")
    return {"detail": "Facility deleted successfully"}
