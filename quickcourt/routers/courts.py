# quickcourt/routers/courts.py
import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload
from quickcourt.database import get_db
from quickcourt.core.exceptions import NotFoundError, ValidationError
from quickcourt.core.policy import Action, require
from quickcourt.core.security import get_current_user
from quickcourt.models.court import BlockedSlot, Court
from quickcourt.models.facility import Facility
from quickcourt.models.user import User
from quickcourt.schemas.court import (
    BlockedSlotCreate,
    BlockedSlotResponse,
    CourtCreate,
    CourtDetailResponse,
    CourtResponse,
    CourtUpdate,
)
from quickcourt.services import booking_service

logger = logging.getLogger(__name__)
router = APIRouter()


def get_court_or_404(db: Session, court_id: int) -> Court:
    court = db.query(Court).options(joinedload(Court.facility)).filter(Court.id == court_id).first()
    if not court:
        raise NotFoundError("Court not found")
    return court


def court_detail(court: Court) -> CourtDetailResponse:
    return CourtDetailResponse(
        **CourtResponse.model_validate(court).model_dump(),
        facility_name=court.facility.name if court.facility else None,
        blocked_slots=[BlockedSlotResponse.model_validate(slot) for slot in court.blocked_slots],
    )


@router.get("/facility/{facility_id}", response_model=List[CourtResponse])
def get_courts_by_facility(facility_id: int, db: Session = Depends(get_db)):
    """Active courts of a facility (public)"""
    return db.query(Court).filter(
        Court.facility_id == facility_id,
        Court.is_active.is_(True),
    ).order_by(Court.id).all()


@router.get("/owner/my-courts", response_model=List[CourtDetailResponse])
def get_my_courts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require(current_user, Action.FACILITY_LIST_OWN)

    courts = db.query(Court).join(Facility, Court.facility_id == Facility.id).options(
        joinedload(Court.facility)
    ).filter(
        Facility.owner_id == current_user.id
    ).order_by(Court.created_at.desc(), Court.id.desc()).all()

    return [court_detail(court) for court in courts]


@router.get("/{court_id}", response_model=CourtDetailResponse)
def get_court(court_id: int, db: Session = Depends(get_db)):
    return court_detail(get_court_or_404(db, court_id))


@router.post("/", response_model=CourtResponse, status_code=status.HTTP_201_CREATED)
def create_court(
    court_data: CourtCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    facility = db.query(Facility).filter(Facility.id == court_data.facility_id).first()
    # Unknown facility and someone else's facility look the same to the caller
    require(current_user, Action.COURT_MANAGE, facility, detail="Not authorized")

    court = Court(**court_data.model_dump(mode="python"))
    court.sport_type = court_data.sport_type.value
    db.add(court)
    db.commit()
    db.refresh(court)

    logger.info(f"🏸 [COURTS] Court {court.id} created in facility {facility.id}")
    return court


@router.put("/{court_id}", response_model=CourtResponse)
def update_court(
    court_id: int,
    court_data: CourtUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Existing bookings keep the price they were created with"""
    court = get_court_or_404(db, court_id)
    require(current_user, Action.COURT_MANAGE, court, detail="Not authorized")

    changes = court_data.model_dump(exclude_unset=True, exclude_none=True)
    if "sport_type" in changes:
        changes["sport_type"] = changes["sport_type"].value

    opening = changes.get("opening_time", court.opening_time)
    closing = changes.get("closing_time", court.closing_time)
    if opening >= closing:
        raise ValidationError("opening_time must be before closing_time")

    for field, value in changes.items():
        setattr(court, field, value)

    db.commit()
    db.refresh(court)

    logger.info(f"✏️ [COURTS] Court {court.id} updated: {sorted(changes)}")
    return court


@router.delete("/{court_id}")
def delete_court(
    court_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Courts with past bookings are only deactivated"""
    court = get_court_or_404(db, court_id)
    require(current_user, Action.COURT_MANAGE, court, detail="Not authorized")

    if booking_service.has_upcoming_bookings(db, court_id=court.id):
        raise ValidationError("Court has upcoming bookings and cannot be deleted")

    if court.bookings:
        court.is_active = False
        db.commit()
        logger.info(f"📦 [COURTS] Court {court_id} deactivated by owner {current_user.id}, booking history kept")
        return {"detail": "Court deactivated, booking history kept"}

    db.delete(court)
    db.commit()

    logger.info(f"🗑️ [COURTS] Court {court_id} deleted by owner {current_user.id}")
    return {"detail": "Court deleted successfully"}


@router.post("/{court_id}/block-slots", response_model=CourtDetailResponse)
def block_slots(
    court_id: int,
    slot_data: BlockedSlotCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Block an interval for maintenance"""
    court = get_court_or_404(db, court_id)
    require(current_user, Action.COURT_MANAGE, court, detail="Not authorized")
    booking_service.validate_interval(slot_data.start_time, slot_data.end_time)

    with booking_service.court_day_lock(court.id, slot_data.date):
        try:
            court.blocked_slots.append(BlockedSlot(
                date=slot_data.date,
                start_time=slot_data.start_time,
                end_time=slot_data.end_time,
                reason=slot_data.reason or "",
            ))
            db.commit()
        except Exception:
            db.rollback()
            raise
    db.refresh(court)

    logger.info(f"🚧 [COURTS] Court {court.id} blocked on {slot_data.date} {slot_data.start_time}-{slot_data.end_time}")
    return court_detail(court)
