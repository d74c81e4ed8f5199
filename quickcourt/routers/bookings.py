# quickcourt/routers/bookings.py
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload
from quickcourt.database import get_db
from quickcourt.core.core import paginate
from quickcourt.core.policy import Action, require
from quickcourt.core.security import get_current_user
from quickcourt.models.booking import Booking
from quickcourt.models.enums import BookingStatus
from quickcourt.models.facility import Facility
from quickcourt.models.user import User
from quickcourt.schemas.booking import (
    AvailabilitySlot,
    BookingCancel,
    BookingCreate,
    BookingPage,
    BookingResponse,
    OwnerBookingPage,
)
from quickcourt.services import booking_service

logger = logging.getLogger(__name__)
router = APIRouter()


def _with_relations(query):
    return query.options(
        joinedload(Booking.court),
        joinedload(Booking.facility),
    )


@router.get("/my-bookings", response_model=BookingPage)
def get_my_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Bookings of the current user, newest first"""
    query = db.query(Booking).filter(Booking.user_id == current_user.id)
    if status_filter:
        query = query.filter(Booking.status == status_filter.value)

    query = _with_relations(query).order_by(Booking.date.desc(), Booking.start_time.desc())
    return paginate(query, page, limit)


@router.get("/facility-bookings", response_model=OwnerBookingPage)
def get_facility_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Bookings made against every facility of the current owner"""
    require(current_user, Action.BOOKING_LIST_FACILITY)

    facility_ids = select(Facility.id).where(Facility.owner_id == current_user.id)
    query = db.query(Booking).filter(Booking.facility_id.in_(facility_ids))
    if status_filter:
        query = query.filter(Booking.status == status_filter.value)

    query = _with_relations(query).options(joinedload(Booking.user)).order_by(
        Booking.date.desc(), Booking.start_time.desc()
    )
    return paginate(query, page, limit)


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Book a court. 409 when the slot is taken or blocked."""
    require(current_user, Action.BOOKING_CREATE)

    logger.info(
        f"🎯 [BOOKINGS] User {current_user.id} requests court {booking_data.court_id} "
        f"on {booking_data.date} {booking_data.start_time}-{booking_data.end_time}"
    )
    booking = booking_service.create_booking(
        db,
        booking_service.BookingRequest(
            user_id=current_user.id,
            court_id=booking_data.court_id,
            date=booking_data.date,
            start_time=booking_data.start_time,
            end_time=booking_data.end_time,
        ),
    )
    return booking


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    cancel_data: Optional[BookingCancel] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reason = cancel_data.reason if cancel_data else None
    return booking_service.cancel_booking(db, booking_id, current_user, reason=reason)


@router.get("/availability/{court_id}/{day}", response_model=List[AvailabilitySlot])
def get_availability(court_id: int, day: date, db: Session = Depends(get_db)):
    """Hourly slots of a court for one day (public)"""
    return booking_service.get_availability(db, court_id, day)


@router.get("/admin/all", response_model=OwnerBookingPage)
def get_all_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require(current_user, Action.BOOKING_LIST_ALL)

    query = _with_relations(db.query(Booking)).options(joinedload(Booking.user)).order_by(
        Booking.created_at.desc(), Booking.id.desc()
    )
    return paginate(query, page, limit)
