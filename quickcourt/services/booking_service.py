# quickcourt/services/booking_service.py
"""
Booking admission, cancellation and availability for a single court.

Admission and availability use the same half-open overlap test, so a slot
shown as available is exactly a slot admission will accept. Admission and cancellation
run their read-check-write inside ``court_day_lock`` plus a row lock on the
court, and commit before the lock is released: at most one writer per
(court, date) at a time.
"""
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy.orm import Session

from quickcourt.config import settings
from quickcourt.core.exceptions import (
    AlreadyCancelledError,
    BookingInPastError,
    FacilityNotApprovedError,
    NotFoundError,
    SlotBlockedError,
    SlotConflictError,
    ValidationError,
)
from quickcourt.core.policy import Action, require
from quickcourt.models.booking import Booking
from quickcourt.models.court import BlockedSlot, Court
from quickcourt.models.enums import BookingStatus
from quickcourt.models.user import User

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

_LOCK_STRIPES = 64
_court_day_locks = [threading.Lock() for _ in range(_LOCK_STRIPES)]


@contextmanager
def court_day_lock(court_id: int, day: date):
    """Serialize writers that target the same court and day within this process."""
    lock = _court_day_locks[hash((court_id, day)) % _LOCK_STRIPES]
    with lock:
        yield


@dataclass
class BookingRequest:
    user_id: int
    court_id: int
    date: date
    start_time: time
    end_time: time


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Half-open [start, end) overlap; touching intervals do not overlap."""
    return start_a < end_b and end_a > start_b


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def calculate_duration(start_time: time, end_time: time) -> Decimal:
    """Duration in hours."""
    minutes = _minutes(end_time) - _minutes(start_time)
    return (Decimal(minutes) / Decimal(60)).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_total_price(price_per_hour: Decimal, start_time: time, end_time: time) -> Decimal:
    """Hourly rate times the stored (rounded) duration."""
    total = Decimal(price_per_hour) * calculate_duration(start_time, end_time)
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_interval(start_time: time, end_time: time) -> None:
    if start_time.tzinfo is not None or end_time.tzinfo is not None:
        raise ValidationError("Times must not carry a timezone offset")
    if start_time >= end_time:
        raise ValidationError("Start time must be before end time")


def _get_active_court(db: Session, court_id: int, for_update: bool = False) -> Court:
    query = db.query(Court).filter(Court.id == court_id)
    if for_update:
        query = query.with_for_update()
    court = query.first()
    if not court or not court.is_active:
        raise NotFoundError("Court not found")
    return court


def _active_bookings(db: Session, court_id: int, day: date) -> List[Booking]:
    return db.query(Booking).filter(
        Booking.court_id == court_id,
        Booking.date == day,
        Booking.status != BookingStatus.cancelled.value,
    ).all()


def _blocked_slots(db: Session, court_id: int, day: date) -> List[BlockedSlot]:
    return db.query(BlockedSlot).filter(
        BlockedSlot.court_id == court_id,
        BlockedSlot.date == day,
    ).all()


def find_conflicting_booking(
    db: Session, court_id: int, day: date, start_time: time, end_time: time
) -> Optional[Booking]:
    return db.query(Booking).filter(
        Booking.court_id == court_id,
        Booking.date == day,
        Booking.status != BookingStatus.cancelled.value,
        Booking.start_time < end_time,
        Booking.end_time > start_time,
    ).first()


def find_blocking_slot(
    db: Session, court_id: int, day: date, start_time: time, end_time: time
) -> Optional[BlockedSlot]:
    for slot in _blocked_slots(db, court_id, day):
        if intervals_overlap(slot.start_time, slot.end_time, start_time, end_time):
            return slot
    return None


def has_upcoming_bookings(
    db: Session,
    court_id: Optional[int] = None,
    facility_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> bool:
    """Whether a court (or facility) still has confirmed bookings that have not started."""
    now = now or datetime.now()
    query = db.query(Booking).filter(
        Booking.status == BookingStatus.confirmed.value,
        Booking.date >= now.date(),
    )
    if court_id is not None:
        query = query.filter(Booking.court_id == court_id)
    if facility_id is not None:
        query = query.filter(Booking.facility_id == facility_id)
    return any(datetime.combine(b.date, b.start_time) > now for b in query.all())


def create_booking(db: Session, request: BookingRequest) -> Booking:
    """
    Admit and persist a booking.

    Raises ValidationError, NotFoundError, FacilityNotApprovedError,
    SlotConflictError or SlotBlockedError. On success the booking is committed
    with status ``confirmed`` and a price frozen from the court's current rate.
    """
    validate_interval(request.start_time, request.end_time)

    with court_day_lock(request.court_id, request.date):
        try:
            court = _get_active_court(db, request.court_id, for_update=True)

            if not court.facility.is_bookable:
                logger.warning(f"⚠️ [BOOKINGS] Court {court.id} belongs to non approved facility {court.facility_id}")
                raise FacilityNotApprovedError()

            conflict = find_conflicting_booking(
                db, court.id, request.date, request.start_time, request.end_time
            )
            if conflict:
                logger.info(
                    f"❌ [BOOKINGS] Court {court.id} {request.date} "
                    f"{request.start_time}-{request.end_time} overlaps booking {conflict.id}"
                )
                raise SlotConflictError()

            blocked = find_blocking_slot(
                db, court.id, request.date, request.start_time, request.end_time
            )
            if blocked:
                logger.info(f"❌ [BOOKINGS] Court {court.id} {request.date} blocked: {blocked.reason}")
                raise SlotBlockedError()

            booking = Booking(
                user_id=request.user_id,
                facility_id=court.facility_id,
                court_id=court.id,
                date=request.date,
                start_time=request.start_time,
                end_time=request.end_time,
                duration=calculate_duration(request.start_time, request.end_time),
                total_price=calculate_total_price(
                    court.price_per_hour, request.start_time, request.end_time
                ),
                status=BookingStatus.confirmed.value,
            )
            db.add(booking)
            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(booking)
    logger.info(f"✅ [BOOKINGS] Booking {booking.id} created for user {booking.user_id} (total {booking.total_price})")
    return booking


def cancel_booking(
    db: Session,
    booking_id: int,
    actor: User,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Booking:
    """Cancel a future booking on behalf of the user who made it."""
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        raise NotFoundError("Booking not found")

    require(actor, Action.BOOKING_CANCEL, booking, detail="Not authorized")

    with court_day_lock(booking.court_id, booking.date):
        try:
            db.refresh(booking, with_for_update=True)

            if booking.status == BookingStatus.cancelled.value:
                raise AlreadyCancelledError()

            starts_at = datetime.combine(booking.date, booking.start_time)
            if starts_at <= (now or datetime.now()):
                raise BookingInPastError()

            booking.status = BookingStatus.cancelled.value
            booking.cancellation_reason = reason or "Cancelled by user"
            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(booking)
    logger.info(f"🗑️ [BOOKINGS] Booking {booking.id} cancelled. Reason: {booking.cancellation_reason}")
    return booking


def slot_grid(day_start: Optional[int] = None, day_end: Optional[int] = None):
    """Hourly (start, end) pairs, e.g. 06:00-07:00 … 22:00-23:00."""
    first = settings.SLOT_DAY_START if day_start is None else day_start
    last = settings.SLOT_DAY_END if day_end is None else day_end
    return [(time(hour, 0), time(hour + 1, 0)) for hour in range(first, last)]


def get_availability(db: Session, court_id: int, day: date) -> List[dict]:
    """
    Hourly slot list for a court/date.

    A slot is unavailable when it overlaps a non-cancelled booking or a
    blocked interval. Courts of non approved facilities have no availability.
    """
    court = _get_active_court(db, court_id)
    if not court.facility.is_bookable:
        raise FacilityNotApprovedError()

    bookings = _active_bookings(db, court.id, day)
    blocked = _blocked_slots(db, court.id, day)

    slots = []
    for start, end in slot_grid():
        is_booked = any(intervals_overlap(b.start_time, b.end_time, start, end) for b in bookings)
        is_blocked = any(intervals_overlap(s.start_time, s.end_time, start, end) for s in blocked)
        slots.append({
            "start_time": start,
            "end_time": end,
            "available": not is_booked and not is_blocked,
            "price": court.price_per_hour,
        })
    return slots
