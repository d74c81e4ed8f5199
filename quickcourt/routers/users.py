import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from quickcourt.database import get_db
from quickcourt.core.core import paginate
from quickcourt.core.exceptions import NotFoundError
from quickcourt.core.policy import Action, is_allowed, require
from quickcourt.core.security import get_current_user
from quickcourt.models.booking import Booking
from quickcourt.models.enums import BookingStatus, FacilityStatus, UserRole, UserStatus
from quickcourt.models.facility import Facility
from quickcourt.models.user import User
from quickcourt.schemas.booking import BookingResponse
from quickcourt.schemas.user import ProfileUpdate, UserPage, UserResponse, UserStatusUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


def _revenue(bookings) -> Decimal:
    return sum(
        (b.total_price for b in bookings if b.status != BookingStatus.cancelled.value),
        Decimal("0"),
    )


def _count(items, **conditions) -> int:
    return len([i for i in items if all(getattr(i, k) == v for k, v in conditions.items())])


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    profile_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = profile_data.model_dump(exclude_unset=True)

    if changes.get("phone") and changes["phone"] != current_user.phone:
        phone_taken = db.query(User).filter(
            User.phone == changes["phone"],
            User.id != current_user.id
        ).first()
        if phone_taken:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Phone number already registered"
            )

    for field, value in changes.items():
        if field == "name" and not value:
            continue
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/dashboard-stats")
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Role dependent counters for the dashboard"""
    if is_allowed(current_user, Action.USER_MANAGE):
        users = db.query(User).all()
        facilities = db.query(Facility).all()
        bookings = db.query(Booking).all()
        return {
            "total_users": _count(users, role=UserRole.user.value),
            "total_facility_owners": _count(users, role=UserRole.facility_owner.value),
            "total_admins": _count(users, role=UserRole.admin.value),
            "total_facilities": len(facilities),
            "pending_approvals": _count(facilities, status=FacilityStatus.pending.value),
            "total_bookings": len(bookings),
            "total_revenue": _revenue(bookings),
        }

    if is_allowed(current_user, Action.OWNER_DASHBOARD):
        facilities = db.query(Facility).filter(Facility.owner_id == current_user.id).all()
        facility_ids = [f.id for f in facilities]
        bookings = db.query(Booking).filter(Booking.facility_id.in_(facility_ids)).all() if facility_ids else []
        today = date.today()
        return {
            "total_facilities": len(facilities),
            "approved_facilities": _count(facilities, status=FacilityStatus.approved.value),
            "pending_facilities": _count(facilities, status=FacilityStatus.pending.value),
            "total_bookings": len(bookings),
            "total_earnings": _revenue(bookings),
            "this_month_bookings": len([
                b for b in bookings if b.date.year == today.year and b.date.month == today.month
            ]),
        }

    bookings = db.query(Booking).filter(Booking.user_id == current_user.id).all()
    return {
        "total_bookings": len(bookings),
        "confirmed_bookings": _count(bookings, status=BookingStatus.confirmed.value),
        "completed_bookings": _count(bookings, status=BookingStatus.completed.value),
        "cancelled_bookings": _count(bookings, status=BookingStatus.cancelled.value),
        "total_spent": sum((b.total_price for b in bookings), Decimal("0")),
    }


@router.get("/admin/all-users", response_model=UserPage)
def get_all_users(
    role: Optional[UserRole] = None,
    status_filter: Optional[UserStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require(current_user, Action.USER_MANAGE)

    query = db.query(User)
    if role:
        query = query.filter(User.role == role.value)
    if status_filter:
        query = query.filter(User.status == status_filter.value)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

    return paginate(query.order_by(User.created_at.desc(), User.id.desc()), page, limit)


@router.patch("/admin/user/{user_id}/status", response_model=UserResponse)
def update_user_status(
    user_id: int,
    status_data: UserStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Ban or reactivate an account"""
    require(current_user, Action.USER_MANAGE)

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")

    if user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot change their own status"
        )

    user.status = status_data.status.value
    db.commit()
    db.refresh(user)

    logger.info(f"🔒 [USERS] User {user.id} status set to {user.status} by admin {current_user.id}")
    return user


@router.get("/admin/user/{user_id}/bookings", response_model=List[BookingResponse])
def get_user_bookings(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Last 10 bookings of a user"""
    require(current_user, Action.USER_MANAGE)

    return db.query(Booking).options(
        joinedload(Booking.court),
        joinedload(Booking.facility),
    ).filter(
        Booking.user_id == user_id
    ).order_by(Booking.created_at.desc(), Booking.id.desc()).limit(10).all()
