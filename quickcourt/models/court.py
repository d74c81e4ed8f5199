from sqlalchemy import Column, String, Integer, Time, Date, Numeric, Boolean, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quickcourt.database import Base

class Court(Base):
    __tablename__ = "courts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    facility_id = Column(Integer, ForeignKey("facilities.id", ondelete="CASCADE"), nullable=False, index=True)
    sport_type = Column(String(20), nullable=False)
    price_per_hour = Column(Numeric(10, 2), nullable=False)
    opening_time = Column(Time, nullable=False)
    closing_time = Column(Time, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    facility = relationship("Facility", back_populates="courts")
    blocked_slots = relationship(
        "BlockedSlot",
        back_populates="court",
        cascade="all, delete-orphan",
        order_by="BlockedSlot.date",
    )
    # Not cascaded, booking history stays
    bookings = relationship("Booking", back_populates="court", passive_deletes="all")


class BlockedSlot(Base):
    """Maintenance window during which a court cannot be booked."""
    __tablename__ = "court_blocked_slots"

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(Integer, ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    reason = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    court = relationship("Court", back_populates="blocked_slots")
