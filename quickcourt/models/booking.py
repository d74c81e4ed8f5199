from sqlalchemy import Column, String, Integer, Date, Time, Numeric, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quickcourt.database import Base
from quickcourt.models.enums import BookingStatus

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    facility_id = Column(Integer, ForeignKey("facilities.id", ondelete="RESTRICT"), nullable=False, index=True)
    court_id = Column(Integer, ForeignKey("courts.id", ondelete="RESTRICT"), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    duration = Column(Numeric(5, 2), nullable=False)  # hours
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.confirmed.value)  # confirmed, cancelled, completed
    cancellation_reason = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="bookings")
    facility = relationship("Facility", back_populates="bookings")
    court = relationship("Court", back_populates="bookings")

    __table_args__ = (
        Index("ix_bookings_court_date", "court_id", "date"),
    )
