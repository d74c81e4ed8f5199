from sqlalchemy import Column, String, Integer, Text, DateTime, Float, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from quickcourt.database import Base
from quickcourt.models.enums import FacilityStatus

class Facility(Base):
    __tablename__ = "facilities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Address
    street = Column(String(150))
    city = Column(String(100), index=True)
    state = Column(String(100))
    zip_code = Column(String(20))
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    sports_supported = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    # {"monday": {"open": "06:00", "close": "22:00", "is_open": true}, ...}
    operating_hours = Column(JSON, nullable=False, default=dict)

    status = Column(String(20), nullable=False, default=FacilityStatus.pending.value, index=True)
    admin_comments = Column(Text, default="")

    rating_average = Column(Float, default=0)
    rating_count = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="facilities")
    courts = relationship("Court", back_populates="facility", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="facility", passive_deletes="all")

    @property
    def is_bookable(self) -> bool:
        return self.status == FacilityStatus.approved.value
