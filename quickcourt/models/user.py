from sqlalchemy import Column, String, Integer, DateTime, func
from sqlalchemy.orm import relationship
from quickcourt.database import Base
from quickcourt.models.enums import UserRole, UserStatus

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20), unique=True, nullable=True)
    avatar = Column(String(255), default="")
    role = Column(String(20), nullable=False, default=UserRole.user.value)  # user, facility_owner, admin
    status = Column(String(20), nullable=False, default=UserStatus.active.value)  # active, banned
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    facilities = relationship("Facility", back_populates="owner", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="user")
