from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
import datetime as dt
from decimal import Decimal

class BookingCreate(BaseModel):
    court_id: int = Field(..., description="Court to book")
    date: dt.date = Field(..., description="Calendar day of the booking")
    start_time: dt.time
    end_time: dt.time

    @field_validator("start_time", "end_time")
    @classmethod
    def local_time_only(cls, v):
        if v.tzinfo is not None:
            raise ValueError("Times are local to the facility and must not carry a timezone offset")
        return v

class BookingCancel(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)

class BookingCourtInfo(BaseModel):
    id: int
    name: str
    sport_type: str

    class Config:
        from_attributes = True

class BookingFacilityInfo(BaseModel):
    id: int
    name: str
    city: Optional[str] = None

    class Config:
        from_attributes = True

class BookingUserInfo(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True

class BookingResponse(BaseModel):
    id: int
    user_id: int
    facility_id: int
    court_id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    duration: Decimal
    total_price: Decimal
    status: str
    cancellation_reason: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    court: Optional[BookingCourtInfo] = None
    facility: Optional[BookingFacilityInfo] = None

    class Config:
        from_attributes = True

class OwnerBookingResponse(BookingResponse):
    user: Optional[BookingUserInfo] = None

class BookingPage(BaseModel):
    items: List[BookingResponse]
    total: int
    total_pages: int
    current_page: int

class OwnerBookingPage(BaseModel):
    items: List[OwnerBookingResponse]
    total: int
    total_pages: int
    current_page: int

class AvailabilitySlot(BaseModel):
    start_time: dt.time
    end_time: dt.time
    available: bool
    price: Decimal

