# quickcourt/schemas/court.py
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
import datetime as dt
from decimal import Decimal
from quickcourt.models.enums import SportType

class CourtBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Court name")
    sport_type: SportType = Field(..., description="Sport played on the court")
    price_per_hour: Decimal = Field(..., gt=0, description="Hourly price")
    opening_time: dt.time = Field(..., description="Opening time")
    closing_time: dt.time = Field(..., description="Closing time")
    is_active: bool = True

    @field_validator("opening_time", "closing_time")
    @classmethod
    def local_time_only(cls, v):
        if v.tzinfo is not None:
            raise ValueError("Times are local to the facility and must not carry a timezone offset")
        return v

    @model_validator(mode="after")
    def check_hours(self):
        if self.opening_time >= self.closing_time:
            raise ValueError("opening_time must be before closing_time")
        return self

class CourtCreate(CourtBase):
    facility_id: int = Field(..., description="Facility the court belongs to")

class CourtUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    sport_type: Optional[SportType] = None
    price_per_hour: Optional[Decimal] = Field(None, gt=0)
    opening_time: Optional[dt.time] = None
    closing_time: Optional[dt.time] = None
    is_active: Optional[bool] = None

    @field_validator("opening_time", "closing_time")
    @classmethod
    def local_time_only(cls, v):
        if v is not None and v.tzinfo is not None:
            raise ValueError("Times are local to the facility and must not carry a timezone offset")
        return v

class BlockedSlotCreate(BaseModel):
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    reason: Optional[str] = Field("", max_length=255)

    @field_validator("start_time", "end_time")
    @classmethod
    def local_time_only(cls, v):
        if v.tzinfo is not None:
            raise ValueError("Times are local to the facility and must not carry a timezone offset")
        return v

class BlockedSlotResponse(BaseModel):
    id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    reason: Optional[str] = ""

    class Config:
        from_attributes = True

class CourtResponse(BaseModel):
    id: int
    name: str
    facility_id: int
    sport_type: str
    price_per_hour: Decimal
    opening_time: dt.time
    closing_time: dt.time
    is_active: bool
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True

class CourtDetailResponse(CourtResponse):
    facility_name: Optional[str] = None
    blocked_slots: List[BlockedSlotResponse] = []
