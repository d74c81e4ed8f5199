from pydantic import AfterValidator, BaseModel, Field
from typing import Annotated, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
from quickcourt.models.enums import FacilityStatus, SportType
from quickcourt.schemas.court import CourtResponse

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

class DayHours(BaseModel):
    open: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    close: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    is_open: bool = True

def _check_weekdays(v):
    if v is None:
        return v
    unknown = [day for day in v if day not in WEEKDAYS]
    if unknown:
        raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
    return v

OperatingHours = Annotated[Dict[str, DayHours], AfterValidator(_check_weekdays)]

class FacilityBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    street: Optional[str] = Field(None, max_length=150)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    sports_supported: List[SportType] = []
    amenities: List[str] = []
    operating_hours: OperatingHours = {}

class FacilityCreate(FacilityBase):
    pass

class FacilityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    street: Optional[str] = Field(None, max_length=150)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    sports_supported: Optional[List[SportType]] = None
    amenities: Optional[List[str]] = None
    operating_hours: Optional[OperatingHours] = None

class FacilityReview(BaseModel):
    status: FacilityStatus
    comments: Optional[str] = Field(None, max_length=1000)

class OwnerInfo(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True

class FacilityResponse(BaseModel):
    id: int
    name: str
    description: str
    owner_id: int
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    sports_supported: List[str] = []
    amenities: List[str] = []
    operating_hours: Dict[str, DayHours] = {}
    status: str
    admin_comments: Optional[str] = ""
    rating_average: Optional[float] = 0
    rating_count: Optional[int] = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class FacilityAdminResponse(FacilityResponse):
    owner: Optional[OwnerInfo] = None

class FacilityListItem(FacilityResponse):
    courts: int = 0
    starting_price: Decimal = Decimal("0")

class FacilityPage(BaseModel):
    items: List[FacilityListItem]
    total: int
    total_pages: int
    current_page: int

class FacilityDetailResponse(FacilityAdminResponse):
    courts: List[CourtResponse] = []

class OwnerFacilityResponse(FacilityResponse):
    total_courts: int = 0
    active_courts: int = 0
