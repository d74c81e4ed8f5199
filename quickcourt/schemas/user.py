from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime
from quickcourt.models.enums import UserStatus

class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    avatar: Optional[str] = ""
    role: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    avatar: Optional[str] = Field(None, max_length=255)

class UserStatusUpdate(BaseModel):
    status: UserStatus

class UserPage(BaseModel):
    items: List[UserResponse]
    total: int
    total_pages: int
    current_page: int
