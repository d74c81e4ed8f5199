from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from quickcourt.models.enums import UserRole

class TokenUser(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: str
    avatar: Optional[str] = ""

    class Config:
        from_attributes = True

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: TokenUser

class Login(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class Register(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str
    phone: Optional[str] = Field(None, max_length=20)
    role: UserRole = UserRole.user

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_length(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("role")
    @classmethod
    def no_admin_signup(cls, v):
        if v == UserRole.admin:
            raise ValueError("Admin accounts cannot be self-registered")
        return v
