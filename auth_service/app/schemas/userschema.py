from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

from shared.utils.enums import UserRole


class UserBase(BaseModel):
    email: EmailStr
    full_name: Optional[str] = ""
    role: UserRole = UserRole.USER

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("full_name", mode="before")
    def strip_name(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v


class UserCreate(UserBase):
    is_verified: bool = True


class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    is_verified: Optional[bool] = None

    @field_validator("full_name", mode="before")
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserOut(BaseModel):
    id: UUID
    email: str
    full_name: str
    role: str
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # allows Pydantic to work with SQLAlchemy objects


class UserListOut(BaseModel):
    users: list[UserOut]
    total: int


class UserQueryParams(BaseModel):
    search: Optional[str] = None
    role: Optional[UserRole] = None
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=100, ge=1, le=500)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut
