from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from typing import Optional
from datetime import datetime


def _clean_text(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class CategoryBase(BaseModel):
    name: str = Field(max_length=128)
    description: Optional[str] = None
    color: Optional[str] = Field(default="#3B82F6", max_length=32)
    icon: Optional[str] = Field(default=None, max_length=32)

    @field_validator("name", mode="before")
    def check_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("name must not be empty")
        return v

    strip_text = field_validator("description", "color", "icon", mode="before")(_clean_text)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=128)
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=32)
    icon: Optional[str] = Field(default=None, max_length=32)

    @field_validator("name", mode="before")
    def check_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("name must not be empty")
        return v


class CategoryOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    product_count: int = 0
    total_value: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
