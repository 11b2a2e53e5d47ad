from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from typing import List, Optional
from datetime import datetime

from shared.utils.enums import ItemSortField, SortOrder

OPTIONAL_TEXT_FIELDS = ("description", "sku", "barcode",
                        "image", "supplier", "location")


def _clean_text(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def _clean_name(v):
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
    return v


class ItemBase(BaseModel):
    name: str = Field(max_length=200)
    description: Optional[str] = None
    price: float = Field(ge=0)
    cost_price: Optional[float] = Field(default=None, ge=0)
    quantity: int = Field(default=0, ge=0)
    min_stock_level: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[UUID] = None
    sku: Optional[str] = Field(default=None, max_length=64)
    barcode: Optional[str] = Field(default=None, max_length=64)
    image: Optional[str] = None
    supplier: Optional[str] = None
    location: Optional[str] = None

    strip_text = field_validator(*OPTIONAL_TEXT_FIELDS, mode="before")(_clean_text)
    check_name = field_validator("name", mode="before")(_clean_name)


class ItemCreate(ItemBase):
    pass


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    cost_price: Optional[float] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=0)
    min_stock_level: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[UUID] = None
    sku: Optional[str] = Field(default=None, max_length=64)
    barcode: Optional[str] = Field(default=None, max_length=64)
    image: Optional[str] = None
    supplier: Optional[str] = None
    location: Optional[str] = None

    strip_text = field_validator(*OPTIONAL_TEXT_FIELDS, mode="before")(_clean_text)
    check_name = field_validator("name", mode="before")(_clean_name)


class CreatorOut(BaseModel):
    id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None


class CategorySummary(BaseModel):
    id: UUID
    name: str
    color: Optional[str] = None

    class Config:
        from_attributes = True


class ItemOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    price: float
    cost_price: Optional[float] = None
    quantity: int
    min_stock_level: int
    category_id: Optional[UUID] = None
    category: Optional[CategorySummary] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    image: Optional[str] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    is_low_stock: bool
    stock_value: float = 0.0
    created_by: Optional[CreatorOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_by", mode="before")
    def creator_from_id(cls, v):
        # rows only hold the id; email and name are filled in from the auth DB
        return {"id": v} if isinstance(v, UUID) else v

    class Config:
        from_attributes = True


class ItemListOut(BaseModel):
    items: List[ItemOut]
    total: int


class ItemQueryParams(BaseModel):
    search: Optional[str] = None
    category_id: Optional[UUID] = None
    low_stock: Optional[bool] = None
    sort_by: ItemSortField = ItemSortField.NAME
    order: SortOrder = SortOrder.ASC
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=100, ge=1, le=500)
