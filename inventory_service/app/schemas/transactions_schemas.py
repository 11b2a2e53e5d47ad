from pydantic import BaseModel, Field
from uuid import UUID
from typing import List, Optional
from datetime import datetime

from shared.utils.enums import TransactionType


class TransactionCreate(BaseModel):
    item_id: UUID
    quantity: int = Field(gt=0)
    type: TransactionType
    notes: Optional[str] = None


class TransactionItemSummary(BaseModel):
    id: UUID
    name: str
    sku: Optional[str] = None
    barcode: Optional[str] = None
    quantity: int

    class Config:
        from_attributes = True


class TransactionOut(BaseModel):
    id: UUID
    item_id: UUID
    item: Optional[TransactionItemSummary] = None
    quantity: int
    type: TransactionType
    notes: Optional[str] = None
    quantity_after: int
    date: Optional[datetime] = None
    created_by: Optional[UUID] = None

    class Config:
        from_attributes = True


class TransactionListOut(BaseModel):
    transactions: List[TransactionOut]
    total: int


class TransactionQueryParams(BaseModel):
    item_id: Optional[UUID] = None
    type: Optional[TransactionType] = None
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=100, ge=1, le=500)
