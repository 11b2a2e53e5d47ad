from pydantic import BaseModel
from uuid import UUID
from typing import List, Optional

from .items_schemas import ItemOut


class CategoryStat(BaseModel):
    id: UUID
    name: str
    color: Optional[str] = None
    product_count: int
    total_value: float


class OverviewResponse(BaseModel):
    total_products: int
    total_value: float
    total_cost: float
    total_profit: float
    low_stock_items: int
    out_of_stock_items: int
    categories: int
    recently_added: int
    top_categories: List[CategoryStat]
    recent_products: List[ItemOut]
