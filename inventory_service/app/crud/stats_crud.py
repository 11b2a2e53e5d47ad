# app/crud/stats_crud.py
from typing import Any, Dict, List
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.utils.time_utils import days_ago
from ..models.categories import Category
from ..models.items import Item
from ..schemas.items_schemas import ItemOut
from .items_crud import serialize_items

TOP_CATEGORIES = 5
RECENT_PRODUCTS = 5


def _money(value) -> float:
    return round(float(value or 0), 2)


def get_overview_data(db: Session) -> Dict[str, Any]:
    # ------------------- Totals -------------------
    total_products = db.query(func.count(Item.id)).scalar() or 0

    total_value = db.query(
        func.coalesce(func.sum(Item.price * Item.quantity), 0)
    ).scalar()

    total_cost = db.query(
        func.coalesce(func.sum(func.coalesce(Item.cost_price, 0) * Item.quantity), 0)
    ).scalar()

    # ------------------- Stock alerts -------------------
    low_stock_items = db.query(func.count(Item.id))\
        .filter(Item.quantity <= Item.min_stock_level)\
        .scalar() or 0

    out_of_stock_items = db.query(func.count(Item.id))\
        .filter(Item.quantity == 0)\
        .scalar() or 0

    # ------------------- Categories -------------------
    categories = db.query(func.count(Category.id)).scalar() or 0

    product_count = func.count(Item.id)
    top_rows = (
        db.query(
            Category.id,
            Category.name,
            Category.color,
            product_count.label("product_count"),
            func.coalesce(func.sum(Item.price * Item.quantity), 0).label("total_value"),
        )
        .outerjoin(Item, Item.category_id == Category.id)
        .group_by(Category.id, Category.name, Category.color)
        .order_by(product_count.desc(), Category.name)
        .limit(TOP_CATEGORIES)
        .all()
    )
    top_categories = [
        {
            "id": row.id,
            "name": row.name,
            "color": row.color,
            "product_count": int(row.product_count or 0),
            "total_value": _money(row.total_value),
        }
        for row in top_rows
    ]

    # ------------------- Recent activity -------------------
    recently_added = db.query(func.count(Item.id))\
        .filter(Item.created_at >= days_ago(settings.RECENT_DAYS))\
        .scalar() or 0

    recent = db.query(Item).order_by(
        Item.created_at.desc(), Item.name).limit(RECENT_PRODUCTS).all()

    return {
        "total_products": total_products,
        "total_value": _money(total_value),
        "total_cost": _money(total_cost),
        "total_profit": _money(float(total_value or 0) - float(total_cost or 0)),
        "low_stock_items": low_stock_items,
        "out_of_stock_items": out_of_stock_items,
        "categories": categories,
        "recently_added": recently_added,
        "top_categories": top_categories,
        "recent_products": serialize_items(recent),
    }


def get_low_stock_items(db: Session) -> List[ItemOut]:
    items = (
        db.query(Item)
        .filter(Item.quantity <= Item.min_stock_level)
        .order_by(Item.quantity.asc(), Item.name)
        .all()
    )
    return serialize_items(items)
