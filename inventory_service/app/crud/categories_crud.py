# app/crud/categories_crud.py
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.categories import Category
from ..models.items import Item
from ..schemas.categories_schemas import CategoryCreate, CategoryOut, CategoryUpdate

logger = logging.getLogger(__name__)


def _category_stats_query(db: Session):
    return (
        db.query(
            Category,
            func.count(Item.id).label("product_count"),
            func.coalesce(func.sum(Item.price * Item.quantity), 0).label("total_value"),
        )
        .outerjoin(Item, Item.category_id == Category.id)
        .group_by(Category.id)
    )


def _to_out(category: Category, product_count: int = 0, total_value: float = 0.0) -> CategoryOut:
    out = CategoryOut.model_validate(category)
    out.product_count = int(product_count or 0)
    out.total_value = round(float(total_value or 0), 2)
    return out


def get_categories(db: Session) -> List[CategoryOut]:
    rows = _category_stats_query(db).order_by(Category.name).all()
    return [_to_out(c, count, value) for c, count, value in rows]


def get_category_by_id(db: Session, category_id: UUID) -> Optional[CategoryOut]:
    row = _category_stats_query(db).filter(Category.id == category_id).first()
    if not row:
        return None
    category, count, value = row
    return _to_out(category, count, value)


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[UUID] = None):
    query = db.query(Category.id).filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first():
        raise ValueError(f"Category '{name}' already exists")


def create_category(db: Session, category: CategoryCreate) -> CategoryOut:
    _ensure_unique_name(db, category.name)

    db_category = Category(**category.model_dump())
    db.add(db_category)
    db.commit()
    db.refresh(db_category)

    logger.info("Category %s (%s) created", db_category.id, db_category.name)
    return _to_out(db_category)


def update_category(db: Session, category_id: UUID, category: CategoryUpdate) -> Optional[CategoryOut]:
    db_category = db.query(Category).filter(Category.id == category_id).first()
    if not db_category:
        return None

    changes = category.model_dump(exclude_unset=True)
    if changes.get("name"):
        _ensure_unique_name(db, changes["name"], exclude_id=db_category.id)
    elif "name" in changes:
        changes.pop("name")

    for k, v in changes.items():
        setattr(db_category, k, v)

    db.commit()
    logger.info("Category %s updated (%s)", db_category.id, ", ".join(changes) or "no changes")
    return get_category_by_id(db, category_id)


def delete_category(db: Session, category_id: UUID) -> Optional[CategoryOut]:
    """Delete a category; its items stay in the catalogue without a category."""
    deleted = get_category_by_id(db, category_id)
    if not deleted:
        return None

    db.query(Item).filter(Item.category_id == category_id).update(
        {"category_id": None}, synchronize_session=False)
    db.query(Category).filter(Category.id == category_id).delete(
        synchronize_session=False)
    db.commit()

    logger.info("Category %s (%s) deleted, %s items detached",
                deleted.id, deleted.name, deleted.product_count)
    return deleted
