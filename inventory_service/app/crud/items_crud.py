# app/crud/items_crud.py
import logging
from typing import Iterable, List, Optional
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.helpers.user_helper import get_user_summary, get_users_bulk
from shared.utils.enums import ItemSortField, SortOrder
from shared.utils.search import LIKE_ESCAPE, contains_pattern
from ..models.categories import Category
from ..models.items import Item
from ..models.transactions import Transaction
from ..schemas.items_schemas import CreatorOut, ItemCreate, ItemOut, ItemQueryParams, ItemUpdate

logger = logging.getLogger(__name__)

# Columns that may be left out of an update but never cleared
REQUIRED_FIELDS = {"name", "price", "quantity", "min_stock_level"}

SORT_COLUMNS = {
    ItemSortField.NAME: Item.name,
    ItemSortField.PRICE: Item.price,
    ItemSortField.QUANTITY: Item.quantity,
    ItemSortField.CATEGORY: Category.name,
    ItemSortField.CREATED_AT: Item.created_at,
}


def serialize_items(items: Iterable[Item]) -> List[ItemOut]:
    """Convert ORM items to ItemOut, resolving creators from the auth DB in one query."""
    items = list(items)
    creators = get_users_bulk(i.created_by for i in items)

    result = []
    for item in items:
        out = ItemOut.model_validate(item)
        summary = get_user_summary(creators.get(item.created_by))
        if summary:
            out.created_by = CreatorOut(**summary)
        result.append(out)
    return result


def serialize_item(item: Item) -> ItemOut:
    return serialize_items([item])[0]


def get_items(db: Session, params: ItemQueryParams) -> dict:
    query = db.query(Item).outerjoin(Category, Item.category_id == Category.id)

    if params.search:
        term = contains_pattern(params.search.strip())
        query = query.filter(or_(
            Item.name.ilike(term, escape=LIKE_ESCAPE),
            Item.sku.ilike(term, escape=LIKE_ESCAPE),
            Item.barcode.ilike(term, escape=LIKE_ESCAPE),
            Item.description.ilike(term, escape=LIKE_ESCAPE),
        ))

    if params.category_id:
        query = query.filter(Item.category_id == params.category_id)

    if params.low_stock is True:
        query = query.filter(Item.quantity <= Item.min_stock_level)
    elif params.low_stock is False:
        query = query.filter(Item.quantity > Item.min_stock_level)

    total = query.count()

    column = SORT_COLUMNS[params.sort_by]
    ordering = column.desc() if params.order == SortOrder.DESC else column.asc()
    items = query.order_by(ordering, Item.name.asc(), Item.id).offset(
        params.skip).limit(params.limit).all()

    return {"items": serialize_items(items), "total": total}


def get_item_by_id(db: Session, item_id: UUID) -> Optional[Item]:
    return db.query(Item).filter(Item.id == item_id).first()


def get_item_by_barcode(db: Session, barcode: str) -> Optional[Item]:
    return db.query(Item).filter(Item.barcode == barcode.strip()).first()


def _ensure_category(db: Session, category_id: Optional[UUID]):
    if category_id is None:
        return
    if not db.query(Category.id).filter(Category.id == category_id).first():
        raise ValueError("Category not found")


def _ensure_unique_barcode(db: Session, barcode: Optional[str], exclude_id: Optional[UUID] = None):
    if not barcode:
        return
    query = db.query(Item.id).filter(Item.barcode == barcode)
    if exclude_id is not None:
        query = query.filter(Item.id != exclude_id)
    if query.first():
        raise ValueError(f"Barcode '{barcode}' is already assigned to another item")


def _commit(db: Session):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Item violates a uniqueness constraint (barcode)")


def create_item(db: Session, item: ItemCreate, user_id: UUID) -> ItemOut:
    _ensure_category(db, item.category_id)
    _ensure_unique_barcode(db, item.barcode)

    item_data = item.model_dump()
    if item_data.get("min_stock_level") is None:
        item_data["min_stock_level"] = settings.DEFAULT_MIN_STOCK_LEVEL

    db_item = Item(created_by=user_id, **item_data)
    db.add(db_item)
    _commit(db)
    db.refresh(db_item)

    logger.info("Item %s (%s) created by %s", db_item.id, db_item.name, user_id)
    return serialize_item(db_item)


def update_item(db: Session, item_id: UUID, item: ItemUpdate) -> Optional[ItemOut]:
    db_item = get_item_by_id(db, item_id)
    if not db_item:
        return None

    changes = {
        k: v for k, v in item.model_dump(exclude_unset=True).items()
        if not (k in REQUIRED_FIELDS and v is None)
    }

    if "category_id" in changes:
        _ensure_category(db, changes["category_id"])
    if changes.get("barcode"):
        _ensure_unique_barcode(db, changes["barcode"], exclude_id=db_item.id)

    for k, v in changes.items():
        setattr(db_item, k, v)

    _commit(db)
    db.refresh(db_item)

    logger.info("Item %s updated (%s)", db_item.id, ", ".join(changes) or "no changes")
    return serialize_item(db_item)


def set_item_image(db: Session, item_id: UUID, image_path: str) -> Optional[ItemOut]:
    db_item = get_item_by_id(db, item_id)
    if not db_item:
        return None

    db_item.image = image_path
    db.commit()
    db.refresh(db_item)
    return serialize_item(db_item)


def delete_item(db: Session, item_id: UUID) -> Optional[ItemOut]:
    """
    Hard delete an item together with its stock transactions.
    Returns the deleted item, or None when it does not exist.
    """
    db_item = get_item_by_id(db, item_id)
    if not db_item:
        return None

    deleted = serialize_item(db_item)

    db.query(Transaction).filter(
        Transaction.item_id == db_item.id
    ).delete(synchronize_session=False)
    db.delete(db_item)
    db.commit()

    logger.info("Item %s (%s) deleted", deleted.id, deleted.name)
    return deleted
