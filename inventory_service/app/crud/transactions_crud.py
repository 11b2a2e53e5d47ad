# app/crud/transactions_crud.py
import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from shared.utils.enums import TransactionType
from ..models.items import Item
from ..models.transactions import Transaction
from ..schemas.transactions_schemas import TransactionCreate, TransactionOut, TransactionQueryParams

logger = logging.getLogger(__name__)


class InsufficientStockError(ValueError):
    pass


def get_transactions(db: Session, params: TransactionQueryParams) -> dict:
    query = db.query(Transaction)

    if params.item_id:
        query = query.filter(Transaction.item_id == params.item_id)
    if params.type:
        query = query.filter(Transaction.type == params.type.value)

    total = query.count()
    rows = query.order_by(Transaction.date.desc()).offset(
        params.skip).limit(params.limit).all()

    return {
        "transactions": [TransactionOut.model_validate(t) for t in rows],
        "total": total
    }


def get_transaction_by_id(db: Session, transaction_id: UUID) -> Optional[TransactionOut]:
    row = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    return TransactionOut.model_validate(row) if row else None


def create_transaction(db: Session, data: TransactionCreate, user_id: UUID) -> Optional[TransactionOut]:
    """
    Record a stock movement and apply it to the item quantity in one commit.
    Returns None when the item does not exist.
    """
    # Row lock so concurrent movements on one item serialize (no-op on sqlite)
    item = (
        db.query(Item)
        .filter(Item.id == data.item_id)
        .with_for_update()
        .first()
    )
    if not item:
        return None

    if data.type == TransactionType.STOCK_OUT:
        if item.quantity < data.quantity:
            db.rollback()
            raise InsufficientStockError(
                f"Insufficient stock for '{item.name}': requested {data.quantity}, available {item.quantity}")
        item.quantity -= data.quantity
    else:
        item.quantity += data.quantity

    transaction = Transaction(
        item_id=item.id,
        quantity=data.quantity,
        type=data.type.value,
        notes=data.notes,
        quantity_after=item.quantity,
        created_by=user_id,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)

    logger.info("Stock %s of %s for item %s, now %s on hand",
                transaction.type, transaction.quantity, item.id, item.quantity)
    return TransactionOut.model_validate(transaction)
