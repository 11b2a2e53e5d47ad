# app/router/transactions_router.py
from typing import Annotated
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from shared.core.auth import allow_staff, validate_current_token
from shared.core.database import get_inventory_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud import transactions_crud as crud
from ..schemas.transactions_schemas import (
    TransactionCreate, TransactionListOut, TransactionOut, TransactionQueryParams)

router = APIRouter(prefix="/api/transactions",
                   tags=["transactions"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=TransactionListOut)
def read_transactions(
    params: Annotated[TransactionQueryParams, Query()],
    db: Session = Depends(get_db)
):
    return crud.get_transactions(db, params)


@router.get("/{transaction_id}", response_model=TransactionOut)
def read_transaction(transaction_id: UUID, db: Session = Depends(get_db)):
    transaction = crud.get_transaction_by_id(db, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
def create_transaction(
    data: TransactionCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    try:
        transaction = crud.create_transaction(db, data, UUID(current_user.user_id))
    except crud.InsufficientStockError as e:
        return error_response(str(e), AppStatusCode.INSUFFICIENT_STOCK,
                              http_status=status.HTTP_409_CONFLICT)
    if not transaction:
        raise HTTPException(status_code=404, detail="Item not found")
    return success_response(transaction, "Transaction recorded successfully",
                            AppStatusCode.CREATED_SUCCESSFULLY)
