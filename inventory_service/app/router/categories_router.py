# app/router/categories_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from shared.core.auth import allow_admin, allow_staff, validate_current_token
from shared.core.database import get_inventory_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud import categories_crud as crud
from ..schemas.categories_schemas import CategoryCreate, CategoryOut, CategoryUpdate

router = APIRouter(prefix="/api/categories",
                   tags=["categories"], dependencies=[Depends(validate_current_token)])


def _category_not_found():
    raise HTTPException(status_code=404, detail="Category not found")


@router.get("", response_model=List[CategoryOut])
def read_categories(db: Session = Depends(get_db)):
    return crud.get_categories(db)


@router.get("/{category_id}", response_model=CategoryOut)
def read_category(category_id: UUID, db: Session = Depends(get_db)):
    category = crud.get_category_by_id(db, category_id)
    if not category:
        _category_not_found()
    return category


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    try:
        created = crud.create_category(db, category)
    except ValueError as e:
        return error_response(str(e), AppStatusCode.DUPLICATE_RECORD)
    return success_response(created, "Category created successfully",
                            AppStatusCode.CREATED_SUCCESSFULLY)


@router.put("/{category_id}", response_model=None)
def update_category(
    category_id: UUID,
    category: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_staff)
):
    try:
        updated = crud.update_category(db, category_id, category)
    except ValueError as e:
        return error_response(str(e), AppStatusCode.DUPLICATE_RECORD)
    if not updated:
        _category_not_found()
    return success_response(updated, "Category updated successfully",
                            AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{category_id}", response_model=None)
def delete_category(
    category_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_admin)
):
    deleted = crud.delete_category(db, category_id)
    if not deleted:
        _category_not_found()
    return success_response(deleted, "Category deleted successfully",
                            AppStatusCode.DELETED_SUCCESSFULLY)
