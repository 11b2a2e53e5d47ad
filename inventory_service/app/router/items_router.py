# app/router/items_router.py
import logging
import os
import uuid
from uuid import UUID
from typing import Annotated
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session
from shared.core.auth import allow_admin, validate_current_token
from shared.core.config import settings
from shared.core.database import get_inventory_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud import items_crud as crud
from ..schemas.items_schemas import ItemCreate, ItemListOut, ItemOut, ItemQueryParams, ItemUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/items",
                   tags=["items"], dependencies=[Depends(validate_current_token)])

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
MAX_IMAGE_BYTES = 5 * 1024 * 1024
CHUNK_BYTES = 64 * 1024
IMAGE_URL_PREFIX = "/uploads/items/"


def _item_not_found():
    raise HTTPException(status_code=404, detail="Item not found")


def _read_limited(file: UploadFile) -> bytes:
    chunks, size = [], 0
    while True:
        chunk = file.file.read(CHUNK_BYTES)
        if not chunk:
            return b"".join(chunks)
        size += len(chunk)
        if size > MAX_IMAGE_BYTES:
            return error_response("Image exceeds the 5 MB limit",
                                  AppStatusCode.INVALID_INPUT)
        chunks.append(chunk)


def _remove_stored_image(image: str):
    # Only files this service wrote under UPLOAD_DIR are removed
    if not image or not image.startswith(IMAGE_URL_PREFIX):
        return
    path = os.path.join(settings.UPLOAD_DIR, "items", os.path.basename(image))
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Previous image %s was already gone", path)


@router.get("", response_model=ItemListOut)
def read_items(
    params: Annotated[ItemQueryParams, Query()],
    db: Session = Depends(get_db)
):
    return crud.get_items(db, params)


@router.get("/{item_id}", response_model=ItemOut)
def read_item(
    item_id: UUID,
    db: Session = Depends(get_db)
):
    db_item = crud.get_item_by_id(db, item_id)
    if not db_item:
        _item_not_found()
    return crud.serialize_item(db_item)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
def create_item(
    item: ItemCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    try:
        created = crud.create_item(db, item, UUID(current_user.user_id))
    except ValueError as e:
        return error_response(str(e), AppStatusCode.INVALID_INPUT)
    return success_response(created, "Item added successfully",
                            AppStatusCode.CREATED_SUCCESSFULLY)


@router.put("/{item_id}", response_model=None)
def update_item(
    item_id: UUID,
    item: ItemUpdate,
    db: Session = Depends(get_db)
):
    try:
        updated = crud.update_item(db, item_id, item)
    except ValueError as e:
        return error_response(str(e), AppStatusCode.INVALID_INPUT)
    if not updated:
        _item_not_found()
    return success_response(updated, "Item updated successfully",
                            AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/{item_id}/image", response_model=None)
def upload_item_image(
    item_id: UUID,
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    extension = ALLOWED_IMAGE_TYPES.get(file.content_type or "")
    if not extension:
        return error_response(
            f"Unsupported image type '{file.content_type}'", AppStatusCode.INVALID_INPUT)

    db_item = crud.get_item_by_id(db, item_id)
    if not db_item:
        _item_not_found()
    previous_image = db_item.image

    content = _read_limited(file)

    upload_dir = os.path.join(settings.UPLOAD_DIR, "items")
    os.makedirs(upload_dir, exist_ok=True)
    filename = f"{item_id}-{uuid.uuid4().hex}{extension}"
    with open(os.path.join(upload_dir, filename), "wb") as buffer:
        buffer.write(content)

    updated = crud.set_item_image(db, item_id, IMAGE_URL_PREFIX + filename)
    _remove_stored_image(previous_image)
    logger.info("Stored image %s for item %s", filename, item_id)
    return success_response(updated, "Image uploaded successfully",
                            AppStatusCode.UPDATED_SUCCESSFULLY)

# ---------------- Delete Item (admin only) ----------------


@router.delete("/{item_id}", response_model=None)
def delete_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_admin)
):
    deleted = crud.delete_item(db, item_id)
    if not deleted:
        _item_not_found()
    return success_response(deleted, "Item deleted successfully",
                            AppStatusCode.DELETED_SUCCESSFULLY)
