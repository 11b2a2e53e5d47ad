# app/router/barcodes_router.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from shared.core.auth import validate_current_token
from shared.core.database import get_inventory_db as get_db
from ..crud import barcodes_crud
from ..crud import items_crud
from ..schemas.barcodes_schemas import GeneratedBarcode
from ..schemas.items_schemas import ItemOut

router = APIRouter(prefix="/api/barcodes",
                   tags=["barcodes"], dependencies=[Depends(validate_current_token)])


@router.post("/generate", response_model=GeneratedBarcode)
def generate_barcode(db: Session = Depends(get_db)):
    return GeneratedBarcode(barcode=barcodes_crud.generate_unique_barcode(db))


@router.get("/{barcode}", response_model=ItemOut)
def lookup_barcode(barcode: str, db: Session = Depends(get_db)):
    item = items_crud.get_item_by_barcode(db, barcode.strip())
    if not item:
        raise HTTPException(status_code=404, detail="Product not found for barcode")
    return items_crud.serialize_item(item)
