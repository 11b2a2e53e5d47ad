# app/crud/barcodes_crud.py
import secrets
from sqlalchemy.orm import Session

from ..models.items import Item

BARCODE_LOW = 1_000_000_000_000
BARCODE_HIGH = 9_999_999_999_999
MAX_ATTEMPTS = 20


def generate_unique_barcode(db: Session) -> str:
    """Return a random 13-digit barcode that no item uses yet."""
    for _ in range(MAX_ATTEMPTS):
        candidate = str(BARCODE_LOW + secrets.randbelow(BARCODE_HIGH - BARCODE_LOW + 1))
        if not db.query(Item.id).filter(Item.barcode == candidate).first():
            return candidate
    raise RuntimeError("Could not generate an unused barcode")
