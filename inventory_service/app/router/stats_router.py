# app/router/stats_router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shared.core.auth import validate_current_token
from shared.core.database import get_inventory_db as get_db
from ..crud import stats_crud
from ..schemas.items_schemas import ItemOut
from ..schemas.stats_schemas import OverviewResponse

router = APIRouter(prefix="/api/stats",
                   tags=["stats"], dependencies=[Depends(validate_current_token)])


@router.get("/overview", response_model=OverviewResponse)
def overview(db: Session = Depends(get_db)):
    return stats_crud.get_overview_data(db)


@router.get("/low-stock", response_model=List[ItemOut])
def low_stock(db: Session = Depends(get_db)):
    return stats_crud.get_low_stock_items(db)
