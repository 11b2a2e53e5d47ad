# app/main.py
import logging
import os
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import Base, get_inventory_db, inventory_engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.utils.time_utils import utcnow
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from .models import categories, items, transactions  # noqa: F401  registers the tables
from .router import (
    barcodes_router,
    categories_router,
    items_router,
    stats_router,
    transactions_router,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Inventory Service API")

# Create all tables
Base.metadata.create_all(bind=inventory_engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Uploaded item images
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Include routers
app.include_router(categories_router.router)
app.include_router(items_router.router)
app.include_router(barcodes_router.router)
app.include_router(transactions_router.router)
app.include_router(stats_router.router)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Inventory Management API is running"


@app.get("/api/health")
def health(db: Session = Depends(get_inventory_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "Connected"
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        database = "Disconnected"
    return {"status": "OK", "timestamp": utcnow().isoformat(), "database": database}
