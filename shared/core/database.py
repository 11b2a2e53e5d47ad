from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import AUTH_DATABASE_URL, INVENTORY_DATABASE_URL

# Separate bases
AuthBase = declarative_base()
Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": POOL_SIZE,          # max idle connections
        "max_overflow": MAX_OVERFLOW,    # max temporary extra connections
        "pool_timeout": 30               # wait time before failing
    }


# Auth DB
auth_engine = create_engine(AUTH_DATABASE_URL, **_engine_options(AUTH_DATABASE_URL))
AuthSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=auth_engine)

# Inventory DB
inventory_engine = create_engine(
    INVENTORY_DATABASE_URL, **_engine_options(INVENTORY_DATABASE_URL))
InventorySessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=inventory_engine)


# Dependency


def get_auth_db():
    db = AuthSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_inventory_db():
    db = InventorySessionLocal()
    try:
        yield db
    finally:
        db.close()
