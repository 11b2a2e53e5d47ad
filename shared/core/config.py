import logging
import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(
        os.getenv("JWT_EXPIRE_MINUTES", 10080))  # 7 days default

    DB_USER: Optional[str] = os.getenv("DB_USER")
    DB_PASS: Optional[str] = os.getenv("DB_PASS")
    DB_HOST: Optional[str] = os.getenv("DB_HOST", "localhost")
    DB_PORT: Optional[str] = os.getenv("DB_PORT", "5432")
    AUTH_DB_NAME: Optional[str] = os.getenv("AUTH_DB_NAME", "inventory_auth")
    INVENTORY_DB_NAME: Optional[str] = os.getenv(
        "INVENTORY_DB_NAME", "inventory")

    # Full URL overrides (sqlite for local runs and tests)
    AUTH_DATABASE_URL: Optional[str] = os.getenv("AUTH_DATABASE_URL")
    INVENTORY_DATABASE_URL: Optional[str] = os.getenv(
        "INVENTORY_DATABASE_URL")

    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", os.path.join(BASE_DIR, "uploads"))
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS",
        "https://glo-stock-canvas.lovable.app,http://localhost:3000,http://localhost:5173")

    DEFAULT_MIN_STOCK_LEVEL: int = int(os.getenv("DEFAULT_MIN_STOCK_LEVEL", 5))
    RECENT_DAYS: int = int(os.getenv("RECENT_DAYS", 7))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s]: %(message)s"
)


def _postgres_url(db_name: Optional[str]) -> str:
    return (
        f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{db_name}"
    )


AUTH_DATABASE_URL = settings.AUTH_DATABASE_URL or _postgres_url(
    settings.AUTH_DB_NAME)

INVENTORY_DATABASE_URL = settings.INVENTORY_DATABASE_URL or _postgres_url(
    settings.INVENTORY_DB_NAME)
