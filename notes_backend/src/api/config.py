import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from notes_database.db import get_database_url

load_dotenv()


def _split_csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    """Environment-driven settings. Read once per process through get_settings()."""

    DATABASE_URL: str = Field(default_factory=get_database_url)
    PORT: int = Field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # JWT settings
    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY", "temporary_dev_secret"))
    JWT_ALGORITHM: str = Field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))  # 7 days
    )

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*")))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    LOG_FORMAT: str = Field(default_factory=lambda: os.getenv("LOG_FORMAT", "text"))


# PUBLIC_INTERFACE
@lru_cache
def get_settings():
    return Settings()
