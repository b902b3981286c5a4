import os
import sys
from typing import List

from fastapi import Request
from loguru import logger
from pydantic import BaseModel, Field


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Settings(BaseModel):
    database_url: str = Field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///./movies.db"),
        description="SQLAlchemy URL of the catalog database",
    )

    # Frontend dev server
    cors_origins: List[str] = Field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:3000"),
    )

    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    popular_default_limit: int = Field(
        default_factory=lambda: int(os.getenv("POPULAR_DEFAULT_LIMIT", "10")),
        ge=1,
    )
    popular_max_limit: int = Field(
        default_factory=lambda: int(os.getenv("POPULAR_MAX_LIMIT", "50")),
        ge=1,
    )

    create_tables: bool = Field(
        default_factory=lambda: os.getenv("CREATE_TABLES", "true").lower() == "true",
        description="Create missing tables at startup",
    )


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
