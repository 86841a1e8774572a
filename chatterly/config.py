"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./chatterly.db"
    DATABASE_POOL_SIZE: int = 5

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Chatterly API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Practice sessions
    MINIMUM_SESSION_TURNS: int = 1

    # Progress cache
    PROGRESS_CACHE_TTL_SECONDS: float = 300.0
    PROGRESS_CACHE_MAX_ENTRIES: int = 1000

    # Badges
    RECENT_BADGE_WINDOW_MINUTES: int = 5
    CONSISTENCY_WINDOW_DAYS: int = 30

    @field_validator("MINIMUM_SESSION_TURNS", mode="after")
    @classmethod
    def validate_minimum_turns(cls, value: int) -> int:
        """A session always needs at least one turn to be completed."""
        if value < 1:
            msg = "MINIMUM_SESSION_TURNS must be at least 1"
            raise ValueError(msg)
        return value

    @field_validator(
        "DATABASE_POOL_SIZE",
        "PROGRESS_CACHE_TTL_SECONDS",
        "PROGRESS_CACHE_MAX_ENTRIES",
        mode="after",
    )
    @classmethod
    def validate_positive(cls, value: float) -> float:
        """Pool and cache bounds must be positive."""
        if value <= 0:
            msg = "Pool size and progress cache settings must be positive"
            raise ValueError(msg)
        return value


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
