"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

import re
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_TRASH_AUTO_DELETE_DAYS = 30

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Settings(BaseSettings):
    """Settings for the trash purge worker, loaded from environment variables.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL of the vault database
        TRASH_AUTO_DELETE_DAYS: Days a cipher stays in the trash before it is
            permanently deleted. 0 or negative disables purging.
        TRASH_PURGE_CRON: Five-field cron expression for the beat schedule (UTC)
        CELERY_BROKER_URL: Celery broker connection string
        CELERY_RESULT_BACKEND: Celery result backend connection string
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
    """

    # Database
    DATABASE_URL: str = "sqlite:///./vault1.db"

    # Trash
    TRASH_AUTO_DELETE_DAYS: int = DEFAULT_TRASH_AUTO_DELETE_DAYS
    TRASH_PURGE_CRON: str = "0 2 * * *"

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @field_validator("TRASH_AUTO_DELETE_DAYS", mode="before")
    @classmethod
    def parse_trash_days(cls, v) -> int:
        """Fall back to the default unless the value is a plain 64-bit integer.

        Only an optional sign followed by ASCII digits is accepted: no
        whitespace, no underscores, no decimals.
        """
        if isinstance(v, bool):
            return DEFAULT_TRASH_AUTO_DELETE_DAYS
        if isinstance(v, int):
            days = v
        elif isinstance(v, str) and INTEGER_PATTERN.fullmatch(v):
            days = int(v)
        else:
            return DEFAULT_TRASH_AUTO_DELETE_DAYS

        if not INT64_MIN <= days <= INT64_MAX:
            return DEFAULT_TRASH_AUTO_DELETE_DAYS
        return days

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()


# Module-level settings instance
settings = get_settings()
