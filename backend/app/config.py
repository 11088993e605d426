"""Application configuration.

Every value can be overridden from the environment or a ``.env`` file,
e.g. ``DUPLICATE_THRESHOLD=0.8 STALE_AFTER_DAYS=14``.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

LOG_FORMATS = ("json", "text")


class Settings(BaseSettings):
    """Analytics service settings."""

    APP_NAME: str = "Automation Atlas Analytics"
    APP_VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, testing, production

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Comma-separated dashboard origins
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # A flow pair must score strictly above this to count as a duplicate
    DUPLICATE_THRESHOLD: float = 0.7
    # Days without a run before a flow is considered stale
    STALE_AFTER_DAYS: int = 30

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator("DUPLICATE_THRESHOLD")
    @classmethod
    def _threshold_in_unit_range(cls, value: float) -> float:
        if not 0 <= value <= 1:
            raise ValueError("DUPLICATE_THRESHOLD must be between 0 and 1")
        return value

    @field_validator("STALE_AFTER_DAYS")
    @classmethod
    def _positive_window(cls, value: int) -> int:
        if value < 1:
            raise ValueError("STALE_AFTER_DAYS must be at least 1")
        return value

    @field_validator("LOG_FORMAT")
    @classmethod
    def _known_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}")
        return value

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings()
