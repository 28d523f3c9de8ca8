from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Low Stock Alerts Service"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./inventory.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    API_KEYS: Optional[str] = None
    API_KEY_HEADER: str = "X-API-Key"

    # ==============================
    # Low-stock alerts
    # ==============================
    ALERT_WINDOW_DAYS: int = Field(30, gt=0)
    DEFAULT_LOW_STOCK_THRESHOLD: int = Field(10, ge=0)
    PRODUCT_TYPE_THRESHOLDS: Dict[str, int] = Field(default_factory=dict)
    REORDER_TARGET_MULTIPLIER: int = Field(2, ge=1)
    REORDER_ROUND_TO: int = Field(10, ge=1)

    @field_validator("PRODUCT_TYPE_THRESHOLDS")
    @classmethod
    def _thresholds_non_negative(cls, value: Dict[str, int]) -> Dict[str, int]:
        for product_type, threshold in value.items():
            if threshold < 0:
                raise ValueError(
                    "threshold for product type {!r} must be non-negative".format(product_type)
                )
        return {key.strip().lower(): threshold for key, threshold in value.items()}


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
