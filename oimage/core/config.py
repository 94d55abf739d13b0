"""
Configuration settings for OImage.
Uses pydantic-settings for environment variable support.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from oimage.core.constants import RESAMPLING_FILTERS, LOG_LEVELS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Encoding
    jpeg_quality: int = Field(default=75, ge=0, le=100, alias="OIMAGE_JPEG_QUALITY")

    # Resampling filters (names from RESAMPLING_FILTERS)
    resize_filter: str = Field(default="lanczos", alias="OIMAGE_RESIZE_FILTER")
    rotate_filter: str = Field(default="bicubic", alias="OIMAGE_ROTATE_FILTER")

    # Logging
    log_level: str = Field(default="WARNING", alias="OIMAGE_LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True
    }

    @field_validator("resize_filter", "rotate_filter")
    @classmethod
    def check_filter(cls, value: str) -> str:
        """Only smooth Pillow filters are accepted."""
        name = value.strip().lower()
        if name not in RESAMPLING_FILTERS:
            allowed = ", ".join(sorted(RESAMPLING_FILTERS))
            raise ValueError(f"Unknown resampling filter '{value}' (allowed: {allowed})")
        return name

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Returns cached settings instance."""
    return Settings()
