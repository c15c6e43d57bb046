# src/upload_storage/settings.py
import logging
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Single source of truth for all upload storage settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from upload_storage.settings import get_settings
        settings = get_settings()
        base_url = settings.grid_fs_access_url
    """

    # Application Settings
    app_name: str = Field(
        default="upload-storage",
        description="Application name"
    )

    # MongoDB Settings
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        alias="MONGODB_URI",
        description="MongoDB connection string"
    )

    # GridFS Configuration
    grid_fs_bucket: str = Field(
        default="fs",
        alias="GRID_FS_BUCKET",
        description="GridFS bucket (collection prefix) used in every namespace"
    )

    grid_fs_access_url: Optional[str] = Field(
        default=None,
        alias="GRID_FS_ACCESS_URL",
        description="Public base path stored files are served under, e.g. /system/uploads"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('grid_fs_access_url', mode='before')
    @classmethod
    def blank_access_url_is_unset(cls, v):
        """Treat an empty GRID_FS_ACCESS_URL as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log_level: {v}")
        return level

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
