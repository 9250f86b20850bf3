"""Application configuration management."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Settings
    app_name: str = "LegalDocs - Extraction Review Service"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Settings
    api_v1_prefix: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000

    # Extraction Source Configuration
    extraction_api_url: str = Field(
        default="http://localhost:8787/api/upload/extract",
        description="Endpoint of the external document extraction service",
    )
    extraction_api_key: str = Field(
        default="",
        description="Bearer token sent to the extraction service",
    )
    extraction_timeout: int = Field(default=120, description="Extraction request timeout in seconds")
    max_retries: int = 3
    retry_delay: int = 2
    max_upload_size: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted upload in bytes",
    )

    # Review Surface
    default_locale: str = Field(default="en", description="Locale used when none is requested")
    copy_ack_seconds: float = Field(
        default=2.0,
        description="How long a copied clause keeps its acknowledgment",
    )

    # Saved Profiles
    profile_storage_dir: Path = Field(
        default=PROJECT_ROOT / ".localstorage",
        description="Directory holding keyed local storage entries",
    )
    profile_storage_key: str = "legaldocs-saved-profiles"

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()


settings = get_settings()
