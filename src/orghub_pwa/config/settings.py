import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigurationError(Exception):
    """Raised when a required setting is missing or unusable."""

    pass


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Source Configuration
    core_list_url: Optional[str] = Field(
        None, description="URL returning the public club list as JSON."
    )
    request_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for the club list request."
    )
    fetch_max_attempts: int = Field(
        4, ge=1, description="Total attempts for the club list request."
    )

    # Output Configuration
    output_root: Path = Field(
        Path("."), description="Directory holding manifests/ and install/."
    )
    dry_run: bool = Field(
        False, description="Plan and log the changes without touching the disk."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def require_source_url(settings: AppSettings) -> str:
    """Returns the configured source URL or raises ConfigurationError."""
    url = (settings.core_list_url or "").strip()
    if not url:
        raise ConfigurationError("Missing CORE_LIST_URL env")
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        hostname = None
    if not hostname or parts.scheme not in ("http", "https"):
        raise ConfigurationError(
            "Invalid CORE_LIST_URL env: expected an http(s) URL with a host"
        )
    return url


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in VALID_LOG_LEVELS:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
