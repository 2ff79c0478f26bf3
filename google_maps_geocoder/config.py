"""Application configuration using Pydantic Settings."""

import logging
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


GOOGLE_MAPS_API = "https://maps.googleapis.com/maps/api/geocode/json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Geocoding Configuration
    google_maps_api_key: str = Field(
        default="",
        description="Google Maps API key, sent as the `key` query parameter when set"
    )
    google_maps_api_url: str = Field(
        default=GOOGLE_MAPS_API,
        description="Google Maps Geocoding API endpoint"
    )
    geocoding_timeout: float = Field(
        default=10.0,
        ge=0.1,
        le=120.0,
        description="Geocoding request timeout in seconds"
    )
    geocoding_verify_ssl: bool = Field(
        default=True,
        description="Verify TLS certificates of the geocoding service"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # Application Configuration
    app_name: str = Field(
        default="Google Maps Geocoder API",
        description="Application name"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Server Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Server host"
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port"
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("TESTING") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("google_maps_api_url")
    @classmethod
    def validate_google_maps_api_url(cls, v: str) -> str:
        """Validate that the geocoding endpoint is an http(s) URL."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(
                "GOOGLE_MAPS_API_URL must start with https:// or http://"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is one the logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty API key is configured."""
        return bool(self.google_maps_api_key.strip())
