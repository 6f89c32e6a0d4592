"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ERRAND_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Errand Route Optimizer API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level applied when the app starts.")
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="API key for the Google Directions web service.",
    )
    directions_base_url: str = Field(
        default="https://maps.googleapis.com/maps/api",
        description="Base URL of the directions provider.",
    )
    directions_timeout_seconds: float = Field(default=15.0, gt=0.0)
    directions_units: Literal["metric", "imperial"] = Field(
        default="imperial",
        description="Unit system used for the human-readable distance text of each leg.",
    )
    max_waypoints: int = Field(
        default=25,
        ge=1,
        description="Provider waypoint limit, applied when a request does not set max_stops.",
    )
    default_due_horizon_days: float = Field(
        default=7.0,
        gt=0.0,
        description="Assumed days until due for stops without a due date.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("google_maps_api_key", mode="before")
    @classmethod
    def _clean_api_key(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        cleaned = str(value).strip()
        if not cleaned:
            return None
        if any(ord(char) < 32 for char in cleaned):
            raise ValueError("Google Maps API key contains invalid characters.")
        return cleaned

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
