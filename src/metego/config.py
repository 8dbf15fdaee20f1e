"""Typed settings loader for metego."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

MIN_FORECAST_DAYS = 1
MAX_FORECAST_DAYS = 5


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    tokens_file: Path = Field(default=Path("tokens.txt"), alias="METEGO_TOKENS_FILE")
    default_city: str = Field(default="Paris", alias="METEGO_DEFAULT_CITY")
    default_days: int = Field(default=5, alias="METEGO_DEFAULT_DAYS")

    openweather_api_endpoint: str = Field(
        default="http://api.openweathermap.org/data/2.5/forecast",
        alias="OPENWEATHER_API_ENDPOINT",
    )
    openweather_timeout_seconds: float = Field(default=10.0, alias="OPENWEATHER_TIMEOUT_SECONDS")

    pushover_api_endpoint: str = Field(
        default="https://api.pushover.net/1/messages.json",
        alias="PUSHOVER_API_ENDPOINT",
    )
    pushover_timeout_seconds: float = Field(default=10.0, alias="PUSHOVER_TIMEOUT_SECONDS")

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate defaults, endpoints and timeouts."""
        if not self.default_city.strip():
            raise ValueError("METEGO_DEFAULT_CITY must not be empty.")
        if not (MIN_FORECAST_DAYS <= self.default_days <= MAX_FORECAST_DAYS):
            raise ValueError(
                f"METEGO_DEFAULT_DAYS must be between {MIN_FORECAST_DAYS} "
                f"and {MAX_FORECAST_DAYS}."
            )
        for name, endpoint in (
            ("OPENWEATHER_API_ENDPOINT", self.openweather_api_endpoint),
            ("PUSHOVER_API_ENDPOINT", self.pushover_api_endpoint),
        ):
            if not endpoint.startswith(("http://", "https://")):
                raise ValueError(f"{name} must be an http(s) URL.")
        if self.openweather_timeout_seconds <= 0:
            raise ValueError("OPENWEATHER_TIMEOUT_SECONDS must be > 0.")
        if self.pushover_timeout_seconds <= 0:
            raise ValueError("PUSHOVER_TIMEOUT_SECONDS must be > 0.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "tokens_file": str(self.tokens_file),
            "default_city": self.default_city,
            "default_days": self.default_days,
            "openweather_api_endpoint": self.openweather_api_endpoint,
            "openweather_timeout_seconds": self.openweather_timeout_seconds,
            "pushover_api_endpoint": self.pushover_api_endpoint,
            "pushover_timeout_seconds": self.pushover_timeout_seconds,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
