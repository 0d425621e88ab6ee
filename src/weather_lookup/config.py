"""Typed settings loader for the weather lookup CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import AnyHttpUrl, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

APP_NAME = "weather-lookup"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credential fields are named after the lower-cased provider identifier.
    open_weather_map: SecretStr | None = Field(
        default=None, alias="OPEN_WEATHER_MAP", repr=False
    )
    weather_api: SecretStr | None = Field(default=None, alias="WEATHER_API", repr=False)

    open_weather_map_base_url: AnyHttpUrl = Field(
        default="https://api.openweathermap.org",
        alias="OPEN_WEATHER_MAP_BASE_URL",
    )
    weather_api_base_url: AnyHttpUrl = Field(
        default="https://api.weatherapi.com/v1",
        alias="WEATHER_API_BASE_URL",
    )
    weather_timeout_seconds: float = Field(default=5.0, alias="WEATHER_TIMEOUT_SECONDS")
    weather_units: Literal["metric", "imperial", "standard"] = Field(
        default="metric", alias="WEATHER_UNITS"
    )

    weather_state_dir: Path | None = Field(default=None, alias="WEATHER_STATE_DIR")
    weather_persist_provider: bool = Field(default=True, alias="WEATHER_PERSIST_PROVIDER")
    weather_log_level: str = Field(default="WARNING", alias="WEATHER_LOG_LEVEL")

    @field_validator("open_weather_map", "weather_api", "weather_state_dir", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("weather_log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"WEATHER_LOG_LEVEL {value!r} is not a logging level name.")
        return level

    @model_validator(mode="after")
    def validate_limits(self) -> Settings:
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        return self

    def credential(self, field_name: str) -> str | None:
        """Return the raw secret stored under `field_name`, or None when unset."""
        secret = getattr(self, field_name, None)
        if secret is None:
            return None
        value = secret.get_secret_value().strip()
        return value or None

    def secrets(self) -> list[str]:
        """All configured secret values, for log redaction."""
        values = [self.credential("open_weather_map"), self.credential("weather_api")]
        return [value for value in values if value]

    @property
    def log_level(self) -> int:
        return logging.getLevelName(self.weather_log_level)

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "open_weather_map_base_url": str(self.open_weather_map_base_url),
            "weather_api_base_url": str(self.weather_api_base_url),
            "weather_timeout_seconds": self.weather_timeout_seconds,
            "weather_units": self.weather_units,
            "weather_state_dir": str(self.weather_state_dir) if self.weather_state_dir else None,
            "weather_persist_provider": self.weather_persist_provider,
            "open_weather_map_configured": self.open_weather_map is not None,
            "weather_api_configured": self.weather_api is not None,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
