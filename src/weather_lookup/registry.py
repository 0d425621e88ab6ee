"""Provider registry: identifiers, credentials and client construction."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import httpx

from .config import Settings
from .exceptions import MissingCredentialError, UnknownProviderError
from .weather.base import WeatherProvider
from .weather.open_weather_map import OpenWeatherMapProvider
from .weather.weather_api import WeatherApiProvider


class ProviderName(str, Enum):
    """Supported weather vendors.

    The value is the canonical form and doubles as the name of the environment
    variable holding the vendor's API key.
    """

    OPEN_WEATHER_MAP = "OPEN_WEATHER_MAP"
    WEATHER_API = "WEATHER_API"

    @property
    def pretty_name(self) -> str:
        """User-facing form, e.g. ``open-weather-map``."""
        return self.value.lower().replace("_", "-")

    @property
    def settings_field(self) -> str:
        return self.value.lower()

    @classmethod
    def parse(cls, text: str) -> ProviderName:
        """Accept ``open-weather-map``, ``OPEN_WEATHER_MAP`` and mixed-case variants."""
        candidate = text.strip().upper().replace("-", "_")
        try:
            return cls(candidate)
        except ValueError:
            choices = ", ".join(member.pretty_name for member in cls)
            raise UnknownProviderError(
                f"Unknown provider {text!r}; expected one of: {choices}."
            ) from None


DEFAULT_PROVIDER = ProviderName.OPEN_WEATHER_MAP

ProviderFactory = Callable[[Settings, str, httpx.Client, logging.Logger], WeatherProvider]


def _build_open_weather_map(
    settings: Settings, api_key: str, client: httpx.Client, logger: logging.Logger
) -> WeatherProvider:
    return OpenWeatherMapProvider(
        api_key=api_key,
        base_url=str(settings.open_weather_map_base_url),
        client=client,
        logger=logger.getChild("open_weather_map"),
        units=settings.weather_units,
    )


def _build_weather_api(
    settings: Settings, api_key: str, client: httpx.Client, logger: logging.Logger
) -> WeatherProvider:
    return WeatherApiProvider(
        api_key=api_key,
        base_url=str(settings.weather_api_base_url),
        client=client,
        logger=logger.getChild("weather_api"),
    )


PROVIDER_FACTORIES: dict[ProviderName, ProviderFactory] = {
    ProviderName.OPEN_WEATHER_MAP: _build_open_weather_map,
    ProviderName.WEATHER_API: _build_weather_api,
}


def load_credentials(settings: Settings) -> dict[ProviderName, str]:
    """Read one API key per supported provider; all of them are required."""
    credentials: dict[ProviderName, str] = {}
    for name in ProviderName:
        api_key = settings.credential(name.settings_field)
        if api_key is None:
            raise MissingCredentialError(name.value)
        credentials[name] = api_key
    return credentials


class ProviderRegistry:
    """Builds provider clients bound to their credentials."""

    def __init__(
        self,
        settings: Settings,
        credentials: dict[ProviderName, str],
        logger: logging.Logger,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._credentials = dict(credentials)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=settings.weather_timeout_seconds)

    def __enter__(self) -> ProviderRegistry:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def available(self) -> tuple[ProviderName, ...]:
        return tuple(name for name in ProviderName if name in self._credentials)

    def select(self, name: ProviderName) -> WeatherProvider:
        """Construct the client for `name`."""
        api_key = self._credentials.get(name)
        if api_key is None:
            raise UnknownProviderError(
                f"Couldn't retrieve api key for provider {name.pretty_name}."
            )
        return PROVIDER_FACTORIES[name](self.settings, api_key, self._client, self.logger)

    def resolve(self, preferred: ProviderName | None) -> ProviderName:
        """Return `preferred` when usable, otherwise the best available fallback."""
        if preferred is None:
            preferred = DEFAULT_PROVIDER
        if preferred in self._credentials:
            return preferred
        available = self.available
        if not available:
            raise UnknownProviderError("No weather provider has a configured api key.")
        fallback = DEFAULT_PROVIDER if DEFAULT_PROVIDER in available else available[0]
        self.logger.warning(
            "Provider %s is not available; falling back to %s.",
            preferred.pretty_name,
            fallback.pretty_name,
        )
        return fallback
