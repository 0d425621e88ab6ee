"""OpenWeatherMap (openweathermap.org) weather provider implementation."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from ..exceptions import AddressNotFoundError, UpstreamError
from .base import WeatherProvider
from .models import Coordinates, OpenWeatherMapCurrent, OpenWeatherMapTimed
from .transforms import midday_utc_timestamp


class OpenWeatherMapProvider(WeatherProvider):
    """Resolves an address to coordinates, then queries the One Call 3.0 API.

    One Call has no separate history/forecast endpoints: any dated request goes
    to the time machine with a midday UTC timestamp.
    """

    name = "OPEN_WEATHER_MAP"
    display_name = "open-weather-map"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        client: httpx.Client,
        logger: logging.Logger,
        units: str = "metric",
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, client=client, logger=logger)
        self.units = units

    def current(self, address: str) -> OpenWeatherMapCurrent:
        coords = self.geocode(address)
        payload = self._request_json(
            self._url("/data/3.0/onecall"),
            params={
                **self._coord_params(coords),
                "exclude": "minutely,hourly,daily",
            },
            context="current weather",
        )
        return self._parse(OpenWeatherMapCurrent, payload, context="current weather")

    def historical(self, address: str, day: date) -> OpenWeatherMapTimed:
        return self._timed(address, day)

    def forecast(self, address: str, day: date, *, today: date) -> OpenWeatherMapTimed:
        return self._timed(address, day)

    def geocode(self, address: str) -> Coordinates:
        """Return the best match for `address`; the weather query needs it first."""
        payload = self._request_json(
            self._url("/geo/1.0/direct"),
            params={"q": address, "limit": 1, "appid": self._api_key},
            context="geocoding",
        )
        if not isinstance(payload, list):
            raise UpstreamError(
                f"{self.display_name} geocoding returned unexpected payload type "
                f"{type(payload).__name__}.",
                category="schema",
            )
        if not payload:
            raise AddressNotFoundError(address)
        return self._parse(Coordinates, payload[0], context="geocoding")

    def _timed(self, address: str, day: date) -> OpenWeatherMapTimed:
        coords = self.geocode(address)
        payload = self._request_json(
            self._url("/data/3.0/onecall/timemachine"),
            params={
                **self._coord_params(coords),
                "dt": midday_utc_timestamp(day),
            },
            context="timed weather",
        )
        return self._parse(OpenWeatherMapTimed, payload, context="timed weather")

    def _coord_params(self, coords: Coordinates) -> dict[str, Any]:
        return {
            "lat": coords.lat,
            "lon": coords.lon,
            "units": self.units,
            "appid": self._api_key,
        }
