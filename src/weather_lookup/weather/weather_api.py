"""WeatherAPI.com weather provider implementation."""

from __future__ import annotations

from datetime import date

from ..exceptions import UpstreamError
from .base import WeatherProvider
from .models import WeatherApiCurrent, WeatherApiTimed
from .transforms import forecast_window_days, keep_target_forecast_day


class WeatherApiProvider(WeatherProvider):
    """Queries WeatherAPI.com, which takes free-form addresses directly."""

    name = "WEATHER_API"
    display_name = "weather-api"

    def current(self, address: str) -> WeatherApiCurrent:
        payload = self._request_json(
            self._url("/current.json"),
            params={"key": self._api_key, "q": address, "aqi": "no"},
            context="current weather",
        )
        return self._parse(WeatherApiCurrent, payload, context="current weather")

    def historical(self, address: str, day: date) -> WeatherApiTimed:
        payload = self._request_json(
            self._url("/history.json"),
            params={"key": self._api_key, "q": address, "dt": day.isoformat()},
            context="history",
        )
        return self._parse(WeatherApiTimed, payload, context="history")

    def forecast(self, address: str, day: date, *, today: date) -> WeatherApiTimed:
        days = forecast_window_days(day, today)
        self.logger.debug("weather-api forecast window for %s: %d days", day, days)
        payload = self._request_json(
            self._url("/forecast.json"),
            params={
                "key": self._api_key,
                "q": address,
                "days": days,
                "aqi": "no",
                "alerts": "no",
            },
            context="forecast",
        )
        if not isinstance(payload, dict):
            raise UpstreamError(
                f"{self.display_name} forecast returned unexpected payload type "
                f"{type(payload).__name__}.",
                category="schema",
            )
        return self._parse(WeatherApiTimed, keep_target_forecast_day(payload), context="forecast")
