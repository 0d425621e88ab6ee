"""Network-free reshaping steps applied to vendor payloads.

Each step works on plain decoded JSON so it can be checked against fixtures
without touching the HTTP layer.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from typing import Any

from ..exceptions import UpstreamError

MIDDAY = time(12, 0, 0)


def forecast_window_days(target: date, today: date) -> int:
    """Number of forecast days to request so that `target` is the last one.

    The window includes today, so a target two days ahead needs three days.
    """
    if target <= today:
        raise ValueError(f"Forecast target {target} is not after {today}.")
    return (target - today).days + 1


def keep_target_forecast_day(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop every forecast day but the last one.

    Pre:  ``{"location": {...}, "forecast": {"forecastday": [d0, ..., dn]}, ...}``
    Post: ``{"location": {...}, "forecast": {"forecastday": [dn]}}``
    """
    forecast = payload.get("forecast")
    if not isinstance(forecast, dict):
        raise UpstreamError(
            "weather-api forecast payload missing 'forecast' object.", category="schema"
        )
    days = forecast.get("forecastday")
    if not isinstance(days, list) or not days:
        raise UpstreamError(
            "weather-api forecast payload contained no forecast days.", category="schema"
        )
    return {
        "location": payload.get("location"),
        "forecast": {"forecastday": [days[-1]]},
    }


def midday_utc_timestamp(day: date) -> int:
    """Unix timestamp of 12:00 UTC on `day`."""
    return int(datetime.combine(day, MIDDAY, tzinfo=UTC).timestamp())
