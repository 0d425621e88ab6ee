"""Date validation and current/historical/forecast routing."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest

from weather_lookup.exceptions import (
    InvalidAddressError,
    InvalidDateFormatError,
    InvalidDateValueError,
)
from weather_lookup.router import WeatherRequestRouter, select_mode
from weather_lookup.weather.base import WeatherProvider
from weather_lookup.weather.models import QueryMode, WeatherApiCurrent

TODAY = date(2023, 4, 10)

_CURRENT_PAYLOAD = {
    "location": {"name": "Lviv", "region": "Lviv", "country": "Ukraine"},
    "current": {"temp_c": 11.0, "temp_f": 51.8, "condition": {"text": "Sunny"}},
}


class RecordingProvider(WeatherProvider):
    """Records which capability the router picked."""

    name = "RECORDING"
    display_name = "recording"

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def _payload(self) -> WeatherApiCurrent:
        return WeatherApiCurrent.model_validate(_CURRENT_PAYLOAD)

    def current(self, address: str) -> WeatherApiCurrent:
        self.calls.append(("current", address))
        return self._payload()

    def historical(self, address: str, day: date) -> WeatherApiCurrent:
        self.calls.append(("historical", address, day))
        return self._payload()

    def forecast(self, address: str, day: date, *, today: date) -> WeatherApiCurrent:
        self.calls.append(("forecast", address, day, today))
        return self._payload()


def _router() -> WeatherRequestRouter:
    return WeatherRequestRouter(clock=lambda: TODAY)


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        (None, QueryMode.CURRENT),
        (date(2020, 1, 1), QueryMode.HISTORICAL),
        (TODAY - timedelta(days=1), QueryMode.HISTORICAL),
        (TODAY, QueryMode.HISTORICAL),
        (TODAY + timedelta(days=1), QueryMode.FORECAST),
    ],
)
def test_select_mode(day: date | None, expected: QueryMode) -> None:
    assert select_mode(day, TODAY) is expected


def test_parse_date_accepts_valid_date() -> None:
    assert _router().parse_date("2023-04-12") == date(2023, 4, 12)


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_date_absent_means_now(text: str | None) -> None:
    assert _router().parse_date(text) is None


@pytest.mark.parametrize(
    "text", ["2023-3-31", "23-03-31", "2023/03/31", "2023-03-31T00:00", "today"]
)
def test_parse_date_rejects_wrong_format(text: str) -> None:
    with pytest.raises(InvalidDateFormatError, match="YYYY-MM-DD"):
        _router().parse_date(text)


@pytest.mark.parametrize("text", ["2000-12-32", "2023-02-29", "2023-13-01", "0000-01-01"])
def test_parse_date_rejects_impossible_calendar_value(text: str) -> None:
    with pytest.raises(InvalidDateValueError, match="not a valid calendar date"):
        _router().parse_date(text)


def test_invalid_date_value_never_reaches_provider() -> None:
    provider = RecordingProvider()
    with pytest.raises(InvalidDateValueError):
        _router().route(provider, "Lviv", "2000-12-32")
    assert provider.calls == []


def test_invalid_date_format_never_reaches_provider() -> None:
    provider = RecordingProvider()
    with pytest.raises(InvalidDateFormatError):
        _router().route(provider, "Lviv", "2023-3-31")
    assert provider.calls == []


def test_route_without_date_queries_current_weather() -> None:
    provider = RecordingProvider()
    result = _router().route(provider, "  Lviv, Ukraine ", None)

    assert provider.calls == [("current", "Lviv, Ukraine")]
    assert result.mode is QueryMode.CURRENT
    assert result.requested_date is None
    assert result.address == "Lviv, Ukraine"
    assert result.provider == "RECORDING"


def test_route_past_date_queries_history() -> None:
    provider = RecordingProvider()
    result = _router().route(provider, "Lviv", "2020-01-01")

    assert provider.calls == [("historical", "Lviv", date(2020, 1, 1))]
    assert result.mode is QueryMode.HISTORICAL
    assert result.requested_date == date(2020, 1, 1)


def test_route_today_queries_history() -> None:
    provider = RecordingProvider()
    _router().route(provider, "Lviv", TODAY.isoformat())
    assert provider.calls == [("historical", "Lviv", TODAY)]


def test_route_future_date_queries_forecast_with_today() -> None:
    provider = RecordingProvider()
    result = _router().route(provider, "Lviv", "2023-04-12")

    assert provider.calls == [("forecast", "Lviv", date(2023, 4, 12), TODAY)]
    assert result.mode is QueryMode.FORECAST


def test_2020_date_is_history_against_real_clock() -> None:
    query = WeatherRequestRouter().build_query("Lviv", "2020-01-01")
    assert query.mode is QueryMode.HISTORICAL
    assert query.today == date.today()


def test_blank_address_rejected() -> None:
    provider = RecordingProvider()
    with pytest.raises(InvalidAddressError):
        _router().route(provider, "   ", None)
    assert provider.calls == []
