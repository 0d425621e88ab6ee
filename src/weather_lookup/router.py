"""Turns an (address, optional date) request into exactly one provider query."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime

from .exceptions import InvalidAddressError, InvalidDateFormatError, InvalidDateValueError
from .weather.base import WeatherProvider
from .weather.models import QueryMode, WeatherResult

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class WeatherQuery:
    """A validated request with its temporal mode resolved."""

    address: str
    mode: QueryMode
    day: date | None
    today: date


def select_mode(day: date | None, today: date) -> QueryMode:
    """No date means now; today and earlier are history; later days are forecasts."""
    if day is None:
        return QueryMode.CURRENT
    if day <= today:
        return QueryMode.HISTORICAL
    return QueryMode.FORECAST


class WeatherRequestRouter:
    """Validates request input and dispatches it to the active provider.

    Invalid dates reject the whole request; there is no fallback to current
    weather.
    """

    def __init__(self, clock: Callable[[], date] = date.today) -> None:
        self._clock = clock
        self._date_re = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)

    def parse_date(self, text: str | None) -> date | None:
        if text is None or not text.strip():
            return None
        candidate = text.strip()
        if not self._date_re.match(candidate):
            raise InvalidDateFormatError(
                f"Entered date {candidate!r} should be in the YYYY-MM-DD format."
            )
        try:
            return datetime.strptime(candidate, DATE_FORMAT).date()
        except ValueError as exc:
            raise InvalidDateValueError(
                f"Entered date {candidate!r} is not a valid calendar date: {exc}"
            ) from exc

    def build_query(self, address: str, date_text: str | None = None) -> WeatherQuery:
        address = address.strip()
        if not address:
            raise InvalidAddressError("Address must not be empty.")
        day = self.parse_date(date_text)
        today = self._clock()
        return WeatherQuery(address=address, mode=select_mode(day, today), day=day, today=today)

    def route(
        self, provider: WeatherProvider, address: str, date_text: str | None = None
    ) -> WeatherResult:
        query = self.build_query(address, date_text)
        if query.mode is QueryMode.CURRENT:
            payload = provider.current(query.address)
        elif query.mode is QueryMode.HISTORICAL:
            payload = provider.historical(query.address, query.day)
        else:
            payload = provider.forecast(query.address, query.day, today=query.today)
        return WeatherResult(
            provider=provider.name,
            mode=query.mode,
            address=query.address,
            requested_date=query.day,
            payload=payload,
        )
