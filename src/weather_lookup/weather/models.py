"""Typed models mirroring each vendor's weather JSON."""

from __future__ import annotations

import datetime as dt
from datetime import date
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class QueryMode(str, Enum):
    """Which kind of weather query a request resolves to."""

    CURRENT = "current"
    HISTORICAL = "historical"
    FORECAST = "forecast"


# --- OpenWeatherMap -------------------------------------------------------


class Coordinates(BaseModel):
    """Best geocoding match for an address."""

    lat: float
    lon: float
    name: str | None = None
    country: str | None = None
    state: str | None = None


class OpenWeatherMapCondition(BaseModel):
    main: str
    description: str


class OpenWeatherMapInfo(BaseModel):
    """One observation or forecast point from the One Call API."""

    dt: int | None = None
    temp: float
    feels_like: float
    pressure: int
    humidity: int
    wind_speed: float
    wind_deg: int
    weather: list[OpenWeatherMapCondition] = Field(default_factory=list)


class OpenWeatherMapCurrent(BaseModel):
    lat: float
    lon: float
    timezone: str
    current: OpenWeatherMapInfo


class OpenWeatherMapTimed(BaseModel):
    lat: float
    lon: float
    timezone: str
    data: list[OpenWeatherMapInfo]


# --- WeatherAPI.com -------------------------------------------------------


class WeatherApiLocation(BaseModel):
    name: str
    region: str
    country: str


class WeatherApiCondition(BaseModel):
    text: str


class WeatherApiInfo(BaseModel):
    temp_c: float
    temp_f: float
    condition: WeatherApiCondition


class WeatherApiDay(BaseModel):
    avgtemp_c: float
    avgtemp_f: float
    maxwind_mph: float
    maxwind_kph: float
    condition: WeatherApiCondition


class WeatherApiForecastDay(BaseModel):
    date: dt.date | None = None
    day: WeatherApiDay


class WeatherApiForecast(BaseModel):
    forecastday: list[WeatherApiForecastDay]


class WeatherApiCurrent(BaseModel):
    location: WeatherApiLocation
    current: WeatherApiInfo


class WeatherApiTimed(BaseModel):
    location: WeatherApiLocation
    forecast: WeatherApiForecast


WeatherPayload = Union[
    OpenWeatherMapCurrent,
    OpenWeatherMapTimed,
    WeatherApiCurrent,
    WeatherApiTimed,
]


class WeatherResult(BaseModel):
    """Outcome of one logical weather query, tagged with its provider."""

    provider: str
    mode: QueryMode
    address: str
    requested_date: date | None = None
    payload: WeatherPayload
