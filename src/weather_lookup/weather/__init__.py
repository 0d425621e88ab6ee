"""Weather provider integrations."""

from .base import WeatherProvider
from .models import QueryMode, WeatherPayload, WeatherResult
from .open_weather_map import OpenWeatherMapProvider
from .weather_api import WeatherApiProvider

__all__ = [
    "OpenWeatherMapProvider",
    "QueryMode",
    "WeatherApiProvider",
    "WeatherPayload",
    "WeatherProvider",
    "WeatherResult",
]
