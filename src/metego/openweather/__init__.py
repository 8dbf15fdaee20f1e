"""OpenWeather forecast integration."""

from .client import OpenWeatherProvider
from .formatter import format_forecast
from .models import CityForecast, ForecastEntry, ForecastResponse

__all__ = [
    "CityForecast",
    "ForecastEntry",
    "ForecastResponse",
    "OpenWeatherProvider",
    "format_forecast",
]
