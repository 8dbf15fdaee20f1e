"""Typed models for OpenWeather 5 day / 3 hour forecast requests and payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import MAX_FORECAST_DAYS, MIN_FORECAST_DAYS
from ..exceptions import EmptyCityError, InvalidDaysError

_DT_TXT_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


@dataclass(frozen=True)
class CityForecast:
    """A city and a number of days to forecast, validated on construction."""

    city: str
    days: int

    def __post_init__(self) -> None:
        if not self.city or not self.city.strip():
            raise EmptyCityError("City must not be empty.", city=self.city, days=self.days)
        if not (MIN_FORECAST_DAYS <= self.days <= MAX_FORECAST_DAYS):
            raise InvalidDaysError(
                f"Days value should be between {MIN_FORECAST_DAYS} and "
                f"{MAX_FORECAST_DAYS} (included), got {self.days}.",
                city=self.city,
                days=self.days,
            )

    @property
    def title(self) -> str:
        return f"Weather forecast for {self.city} ({self.days} day(s))"


class WeatherCondition(BaseModel):
    """One weather description attached to a forecast entry."""

    model_config = ConfigDict(extra="ignore")

    description: str


class MainReadings(BaseModel):
    """Temperature and humidity block of a forecast entry."""

    model_config = ConfigDict(extra="ignore")

    humidity: float
    temp: float


class ForecastEntry(BaseModel):
    """A single 3-hour forecast sample."""

    model_config = ConfigDict(extra="ignore")

    dt_txt: str
    main: MainReadings
    weather: list[WeatherCondition] = Field(default_factory=list)

    @field_validator("dt_txt")
    @classmethod
    def check_timestamp_layout(cls, value: str) -> str:
        if not _DT_TXT_RE.fullmatch(value):
            raise ValueError(f"expected 'YYYY-MM-DD HH:MM:SS', got {value!r}")
        return value

    @property
    def date(self) -> str:
        return self.dt_txt[:10]

    @property
    def time(self) -> str:
        return self.dt_txt[11:]


class ForecastCity(BaseModel):
    """Location block echoed back by the provider."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    country: str | None = None


class ForecastResponse(BaseModel):
    """Top-level forecast payload; entries arrive in chronological order."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    entries: list[ForecastEntry] = Field(alias="list")
    city: ForecastCity | None = None
