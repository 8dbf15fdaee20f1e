"""Group chronological forecast entries into per-day text summaries."""

from __future__ import annotations

from collections.abc import Sequence

from ..exceptions import InsufficientForecastDataError
from .models import ForecastEntry


def format_line(time: str, description: str, humidity: float, temperature: float) -> str:
    """Render one time-sample line of a day summary."""
    return f"{time} | {description} - h:{humidity:g}% - {temperature:.2f}°C\n"


def format_forecast(entries: Sequence[ForecastEntry], days: int) -> list[str]:
    """Return one summary string per calendar date, covering ``days`` dates.

    Entries must be in chronological order: a new date starts a new summary,
    and the first entry of a date beyond ``days`` ends the walk. If the entries
    run out after exactly ``days`` dates the last summary is flushed and
    returned; fewer dates raise InsufficientForecastDataError.
    """
    forecast: list[str] = []
    dates_seen = 0
    previous_date: str | None = None
    day_forecast = ""

    for entry in entries:
        date = entry.date
        for condition in entry.weather:
            line = format_line(
                entry.time, condition.description, entry.main.humidity, entry.main.temp
            )
            if date == previous_date:
                day_forecast += line
                continue

            dates_seen += 1
            previous_date = date
            if day_forecast:
                forecast.append(day_forecast)
            if dates_seen > days:
                return forecast
            day_forecast = f"{date}\n{line}"

    if day_forecast:
        forecast.append(day_forecast)
    if dates_seen < days:
        raise InsufficientForecastDataError(
            f"Forecast covers {dates_seen} day(s) but {days} were requested.",
            requested_days=days,
            available_days=dates_seen,
        )
    return forecast
