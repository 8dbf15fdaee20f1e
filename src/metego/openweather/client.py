"""OpenWeather (api.openweathermap.org) 5 day / 3 hour forecast client."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import ConfigError, WeatherProviderError
from ..redaction import sanitize_text
from .formatter import format_forecast
from .models import CityForecast, ForecastResponse

UNITS = "metric"


class OpenWeatherProvider:
    """Fetches forecasts for a city and turns them into day summaries.

    A single GET is issued per call; failures are raised, never retried.
    """

    def __init__(
        self,
        token: str,
        settings: Settings,
        logger: logging.Logger,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not token or not token.strip():
            raise ConfigError("OpenWeather token is empty.", key="openweather")
        self.settings = settings
        self.logger = logger
        self._token = token
        self._endpoint = settings.openweather_api_endpoint
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=settings.openweather_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> OpenWeatherProvider:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def forecast(self, request: CityForecast) -> list[str]:
        """Fetch the forecast for ``request`` and format it into day summaries."""
        response = self.fetch_forecast(request)
        return format_forecast(response.entries, request.days)

    def fetch_forecast(self, request: CityForecast) -> ForecastResponse:
        """Fetch and decode the raw forecast payload for ``request``."""
        payload = self._request_json(
            {"q": request.city, "units": UNITS, "appid": self._token}
        )
        try:
            response = ForecastResponse.model_validate(payload)
        except ValidationError as exc:
            raise WeatherProviderError(
                f"OpenWeather payload for {request.city!r} failed validation: "
                f"{exc.error_count()} error(s), first: {exc.errors()[0]['msg']}",
                category="decode",
                url=self._endpoint,
            ) from exc

        self.logger.debug(
            "OpenWeather returned %d entries for city=%s country=%s",
            len(response.entries),
            response.city.name if response.city else None,
            response.city.country if response.city else None,
        )
        return response

    def _request_json(self, params: dict[str, str]) -> dict[str, Any]:
        try:
            response = self._client.get(self._endpoint, params=params)
        except httpx.HTTPError as exc:
            raise WeatherProviderError(
                f"OpenWeather request failed ({type(exc).__name__}): {sanitize_text(str(exc))}",
                category="transport",
                url=self._endpoint,
            ) from exc

        url = sanitize_text(str(response.request.url))
        self.logger.debug("OpenWeather GET %s -> HTTP %d", url, response.status_code)

        if not response.is_success:
            raise WeatherProviderError(
                f"OpenWeather request failed with status {response.status_code} "
                f"at {url}: {self._error_detail(response)}",
                category="status",
                status_code=response.status_code,
                url=url,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise WeatherProviderError(
                f"OpenWeather returned non-JSON response at {url}.",
                category="decode",
                status_code=response.status_code,
                url=url,
            ) from exc

        if not isinstance(payload, dict):
            raise WeatherProviderError(
                f"OpenWeather returned unexpected payload type {type(payload).__name__} at {url}.",
                category="decode",
                status_code=response.status_code,
                url=url,
            )
        return payload

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return sanitize_text(response.text[:300])
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return sanitize_text(body["message"])
        return sanitize_text(response.text[:300])
