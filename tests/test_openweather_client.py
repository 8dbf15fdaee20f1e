"""OpenWeather client request building, error mapping and formatting."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from metego.exceptions import ConfigError, InsufficientForecastDataError, WeatherProviderError
from metego.openweather.client import OpenWeatherProvider
from metego.openweather.models import CityForecast

ENDPOINT = "http://api.openweathermap.org/data/2.5/forecast"


def _make_settings(**overrides: Any) -> Any:
    defaults = {
        "openweather_api_endpoint": ENDPOINT,
        "openweather_timeout_seconds": 5.0,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _make_provider(
    handler: Callable[[httpx.Request], httpx.Response], token: str = "ow-secret"
) -> OpenWeatherProvider:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenWeatherProvider(
        token,
        _make_settings(),
        logging.getLogger("test_openweather"),
        http_client=http_client,
    )


def _payload(days: int, per_day: int = 2) -> dict[str, Any]:
    entries = []
    for day in range(days):
        for slot in range(per_day):
            entries.append(
                {
                    "dt_txt": f"2026-10-{19 + day:02d} {slot * 3:02d}:00:00",
                    "main": {"temp": 12.5 + slot, "humidity": 60 + slot},
                    "weather": [{"description": f"sky-{day}-{slot}"}],
                }
            )
    return {"cod": "200", "list": entries, "city": {"name": "Paris", "country": "FR"}}


def test_request_uses_city_metric_units_and_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_payload(3))

    provider = _make_provider(handler)
    provider.forecast(CityForecast("Saint Malo", 2))

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert str(request.url).startswith(ENDPOINT)
    assert request.url.params["q"] == "Saint Malo"
    assert request.url.params["units"] == "metric"
    assert request.url.params["appid"] == "ow-secret"


def test_forecast_returns_one_summary_per_requested_day() -> None:
    provider = _make_provider(lambda request: httpx.Response(200, json=_payload(2)))
    result = provider.forecast(CityForecast("Paris", 2))
    assert len(result) == 2
    assert result[0].startswith("2026-10-19\n")
    assert "00:00:00 | sky-0-0 - h:60% - 12.50°C" in result[0]
    assert "03:00:00 | sky-0-1 - h:61% - 13.50°C" in result[0]
    assert result[1].startswith("2026-10-20\n")


def test_fetch_forecast_returns_decoded_model() -> None:
    provider = _make_provider(lambda request: httpx.Response(200, json=_payload(1)))
    response = provider.fetch_forecast(CityForecast("Paris", 1))
    assert len(response.entries) == 2
    assert response.city is not None
    assert response.city.name == "Paris"


def test_non_success_status_raises_with_status_code_and_redacted_url() -> None:
    provider = _make_provider(
        lambda request: httpx.Response(401, json={"cod": 401, "message": "Invalid API key."})
    )
    with pytest.raises(WeatherProviderError) as exc_info:
        provider.forecast(CityForecast("Paris", 1))
    err = exc_info.value
    assert err.category == "status"
    assert err.status_code == 401
    assert "Invalid API key." in str(err)
    assert "ow-secret" not in str(err)
    assert err.url is not None and "ow-secret" not in err.url


def test_transport_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = _make_provider(handler)
    with pytest.raises(WeatherProviderError) as exc_info:
        provider.forecast(CityForecast("Paris", 1))
    assert exc_info.value.category == "transport"
    assert exc_info.value.status_code is None


def test_timeout_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    provider = _make_provider(handler)
    with pytest.raises(WeatherProviderError) as exc_info:
        provider.forecast(CityForecast("Paris", 1))
    assert exc_info.value.category == "transport"


def test_non_json_body_raises_decode_error() -> None:
    provider = _make_provider(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(WeatherProviderError) as exc_info:
        provider.forecast(CityForecast("Paris", 1))
    assert exc_info.value.category == "decode"


def test_non_object_json_raises_decode_error() -> None:
    provider = _make_provider(lambda request: httpx.Response(200, json=[1, 2, 3]))
    with pytest.raises(WeatherProviderError) as exc_info:
        provider.forecast(CityForecast("Paris", 1))
    assert exc_info.value.category == "decode"


def test_payload_failing_validation_raises_decode_error() -> None:
    payload = {"list": [{"dt_txt": "bad", "main": {"temp": 1, "humidity": 1}}]}
    provider = _make_provider(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(WeatherProviderError) as exc_info:
        provider.forecast(CityForecast("Paris", 1))
    assert exc_info.value.category == "decode"


def test_short_feed_surfaces_insufficient_data() -> None:
    provider = _make_provider(lambda request: httpx.Response(200, json=_payload(2)))
    with pytest.raises(InsufficientForecastDataError):
        provider.forecast(CityForecast("Paris", 4))


@pytest.mark.parametrize("token", ["", "   "])
def test_empty_token_is_rejected(token: str) -> None:
    with pytest.raises(ConfigError) as exc_info:
        OpenWeatherProvider(token, _make_settings(), logging.getLogger("test"))
    assert exc_info.value.key == "openweather"


def test_close_leaves_injected_client_open() -> None:
    http_client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with OpenWeatherProvider("tok", _make_settings(), logging.getLogger("t"), http_client):
        pass
    assert not http_client.is_closed
    http_client.close()
