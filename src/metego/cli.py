"""CLI: fetch a city forecast, print it, optionally relay it to Pushover."""

from __future__ import annotations

import argparse
import logging
import sys

import httpx
from rich.console import Console

from .config import Settings, load_settings
from .credentials import (
    OPENWEATHER_KEY,
    PUSHOVER_KEY,
    RECIPIENT_KEY,
    load_credentials,
    require_credentials,
)
from .exceptions import (
    ConfigError,
    ForecastFormatError,
    ForecastRequestError,
    NotificationError,
    WeatherProviderError,
)
from .log_setup import setup_logger
from .openweather import CityForecast, OpenWeatherProvider
from .pushover import PushoverClient, build_message
from .redaction import sanitize_for_logging


def parse_args() -> argparse.Namespace:
    """Parse forecast CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Print a multi-day OpenWeather forecast and optionally send it to Pushover."
    )
    parser.add_argument(
        "--city",
        type=str,
        default=None,
        help="Wanted city for the forecast (default: METEGO_DEFAULT_CITY).",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Wanted number of days to forecast, 1-5 (default: METEGO_DEFAULT_DAYS).",
    )
    parser.add_argument("--debug", action="store_true", help="Set logging to debug level.")
    parser.add_argument(
        "--pushover", action="store_true", help="Send the forecast to Pushover."
    )
    return parser.parse_args()


def _build_http_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout, headers={"Accept": "application/json"})


def _send_forecast(
    pushover: PushoverClient,
    recipient: str,
    forecast: list[str],
    title: str,
    logger: logging.Logger,
) -> None:
    # The first summary carries the title; later days are sent bare.
    for index, summary in enumerate(forecast):
        message = build_message(summary, title=title if index == 0 else None)
        try:
            pushover.send_message(message, recipient)
        except NotificationError as exc:
            exc.message_index = index
            raise
        logger.debug("Sent forecast message %d/%d", index + 1, len(forecast))


def _run(args: argparse.Namespace, settings: Settings, logger: logging.Logger) -> None:
    console = Console(highlight=False, soft_wrap=True, emoji=False)

    credentials = load_credentials(settings.tokens_file)
    logger.debug(
        "Loaded credentials from %s: %s",
        settings.tokens_file,
        sanitize_for_logging(credentials),
    )
    required = [OPENWEATHER_KEY]
    if args.pushover:
        required += [PUSHOVER_KEY, RECIPIENT_KEY]
    require_credentials(credentials, required, path=settings.tokens_file)

    city = args.city if args.city is not None else settings.default_city
    days = args.days if args.days is not None else settings.default_days

    with (
        _build_http_client(settings.openweather_timeout_seconds) as weather_http,
        _build_http_client(settings.pushover_timeout_seconds) as pushover_http,
    ):
        provider = OpenWeatherProvider(
            credentials[OPENWEATHER_KEY], settings, logger, http_client=weather_http
        )
        pushover: PushoverClient | None = None
        if args.pushover:
            pushover = PushoverClient(
                credentials[PUSHOVER_KEY], settings, logger, http_client=pushover_http
            )

        request = CityForecast(city, days)
        forecast = provider.forecast(request)

        logger.info(request.title)
        logger.debug("Forecast len=%d", len(forecast))

        console.print(request.title, markup=False)
        for summary in forecast:
            console.print(summary, markup=False)

        if pushover is None:
            return

        logger.info("Sending message to pushover")
        _send_forecast(pushover, credentials[RECIPIENT_KEY], forecast, request.title, logger)


def main() -> int:
    """Run the forecast workflow and return a process exit status."""
    args = parse_args()
    logger = setup_logger(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.debug("Settings: %s", settings.safe_summary())

    try:
        _run(args, settings, logger)
    except ConfigError as exc:
        logger.error("Credential or configuration failure: %s", exc)
        return 2
    except ForecastRequestError as exc:
        logger.error("Error when creating a CityForecast: %s", exc)
        return 3
    except WeatherProviderError as exc:
        logger.error("Error when getting Forecast (%s): %s", exc.category, exc)
        return 4
    except ForecastFormatError as exc:
        logger.error("Error when formatting Forecast: %s", exc)
        return 5
    except NotificationError as exc:
        logger.error("Error when sending message to Pushover: %s", exc)
        return 6
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        logger.exception("Unexpected failure: %s", exc)
        return 99
    return 0


if __name__ == "__main__":
    sys.exit(main())
