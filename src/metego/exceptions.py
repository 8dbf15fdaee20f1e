"""Application exception classes."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Raised when configuration or credentials are invalid or incomplete."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        key: str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.key = key
        self.line_number = line_number


class ForecastRequestError(Exception):
    """Raised when a city/day-count forecast request is rejected."""

    def __init__(self, message: str, *, city: str | None = None, days: int | None = None) -> None:
        super().__init__(message)
        self.city = city
        self.days = days


class EmptyCityError(ForecastRequestError):
    """Raised when the requested city is empty."""


class InvalidDaysError(ForecastRequestError):
    """Raised when the requested day count is outside the supported range."""


class WeatherProviderError(Exception):
    """Raised when weather provider requests or decoding fail."""

    def __init__(
        self,
        message: str,
        *,
        category: str = "unknown",
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code
        self.url = url


class ForecastFormatError(Exception):
    """Raised when provider entries cannot be turned into day summaries."""


class InsufficientForecastDataError(ForecastFormatError):
    """Raised when the provider returned fewer dates than requested."""

    def __init__(self, message: str, *, requested_days: int, available_days: int) -> None:
        super().__init__(message)
        self.requested_days = requested_days
        self.available_days = available_days


class NotificationError(Exception):
    """Raised when a Pushover message cannot be built or delivered."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[str] | None = None,
        message_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []
        self.message_index = message_index
