"""Pushover (api.pushover.net) message delivery."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import Settings
from .exceptions import ConfigError, NotificationError
from .redaction import sanitize_text

MESSAGE_MAX_LENGTH = 1024
TITLE_MAX_LENGTH = 250


class PushoverMessage(BaseModel):
    """A message body with an optional title."""

    message: str
    title: str | None = None

    @field_validator("message")
    @classmethod
    def check_message(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be empty")
        if len(value) > MESSAGE_MAX_LENGTH:
            raise ValueError(f"message exceeds {MESSAGE_MAX_LENGTH} characters")
        return value

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str | None) -> str | None:
        if value is not None and len(value) > TITLE_MAX_LENGTH:
            raise ValueError(f"title exceeds {TITLE_MAX_LENGTH} characters")
        return value


class PushoverResponse(BaseModel):
    """Delivery acknowledgment returned by Pushover."""

    model_config = ConfigDict(extra="ignore")

    status: int
    request: str | None = None
    errors: list[str] = Field(default_factory=list)


def build_message(body: str, title: str | None = None) -> PushoverMessage:
    """Build a message, raising NotificationError when it breaks provider limits."""
    try:
        return PushoverMessage(message=body, title=title)
    except ValidationError as exc:
        raise NotificationError(f"Invalid Pushover message: {exc.errors()[0]['msg']}") from exc


class PushoverClient:
    """Sends single messages to a single Pushover recipient."""

    def __init__(
        self,
        token: str,
        settings: Settings,
        logger: logging.Logger,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not token or not token.strip():
            raise ConfigError("Pushover application token is empty.", key="pushover")
        self.settings = settings
        self.logger = logger
        self._token = token
        self._endpoint = settings.pushover_api_endpoint
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=settings.pushover_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> PushoverClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def send_message(self, message: PushoverMessage, recipient: str) -> PushoverResponse:
        """Deliver ``message`` to ``recipient`` and return the acknowledgment."""
        if not recipient or not recipient.strip():
            raise ConfigError("Pushover recipient is empty.", key="recipient")

        form = {"token": self._token, "user": recipient, "message": message.message}
        if message.title is not None:
            form["title"] = message.title

        try:
            response = self._client.post(self._endpoint, data=form)
        except httpx.HTTPError as exc:
            raise NotificationError(
                f"Pushover request failed ({type(exc).__name__}): {sanitize_text(str(exc))}"
            ) from exc

        try:
            ack = PushoverResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            if not response.is_success:
                raise NotificationError(
                    f"Pushover request failed with status {response.status_code}: "
                    f"{sanitize_text(response.text[:300])}",
                    status_code=response.status_code,
                ) from exc
            raise NotificationError(
                "Pushover returned an undecodable acknowledgment.",
                status_code=response.status_code,
            ) from exc

        if not response.is_success or ack.status != 1:
            detail = "; ".join(ack.errors) or "no error detail"
            raise NotificationError(
                f"Pushover rejected message (HTTP {response.status_code}): {detail}",
                status_code=response.status_code,
                errors=ack.errors,
            )

        self.logger.debug("Pushover accepted message request=%s", ack.request)
        return ack
