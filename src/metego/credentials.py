"""Plain-text credential file loader.

The file holds one credential per line as ``<name> <token>``, separated by a
single space. There is no quoting, comment or escape syntax.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from .exceptions import ConfigError

OPENWEATHER_KEY = "openweather"
PUSHOVER_KEY = "pushover"
RECIPIENT_KEY = "recipient"


def load_credentials(path: Path) -> dict[str, str]:
    """Read ``path`` into a mapping of credential name to token."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed reading credential file {path}: {exc}", path=path) from exc

    credentials: dict[str, str] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        parts = line.split(" ")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ConfigError(
                f"Malformed credential line {line_number} in {path}: "
                "expected '<name> <token>'.",
                path=path,
                line_number=line_number,
            )
        name, token = parts
        credentials[name] = token
    return credentials


def require_credentials(
    credentials: Mapping[str, str],
    names: Iterable[str],
    *,
    path: Path | None = None,
) -> None:
    """Raise ConfigError for the first name that is missing or blank."""
    source = f" in {path}" if path is not None else ""
    for name in names:
        value = credentials.get(name)
        if value is None:
            raise ConfigError(f"Missing credential '{name}'{source}.", path=path, key=name)
        if not value.strip():
            raise ConfigError(f"Credential '{name}'{source} is empty.", path=path, key=name)
