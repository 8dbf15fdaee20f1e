"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from metego.log_setup import json_handlers


def _drop_json_handlers() -> None:
    logger = logging.getLogger("metego")
    for handler in json_handlers(logger):
        logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def _fresh_metego_logger() -> Iterator[None]:
    """Drop JSON handlers bound to a previous test's captured stderr."""
    _drop_json_handlers()
    yield
    _drop_json_handlers()
