"""Shared test fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_app_logger() -> Iterator[None]:
    """Drop handlers bound to a previous test's captured stderr."""
    yield
    logger = logging.getLogger("weather_lookup")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
