"""Logging setup for command-line execution."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_text


class JsonConsoleFormatter(logging.Formatter):
    """JSON formatter that scrubs the configured API keys from every event."""

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self.secrets = frozenset(secret for secret in secrets if secret)

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage(), self.secrets),
        }
        if record.exc_info:
            event["exception"] = sanitize_text(
                self.formatException(record.exc_info), self.secrets
            )
        return json.dumps(event, default=str)


def setup_logger(
    name: str = "weather_lookup",
    level: int = logging.WARNING,
    secrets: Iterable[str] = (),
) -> logging.Logger:
    """Create and configure a process-wide logger.

    Calling this again updates the level and the redacted secrets in place.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    secrets = tuple(secrets)
    if logger.handlers:
        for handler in logger.handlers:
            if isinstance(handler.formatter, JsonConsoleFormatter) and secrets:
                handler.formatter.secrets = frozenset(s for s in secrets if s)
        return logger

    # Stdout carries weather output only; diagnostics go to stderr.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonConsoleFormatter(secrets))
    logger.addHandler(handler)
    return logger
