"""API keys never reach log output, and diagnostics stay off stdout."""

from __future__ import annotations

import json
import logging
from typing import Any

from weather_lookup.log_setup import JsonConsoleFormatter, setup_logger
from weather_lookup.redaction import REDACTED, sanitize_text


def _record(message: str, *args: Any) -> logging.LogRecord:
    return logging.LogRecord(
        name="weather_lookup.registry",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=args,
        exc_info=None,
    )


def test_sanitize_text_redacts_query_keys() -> None:
    url = "https://api.openweathermap.org/geo/1.0/direct?q=Lviv&limit=1&appid=abc123"
    assert sanitize_text(url).endswith(f"appid={REDACTED}")

    url = "https://api.weatherapi.com/v1/current.json?key=xyz789&q=Lviv&aqi=no"
    sanitized = sanitize_text(url)
    assert "xyz789" not in sanitized
    assert "q=Lviv&aqi=no" in sanitized


def test_sanitize_text_scrubs_only_the_secrets_it_is_given() -> None:
    text = "failed with s3cr3t-value in body"
    assert sanitize_text(text, ["s3cr3t-value", ""]) == f"failed with {REDACTED} in body"
    assert sanitize_text(text) == text


def test_json_formatter_emits_sanitized_event() -> None:
    record = _record("request failed: %s", "https://example.com/data?appid=abc123&lat=1")
    event = json.loads(JsonConsoleFormatter().format(record))

    assert event["level"] == "ERROR"
    assert event["logger"] == "weather_lookup.registry"
    assert "abc123" not in event["message"]
    assert "lat=1" in event["message"]


def test_json_formatter_scrubs_bound_secrets() -> None:
    record = _record("vendor echoed %s", "owm-live-key")
    event = json.loads(JsonConsoleFormatter(secrets=["owm-live-key"]).format(record))
    assert event["message"] == f"vendor echoed {REDACTED}"


def test_logger_writes_to_stderr_only(capsys: Any) -> None:
    logger = setup_logger(level=logging.INFO)
    logger.warning("falling back")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err)["message"] == "falling back"


def test_setup_logger_again_rebinds_secrets(capsys: Any) -> None:
    setup_logger()
    logger = setup_logger(secrets=["wapi-live-key"])
    logger.warning("key wapi-live-key rejected")

    captured = capsys.readouterr()
    assert len(logger.handlers) == 1
    assert json.loads(captured.err)["message"] == f"key {REDACTED} rejected"
