"""Helpers for redacting API keys from logs and error messages."""

from __future__ import annotations

import re
from collections.abc import Iterable

REDACTED = "[REDACTED]"

# Vendors take the key as a query parameter: `appid` (OpenWeatherMap), `key` (WeatherAPI).
_QUERY_SECRET_RE = re.compile(
    r"""(?ix)
    ([?&;\s]|^)
    (appid|key|api[_-]?key|token)
    =
    ([^\s&#'"]+)
    """
)


def sanitize_text(text: str, secrets: Iterable[str] = ()) -> str:
    """Redact API keys embedded in plain text or URLs, plus any literal `secrets`."""
    sanitized = _QUERY_SECRET_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}={REDACTED}", text)
    for secret in secrets:
        if secret:
            sanitized = sanitized.replace(secret, REDACTED)
    return sanitized
