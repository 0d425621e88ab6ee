"""Provider-agnostic weather interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..exceptions import UpstreamError
from ..redaction import sanitize_text
from .models import WeatherPayload

ModelT = TypeVar("ModelT", bound=BaseModel)


class WeatherProvider(ABC):
    """Base contract for weather clients selectable at runtime.

    Subclasses own one vendor's endpoints. The HTTP client is passed in so a
    single connection pool (and its timeout) is shared across providers.
    """

    name: str = ""
    display_name: str = ""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        client: httpx.Client,
        logger: logging.Logger,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = client
        self.logger = logger

    def __enter__(self) -> WeatherProvider:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release provider resources. The shared HTTP client is owned by the registry."""

    @abstractmethod
    def current(self, address: str) -> WeatherPayload:
        """Weather at `address` right now."""

    @abstractmethod
    def historical(self, address: str, day: date) -> WeatherPayload:
        """Weather at `address` on a day that is today or in the past."""

    @abstractmethod
    def forecast(self, address: str, day: date, *, today: date) -> WeatherPayload:
        """Forecast for `address` on a day after `today`."""

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _redact(self, text: str) -> str:
        return sanitize_text(text, (self._api_key,))

    def _request_json(self, url: str, params: dict[str, Any], context: str) -> Any:
        """Issue one GET and decode JSON, mapping every failure to UpstreamError."""
        self.logger.debug("%s %s request: %s", self.name, context, self._redact(url))
        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise UpstreamError(
                f"{self.display_name} {context} failed with status {status}: "
                f"{self._error_detail(exc.response)}",
                category="http_status",
                status_code=status,
            ) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamError(
                f"{self.display_name} {context} timed out.", category="timeout"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"{self.display_name} {context} request failed: {self._redact(str(exc))}",
                category="network",
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"{self.display_name} {context} returned non-JSON response.",
                category="decode",
                status_code=response.status_code,
            ) from exc

    def _parse(self, model: type[ModelT], payload: Any, context: str) -> ModelT:
        """Validate a decoded payload against a vendor model."""
        if not isinstance(payload, dict):
            raise UpstreamError(
                f"{self.display_name} {context} returned unexpected payload type "
                f"{type(payload).__name__}.",
                category="schema",
            )
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamError(
                f"{self.display_name} {context} returned unexpected JSON shape "
                f"({exc.error_count()} validation errors).",
                category="schema",
            ) from exc

    def _error_detail(self, response: httpx.Response) -> str:
        """Pull the vendor's error message out of an error response body."""
        try:
            body = response.json()
        except ValueError:
            return self._redact(response.text[:300])
        if isinstance(body, dict):
            # WeatherAPI: {"error": {"code": 1006, "message": ...}}; OpenWeatherMap: {"message": ...}
            error = body.get("error")
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                return self._redact(error["message"])
            if isinstance(body.get("message"), str):
                return self._redact(body["message"])
        return self._redact(response.text[:300])
