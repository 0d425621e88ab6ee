"""Application exception classes."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class MissingCredentialError(ConfigError):
    """Raised when a provider API key is absent from the environment."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            f"Failed to get api key for {provider} provider. "
            f"Set {provider} in the environment or in the .env file of the current folder."
        )
        self.provider = provider


class StateFileError(ConfigError):
    """Raised when the persisted provider selection cannot be read or written."""


class WeatherLookupError(Exception):
    """Base class for recoverable, command-level failures."""


class DateInputError(WeatherLookupError):
    """Raised when the requested date cannot be used."""


class InvalidDateFormatError(DateInputError):
    """Raised when the date does not look like YYYY-MM-DD."""


class InvalidDateValueError(DateInputError):
    """Raised when the date looks like YYYY-MM-DD but is not a calendar date."""


class InvalidAddressError(WeatherLookupError):
    """Raised when the address argument is blank."""


class UnknownProviderError(WeatherLookupError):
    """Raised when a provider name is unknown or has no associated credential."""


class WeatherProviderError(WeatherLookupError):
    """Raised when weather provider requests or normalization fail."""


class UpstreamError(WeatherProviderError):
    """Raised for vendor request failures with category/status metadata."""

    def __init__(
        self,
        message: str,
        *,
        category: str = "unknown",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class AddressNotFoundError(WeatherProviderError):
    """Raised when geocoding returns no match for an address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"No coordinates found for {address!r}.")
        self.address = address
