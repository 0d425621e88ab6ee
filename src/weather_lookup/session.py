"""Command handlers sharing the active provider across a process lifetime."""

from __future__ import annotations

import logging

from .registry import ProviderName, ProviderRegistry
from .router import WeatherRequestRouter
from .state import MemoryStateStore, ProviderState, StateStore
from .weather.base import WeatherProvider
from .weather.models import WeatherResult


class WeatherSession:
    """Holds the active provider; only `configure` changes it."""

    def __init__(
        self,
        registry: ProviderRegistry,
        router: WeatherRequestRouter,
        store: StateStore | MemoryStateStore,
        logger: logging.Logger,
    ) -> None:
        self.registry = registry
        self.router = router
        self.store = store
        self.logger = logger

        state = store.load()
        preferred = state.provider
        if preferred is None:
            self.logger.warning(
                "Stored provider %r is not supported by this version; using the default.",
                state.provider_name,
            )
        self._active_name = registry.resolve(preferred)
        self._active: WeatherProvider = registry.select(self._active_name)

    def close(self) -> None:
        self._active.close()

    def current_provider(self) -> ProviderName:
        return self._active_name

    def get(self, address: str, date_text: str | None = None) -> WeatherResult:
        """Fetch weather for `address` through the active provider."""
        result = self.router.route(self._active, address, date_text)
        self.logger.info(
            "Fetched %s weather from %s.", result.mode.value, self._active_name.pretty_name
        )
        return result

    def configure(self, name: ProviderName) -> str:
        """Switch providers and persist the choice; returns a message for the user."""
        if name == self._active_name:
            return f"Provider {name.pretty_name} is already in use."

        provider = self.registry.select(name)
        previous = self._active_name
        self._active.close()
        self._active = provider
        self._active_name = name
        self.store.save(ProviderState(provider_name=name.value))
        self.logger.info("Provider changed from %s to %s.", previous.pretty_name, name.pretty_name)
        return f"Changing provider: {previous.pretty_name} => {name.pretty_name}."
