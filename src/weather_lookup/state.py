"""Persisted provider selection."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from .config import APP_NAME, Settings
from .exceptions import StateFileError
from .registry import DEFAULT_PROVIDER, ProviderName

STATE_FILE_NAME = "config.json"


class ProviderState(BaseModel):
    """The single record kept between invocations.

    The name is kept as text so a record written by a build with other providers
    still loads.
    """

    provider_name: str = DEFAULT_PROVIDER.value

    @property
    def provider(self) -> ProviderName | None:
        try:
            return ProviderName(self.provider_name)
        except ValueError:
            return None


class StateStore:
    """Reads and writes `ProviderState` as JSON in the per-user config directory."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def from_settings(cls, settings: Settings) -> StateStore:
        state_dir = settings.weather_state_dir or Path(user_config_dir(APP_NAME))
        return cls(state_dir / STATE_FILE_NAME)

    def load(self) -> ProviderState:
        """Return the stored state, or the default one when nothing was saved yet."""
        if not self.path.exists():
            return ProviderState()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StateFileError(f"Failed reading provider state {self.path}: {exc}") from exc
        try:
            return ProviderState.model_validate_json(raw)
        except ValidationError as exc:
            raise StateFileError(
                f"Provider state {self.path} is corrupted ({exc.error_count()} validation "
                "errors); fix or delete the file."
            ) from exc

    def save(self, state: ProviderState) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{STATE_FILE_NAME}.", suffix=".tmp"
            )
        except OSError as exc:
            raise StateFileError(f"Failed writing provider state {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(state.model_dump_json(indent=2))
                fh.write("\n")
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StateFileError(f"Failed writing provider state {self.path}: {exc}") from exc


class MemoryStateStore:
    """Keeps the selection for the lifetime of the process only."""

    def __init__(self, state: ProviderState | None = None) -> None:
        self._state = state or ProviderState()

    def load(self) -> ProviderState:
        return self._state

    def save(self, state: ProviderState) -> None:
        self._state = state
