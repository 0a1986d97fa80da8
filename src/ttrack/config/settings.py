"""TtSettings: one frozen object built from CLI flags, env vars and TOML.

Later sources only fill what earlier ones leave unset:
  1. CLI flags (init kwargs), unset flags are dropped
  2. ``TT_*`` environment variables, ``__`` separating nested keys
  3. the TOML config file (see :mod:`ttrack.config.discovery`)
  4. defaults from :mod:`ttrack.config.models`

Settings are read once at startup and passed explicitly to every service.
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ttrack.config.discovery import expand_path, find_config
from ttrack.config.models import DEFAULT_DATA_FILES, StorageFormat, TimeGoalConfig

logger = logging.getLogger(__name__)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings read from the TOML config file, when one was found.

    Top-level keys that are not settings fields are dropped with a warning
    instead of failing validation.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = self._read(toml_path) if toml_path else {}

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("rb") as fh:
                raw = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise click.ClickException(msg) from exc

        known = self.settings_cls.model_fields.keys()
        for key in sorted(raw.keys() - known):
            logger.warning("Ignoring unknown setting %r in %s", key, path)
        return {key: value for key, value in raw.items() if key in known}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path for the settings object under construction.
_tls = threading.local()


class TtSettings(BaseSettings):
    """Settings for the whole ``tt`` run, frozen after construction.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        data_file: Data file override; None means the default for
            *storage_format*.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Tracking ---
    auto_insert_stop: bool = False
    data_file: str | None = None
    storage_format: StorageFormat = StorageFormat.JSON
    time_goal: TimeGoalConfig = Field(default_factory=TimeGoalConfig)

    @property
    def data_path(self) -> Path:
        """The data file with ``~`` and ``$VARS`` expanded."""
        return expand_path(self.data_file or DEFAULT_DATA_FILES[self.storage_format])

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Drop dotenv and secrets files; read TOML below env vars."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(cls, *, config_path: str | None = None, **cli_flags: Any) -> TtSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when given, otherwise discovers the
        config file. Flags left unset (None) do not override lower sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = expand_path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config()

        overrides = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
