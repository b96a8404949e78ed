"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TUTORPAL_*`` prefix (``TUTORPAL_SCHEDULE__LATEST=18:00``)
  3. TOML file    — ``tutorpal.toml`` discovered via walk-up, or ``--config``
  4. Code defaults — baked into the section models
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

from tutorpal.config.discovery import find_config
from tutorpal.config.models import ScheduleConfig, StorageConfig

logger = logging.getLogger(__name__)

# Keys the TOML file may set; everything else is reported and skipped.
TOML_KEYS = frozenset({"storage", "schedule", "json_output", "quiet", "verbose", "log_json"})


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, keeping only keys tutorpal understands.

    Raises:
        click.ClickException: The file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
    unknown = sorted(set(data) - TOML_KEYS)
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))
    return {key: value for key, value in data.items() if key in TOML_KEYS}


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the ``tutorpal.toml`` in use (if any)."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(toml_path) if toml_path is not None else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path for the settings object under construction.
_tls = threading.local()


def locate_config(config_path: str | None, start: Path | None) -> Path | None:
    """Resolve the TOML file: the explicit ``--config`` path, else walk-up discovery.

    Raises:
        click.ClickException: An explicit path was given but is not a file.
    """
    if not config_path:
        return find_config(start)
    explicit = Path(config_path)
    if not explicit.is_file():
        raise click.ClickException(f"Config file not found: {explicit}")
    return explicit


class TutorPalSettings(BaseSettings):
    """Unified settings for the tutorpal CLI.

    Attributes:
        data_root: Directory relative storage paths resolve against (parent
            of the TOML file in use, or CWD if there is none).
        config_path: The TOML file in use, if any.
        data_file: Explicit ``--data-file`` override.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TUTORPAL_",
        "env_nested_delimiter": "__",
    }

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    data_file: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    storage: StorageConfig = Field(default_factory=StorageConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **cli_flags: Any,
    ) -> TutorPalSettings:
        """Build settings for one CLI invocation.

        ``None`` flags are dropped so they never mask env vars or TOML values.
        """
        toml_path = locate_config(config_path, data_root)
        if data_root is None:
            data_root = toml_path.parent if toml_path is not None else Path.cwd()

        flags = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = toml_path
        try:
            return cls(data_root=data_root, config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None

    @property
    def resolved_data_file(self) -> Path:
        """Address book file: ``--data-file``, else ``[storage] path`` under data_root."""
        if self.data_file is not None:
            return self.data_file
        path = Path(self.storage.path)
        return path if path.is_absolute() else self.data_root / path
