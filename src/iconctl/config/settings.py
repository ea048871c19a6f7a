"""IconSettings: the merged view of CLI flags, env vars, and iconctl.toml.

Precedence, highest first: keyword arguments (CLI flags), ``ICONCTL_*``
environment variables (``__`` separates nested keys, e.g.
``ICONCTL_WATCH__INTERVAL``), the TOML file, then the section defaults.
"""

from __future__ import annotations

import threading
import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from iconctl.config.discovery import find_config
from iconctl.config.models import (
    IconsConfig,
    LayerConfig,
    PluginsConfig,
    RenderConfig,
    WatchConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one parsed ``iconctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = self._read(toml_path) if toml_path is not None else {}

    @staticmethod
    def _read(toml_path: Path) -> dict[str, Any]:
        if not toml_path.is_file():
            return {}
        try:
            with toml_path.open("rb") as fh:
                return tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# pydantic-settings builds sources inside the model constructor, so the
# TOML path is handed over per thread for the duration of that call.
_active = threading.local()


@contextmanager
def _toml_source(path: Path | None) -> Iterator[None]:
    _active.toml_path = path
    try:
        yield
    finally:
        _active.toml_path = None


class IconSettings(BaseSettings):
    """Frozen settings shared by the CLI and embedding hosts.

    Attributes:
        project_root: Base for relative paths in the config: the ``--root``
            flag, else the directory holding ``iconctl.toml``, else CWD.
        config_path: The config file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ICONCTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    icons: IconsConfig = Field(default_factory=IconsConfig)
    layers: list[LayerConfig] = Field(default_factory=list)
    render: RenderConfig = Field(default_factory=RenderConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)

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
            TomlSettingsSource(settings_cls, getattr(_active, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> IconSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist means "no config";
        it never falls back to discovery.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path is not None else Path.cwd()

        with _toml_source(toml_path):
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
