"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, iconctl.toml only contains
overrides. A project with icons under ``app/assets/icons`` needs no config
file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from iconctl.domain.namespaces import normalize_namespace

# --- iconctl.toml sections ---


class IconsConfig(BaseModel):
    """[icons] section."""

    model_config = {"frozen": True}

    path: str = "app/assets/icons"
    extension: str = ".svg"
    preload: bool = True

    @field_validator("extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        value = value.strip()
        if not value.lstrip("."):
            msg = "extension must not be empty"
            raise ValueError(msg)
        return value if value.startswith(".") else f".{value}"


class LayerConfig(BaseModel):
    """One [[layers]] entry: a namespaced icon root."""

    model_config = {"frozen": True}

    namespace: str
    path: str
    enabled: bool = True

    @field_validator("namespace")
    @classmethod
    def _path_safe(cls, value: str) -> str:
        return normalize_namespace(value)


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    base_classes: list[str] = Field(default_factory=lambda: ["fill-current"])
    class_prefix: str = "icon"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".iconctl/plugins"


class WatchConfig(BaseModel):
    """[watch] section."""

    model_config = {"frozen": True}

    interval: float = Field(default=1.0, gt=0)


class IconConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    icons: IconsConfig = Field(default_factory=IconsConfig)
    layers: list[LayerConfig] = Field(default_factory=list)
    render: RenderConfig = Field(default_factory=RenderConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
