"""IconEngine: composition root for the registry, discovery, and resolver.

The engine is the single object injected into every service. It owns the
two memoized caches (registry layers and discovery snapshot), and both
share one registry so their precedence semantics agree. There is no
module-level state: callers create and keep an engine instance.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from iconctl.domain.namespaces import normalize_namespace
from iconctl.domain.types import ICON_EXTENSION, IconHandle, PathLayer
from iconctl.infrastructure.discovery import Libraries, LibraryDiscovery
from iconctl.infrastructure.registry import LayerDeclaration, LayerRegistry
from iconctl.infrastructure.resolver import ReferenceResolver

if TYPE_CHECKING:
    from iconctl.config.models import LayerConfig
    from iconctl.config.settings import IconSettings
    from iconctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


def expand_root(raw: str | Path, *, project_root: Path) -> Path:
    """Expand ``~`` and env vars; relative paths are project-relative."""
    p = Path(os.path.expandvars(str(raw)).strip()).expanduser()
    if not p.is_absolute():
        p = project_root / p
    return p


def config_declarations(layers: Iterable[LayerConfig], *, project_root: Path) -> list[LayerDeclaration]:
    """Turn ``[[layers]]`` config entries into registry declarations."""
    return [
        LayerDeclaration(
            namespace=normalize_namespace(layer.namespace),
            root=expand_root(layer.path, project_root=project_root),
            origin="config",
        )
        for layer in layers
        if layer.enabled
    ]


class IconEngine:
    """Resolve references and list libraries over one layer registry.

    Parameters:
        registry: The layer registry to search. Built from *app_root*
            when omitted.
        app_root: Root of the application icon layer.
        extension: Icon file extension.
        plugin_manager: Optional loaded PluginManager for lifecycle hooks.
    """

    def __init__(
        self,
        registry: LayerRegistry | None = None,
        *,
        app_root: Path | None = None,
        extension: str = ICON_EXTENSION,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._registry = registry if registry is not None else LayerRegistry(app_root)
        self._extension = extension
        self._pm = plugin_manager
        self._discovery = LibraryDiscovery(
            self._registry, extension=extension, on_rebuild=self._after_discover
        )
        self._resolver = ReferenceResolver(self._registry, extension=extension)

    @classmethod
    def from_settings(
        cls,
        settings: IconSettings,
        *,
        plugin_manager: PluginManager | None = None,
    ) -> IconEngine:
        """Build an engine from settings: app layer, config layers, plugins."""
        root = settings.project_root
        registry = LayerRegistry(expand_root(settings.icons.path, project_root=root))
        configured = config_declarations(settings.layers, project_root=root)
        registry.add_source(lambda: configured)
        if plugin_manager is not None:
            registry.add_source(plugin_manager.collect_icon_roots)
        return cls(
            registry,
            extension=settings.icons.extension,
            plugin_manager=plugin_manager,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def registry(self) -> LayerRegistry:
        return self._registry

    @property
    def extension(self) -> str:
        return self._extension

    def layers(self) -> tuple[PathLayer, ...]:
        return self._registry.layers()

    def watched_roots(self) -> list[Path]:
        """Declared roots to poll for changes, including ones not created yet."""
        return self._registry.declared_roots()

    def resolve(self, reference: str) -> IconHandle:
        return self._resolver.resolve(reference)

    def discover_all(self) -> Libraries:
        return self._discovery.discover_all()

    @property
    def last_libraries(self) -> Libraries | None:
        """The last successfully discovered index, stale or not."""
        return self._discovery.snapshot

    def invalidate(self) -> None:
        """Mark both caches unbuilt. Handles already issued stay valid values."""
        self._registry.reset()
        self._discovery.invalidate()
        self._dispatch("post_invalidate")

    # ------------------------------------------------------------------
    # Plugin hooks
    # ------------------------------------------------------------------

    def _after_discover(self, libraries: Libraries) -> None:
        self._dispatch(
            "post_discover",
            library_count=len(libraries),
            icon_count=sum(entry.count for entry in libraries.values()),
        )

    def _dispatch(self, hook_name: str, **payload: Any) -> None:
        """Call a lifecycle hook. Plugin failures are warnings, never errors."""
        if self._pm is None:
            return
        try:
            getattr(self._pm.hook, hook_name)(**payload)
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)
