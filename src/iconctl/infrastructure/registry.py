"""PathLayer registry: the ordered list of icon search roots.

The application layer (no namespace) comes first, followed by namespaced
layers in declaration order. That order is the tie-break for every lookup
made by discovery and the resolver.

Layers are computed once and memoized. :meth:`LayerRegistry.reset`
returns the registry to the unbuilt state; the next :meth:`layers` call
re-reads every declaration source and re-checks which roots exist.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from iconctl.domain.namespaces import normalize_namespace
from iconctl.domain.types import PathLayer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerDeclaration:
    """A namespaced root as declared by config, a plugin, or a caller."""

    namespace: str
    root: Path
    origin: str = "api"


LayerSource = Callable[[], Iterable[LayerDeclaration]]


class LayerRegistry:
    """Ordered, memoized set of :class:`PathLayer` search roots.

    Parameters:
        app_root: Root of the unnamespaced application layer, or None.
        sources: Callables returning declarations; queried in order on
            every rebuild, before programmatic registrations.
    """

    def __init__(
        self,
        app_root: Path | None = None,
        *,
        sources: Iterable[LayerSource] = (),
    ) -> None:
        self._app_root = app_root
        self._sources: list[LayerSource] = list(sources)
        self._registered: list[LayerDeclaration] = []
        self._layers: tuple[PathLayer, ...] | None = None
        self._shadowed: tuple[LayerDeclaration, ...] = ()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, namespace: str, root: Path | str, *, origin: str = "api") -> str:
        """Declare a namespaced layer. Returns the normalized namespace."""
        token = normalize_namespace(namespace)
        with self._lock:
            self._registered.append(LayerDeclaration(token, Path(root), origin))
            self._layers = None
        return token

    def add_source(self, source: LayerSource) -> None:
        """Add a declaration source consulted on every rebuild."""
        with self._lock:
            self._sources.append(source)
            self._layers = None

    # ------------------------------------------------------------------
    # Memoized view
    # ------------------------------------------------------------------

    @property
    def is_built(self) -> bool:
        return self._layers is not None

    def layers(self) -> tuple[PathLayer, ...]:
        """Return the ordered layers, building them on first access."""
        layers = self._layers
        if layers is not None:
            return layers
        with self._lock:
            if self._layers is None:
                self._layers = self._build()
            return self._layers

    def namespaces(self) -> list[str]:
        """Namespaces of the built layers, in registration order."""
        return [layer.namespace for layer in self.layers() if layer.namespace is not None]

    def declared_roots(self) -> list[Path]:
        """Every declared root in precedence order, whether or not it exists yet.

        Sources are re-queried, so roots a plugin or config starts declaring
        after the last build are included.
        """
        roots = [self._app_root] if self._app_root is not None else []
        roots.extend(decl.root for decl in self._declarations())
        return roots

    def shadowed(self) -> tuple[LayerDeclaration, ...]:
        """Declarations dropped from the last build as duplicate namespaces."""
        self.layers()
        return self._shadowed

    def reset(self) -> None:
        """Clear the memo so the next :meth:`layers` call rebuilds."""
        with self._lock:
            self._layers = None
        logger.debug("Layer registry reset")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _declarations(self) -> list[LayerDeclaration]:
        declared: list[LayerDeclaration] = []
        for source in self._sources:
            declared.extend(source())
        declared.extend(self._registered)
        return declared

    def _build(self) -> tuple[PathLayer, ...]:
        built: list[PathLayer] = []
        shadowed: list[LayerDeclaration] = []

        if self._app_root is not None:
            if self._app_root.is_dir():
                built.append(PathLayer(namespace=None, root=self._app_root))
            else:
                logger.debug("Skipping app icon layer, root missing: %s", self._app_root)

        seen: dict[str, LayerDeclaration] = {}
        for decl in self._declarations():
            if decl.namespace in seen:
                logger.warning(
                    "Duplicate icon namespace %r from %s (%s); keeping %s",
                    decl.namespace,
                    decl.origin,
                    decl.root,
                    seen[decl.namespace].root,
                )
                shadowed.append(decl)
                continue
            if not decl.root.is_dir():
                logger.debug("Skipping icon layer %r, root missing: %s", decl.namespace, decl.root)
                continue
            seen[decl.namespace] = decl
            built.append(PathLayer(namespace=decl.namespace, root=decl.root))

        self._shadowed = tuple(shadowed)
        logger.debug("Built %d icon layer(s)", len(built))
        return tuple(built)
