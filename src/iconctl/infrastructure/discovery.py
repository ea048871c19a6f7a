"""Library discovery across all registered layers.

The result is memoized as a read-only mapping. A rebuild walks every layer
into a fresh dict and publishes it with a single assignment under the
rebuild lock, so readers always observe a complete snapshot. Concurrent
rebuild requests collapse into one walk.

Failure policy: a layer that cannot be walked does not stop the other
layers from being walked, but the rebuild as a whole raises
:class:`DiscoveryError` and the previous snapshot stays published.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType

from iconctl.domain.errors import DiscoveryError
from iconctl.domain.types import ICON_EXTENSION, LibraryEntry, PathLayer, library_key
from iconctl.infrastructure.filesystem import scan_layer
from iconctl.infrastructure.registry import LayerRegistry

logger = logging.getLogger(__name__)

Libraries = Mapping[str, LibraryEntry]


class LibraryDiscovery:
    """Memoized ``LibraryKey -> LibraryEntry`` index over a registry.

    Parameters:
        registry: Source of the ordered layers.
        extension: Icon file extension (including the dot).
        on_rebuild: Optional callback invoked with each new snapshot.
    """

    def __init__(
        self,
        registry: LayerRegistry,
        *,
        extension: str = ICON_EXTENSION,
        on_rebuild: Callable[[Libraries], None] | None = None,
    ) -> None:
        self._registry = registry
        self._extension = extension
        self._on_rebuild = on_rebuild
        # (last good snapshot, fresh, layers it was walked from).
        # Published with a single assignment.
        self._state: tuple[Libraries | None, bool, tuple[PathLayer, ...]] = (None, False, ())
        self._lock = threading.Lock()

    @property
    def is_built(self) -> bool:
        return self._state[1]

    @property
    def snapshot(self) -> Libraries | None:
        """The last successfully built mapping, even if invalidated since."""
        return self._state[0]

    def discover_all(self) -> Libraries:
        """Return every library across all layers, walking on first access.

        A snapshot also goes stale when the registry's layers differ from
        the ones it was walked from, e.g. after a late ``register()``.

        Raises:
            DiscoveryError: If any layer root could not be walked.
        """
        layers = self._registry.layers()
        libraries, fresh, walked = self._state
        if fresh and libraries is not None and walked == layers:
            return libraries
        rebuilt: Libraries | None = None
        with self._lock:
            layers = self._registry.layers()
            libraries, fresh, walked = self._state
            if not fresh or libraries is None or walked != layers:
                rebuilt = self._build(layers)
                self._state = (rebuilt, True, layers)
                libraries = rebuilt
        if rebuilt is not None and self._on_rebuild is not None:
            self._on_rebuild(rebuilt)
        return libraries

    def invalidate(self) -> None:
        """Mark the snapshot stale; the next :meth:`discover_all` re-walks.

        The stale mapping stays available as :attr:`snapshot` until a
        rebuild succeeds.
        """
        with self._lock:
            libraries, _fresh, walked = self._state
            self._state = (libraries, False, walked)
        logger.debug("Library discovery cache invalidated")

    def _build(self, layers: tuple[PathLayer, ...]) -> Libraries:
        entries: dict[str, LibraryEntry] = {}
        failures: list[dict[str, str]] = []

        for layer in layers:
            try:
                scanned = scan_layer(layer.root, extension=self._extension)
            except OSError as exc:
                logger.warning("Failed to walk icon layer %s: %s", layer.root, exc)
                failures.append(
                    {
                        "namespace": layer.namespace or "",
                        "root": str(layer.root),
                        "message": str(exc),
                    }
                )
                continue
            for relative, icon_names in scanned.items():
                key = library_key(layer.namespace, relative)
                entries[key] = LibraryEntry(key=key, icon_names=icon_names)

        if failures:
            raise DiscoveryError(failures, MappingProxyType(entries))

        logger.debug(
            "Discovered %d icon libraries with %d icons",
            len(entries),
            sum(e.count for e in entries.values()),
        )
        return MappingProxyType(entries)
