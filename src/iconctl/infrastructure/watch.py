"""Polling watcher that turns filesystem changes into cache invalidation.

Each poll fingerprints every icon file under the declared roots by
``(path, mtime_ns, size)``. Roots are re-read from the registry on every
poll and a missing root is recorded as ``(root, -1, -1)``, so a root that
appears later counts as a change. When the fingerprint differs from the last
one, the engine is invalidated so the next access re-walks.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from iconctl.infrastructure.filesystem import iter_icon_files

if TYPE_CHECKING:
    from iconctl.infrastructure.engine import IconEngine

logger = logging.getLogger(__name__)

Fingerprint = frozenset[tuple[str, int, int]]
MISSING = -1


def fingerprint(roots: Iterable[Path], *, extension: str) -> Fingerprint:
    """Snapshot the icon files under *roots*; vanished files are skipped."""
    entries: set[tuple[str, int, int]] = set()
    for root in roots:
        if not root.is_dir():
            entries.add((str(root), MISSING, MISSING))
            continue
        for path in iter_icon_files(root, extension=extension):
            try:
                stat = path.stat()
            except OSError:
                continue
            entries.add((str(path), stat.st_mtime_ns, stat.st_size))
    return frozenset(entries)


class PollingWatcher:
    """Invalidate *engine* whenever the icon files under its layers change.

    Parameters:
        engine: The engine whose caches are invalidated.
        interval: Seconds between polls in :meth:`run`.
        on_change: Optional callback invoked after each invalidation.
    """

    def __init__(
        self,
        engine: IconEngine,
        *,
        interval: float = 1.0,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._engine = engine
        self._interval = interval
        self._on_change = on_change
        self._last = self._snapshot()

    def _snapshot(self) -> Fingerprint:
        return fingerprint(self._engine.watched_roots(), extension=self._engine.extension)

    def poll(self) -> bool:
        """Check once. Returns True if a change was detected."""
        current = self._snapshot()
        if current == self._last:
            return False
        self._last = current
        logger.info("Icon files changed, invalidating library cache")
        self._engine.invalidate()
        if self._on_change is not None:
            self._on_change()
        return True

    def run(self, stop: threading.Event) -> int:
        """Poll until *stop* is set. Returns the number of changes seen."""
        changes = 0
        while not stop.wait(self._interval):
            if self.poll():
                changes += 1
        return changes
