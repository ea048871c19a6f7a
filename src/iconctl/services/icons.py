"""IconService: resolve, list, render, and refresh icons.

Thin adapter between the :class:`IconEngine` and the interfaces. Each
operation returns a ServiceResult; engine errors become structured
ServiceErrors carrying the error's context (attempted paths, available
namespaces, per-layer discovery failures).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from iconctl.config.models import RenderConfig
from iconctl.domain.errors import DiscoveryError, IconError
from iconctl.domain.svg import render_svg
from iconctl.services.base import BaseService
from iconctl.services.result import ServiceResult

if TYPE_CHECKING:
    from iconctl.infrastructure.discovery import Libraries
    from iconctl.infrastructure.engine import IconEngine

logger = logging.getLogger(__name__)


def _failure_meta(exc: DiscoveryError, previous: Libraries | None) -> dict[str, Any]:
    """What the failed walk did find, plus the last good index if one exists."""
    meta: dict[str, Any] = {
        "partial": {key: list(entry.icon_names) for key, entry in exc.partial.items()}
    }
    if previous is not None:
        meta["previous"] = {key: list(entry.icon_names) for key, entry in previous.items()}
    return meta


class IconService(BaseService):
    """Icon operations over one engine."""

    def __init__(self, engine: IconEngine, *, render: RenderConfig | None = None) -> None:
        super().__init__(engine)
        self._render = render or RenderConfig()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, reference: str) -> ServiceResult:
        """Resolve *reference* to a file."""
        try:
            handle = self._engine.resolve(reference)
        except IconError as exc:
            return self._failure("find", exc)
        return ServiceResult(
            ok=True,
            op="find",
            data={
                "reference": reference.strip(),
                "icon_name": handle.icon_name,
                "library_key": handle.library_key,
                "path": str(handle.file_path),
            },
        )

    def render(self, reference: str, *, css_class: str | None = None) -> ServiceResult:
        """Resolve *reference* and return its SVG with normalized attributes."""
        try:
            handle = self._engine.resolve(reference)
        except IconError as exc:
            return self._failure("render", exc)

        try:
            content = handle.file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(
                "render",
                "READ_FAILED",
                f"Cannot read icon file {handle.file_path}: {exc}",
                detail={"path": str(handle.file_path)},
            )

        svg = render_svg(
            content,
            handle,
            css_class=css_class,
            base_classes=self._render.base_classes,
            class_prefix=self._render.class_prefix,
        )
        return ServiceResult(
            ok=True,
            op="render",
            data={
                "reference": reference.strip(),
                "library_key": handle.library_key,
                "path": str(handle.file_path),
                "svg": svg,
            },
        )

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def layers(self) -> ServiceResult:
        """List registered layers in precedence order."""
        items = [
            {
                "namespace": layer.namespace,
                "root": str(layer.root),
                "app": layer.is_app,
            }
            for layer in self._engine.layers()
        ]
        warnings = [
            f"Duplicate icon namespace {decl.namespace!r} from {decl.origin} ignored: {decl.root}"
            for decl in self._engine.registry.shadowed()
        ]
        return ServiceResult(
            ok=True,
            op="layers",
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    def libraries(self, library: str | None = None, *, query: str | None = None) -> ServiceResult:
        """List libraries, or the icons of one *library*.

        *query* keeps only icon names containing it (case-insensitive);
        libraries left without icons are dropped from the listing.
        """
        try:
            libraries = self._engine.discover_all()
        except DiscoveryError as exc:
            meta = _failure_meta(exc, self._engine.last_libraries)
            return self._failure("libraries", exc, meta=meta)

        needle = (query or "").strip().lower()

        def _matching(names: tuple[str, ...]) -> list[str]:
            return [n for n in names if needle in n.lower()] if needle else list(names)

        if library is not None:
            entry = libraries.get(library)
            if entry is None:
                return ServiceResult.failure(
                    "library",
                    "LIBRARY_NOT_FOUND",
                    f"Library not found: {library}",
                    detail={"library": library, "available": list(libraries)},
                )
            icons = _matching(entry.icon_names)
            return ServiceResult(
                ok=True,
                op="library",
                data={"library": entry.key, "icons": icons, "count": len(icons)},
            )

        items: list[dict[str, Any]] = []
        for key, entry in libraries.items():
            icons = _matching(entry.icon_names)
            if needle and not icons:
                continue
            item: dict[str, Any] = {"library": key, "count": len(icons)}
            if needle:
                item["icons"] = icons
            items.append(item)

        return ServiceResult(
            ok=True,
            op="libraries",
            data={
                "items": items,
                "count": len(items),
                "icon_count": sum(item["count"] for item in items),
            },
        )

    # ------------------------------------------------------------------
    # Cache lifecycle
    # ------------------------------------------------------------------

    def preload(self) -> ServiceResult:
        """Build the library index eagerly (e.g. at process boot)."""
        try:
            libraries: Libraries = self._engine.discover_all()
        except DiscoveryError as exc:
            meta = _failure_meta(exc, self._engine.last_libraries)
            return self._failure("preload", exc, meta=meta)

        total = sum(entry.count for entry in libraries.values())
        logger.info("Preloaded %d icon libraries with %d total icons", len(libraries), total)
        return ServiceResult(
            ok=True,
            op="preload",
            data={"libraries": len(libraries), "icons": total},
        )

    def invalidate(self) -> ServiceResult:
        """Drop both caches; the next access re-reads the filesystem."""
        self._engine.invalidate()
        return ServiceResult(ok=True, op="invalidate", data={"invalidated": True})
