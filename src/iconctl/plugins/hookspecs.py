"""Pluggy hook specifications for iconctl.

One setup-time hook lets plugins declare namespaced icon roots; two
lifecycle hooks report cache rebuilds and invalidations.
"""

from __future__ import annotations

from pathlib import Path

import pluggy

PROJECT_NAME = "iconctl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class IconctlHookSpec:
    """Hook specifications for the iconctl plugin system."""

    @hookspec
    def register_icon_roots(self) -> dict[str, str | Path] | None:
        """Return ``namespace -> icon root`` declarations, in order.

        Namespaces are normalized (``AcmeUI`` becomes ``acme_ui``); roots
        that do not exist are skipped when the layer registry is built.
        """

    @hookspec
    def post_discover(self, library_count: int, icon_count: int) -> None:
        """Called after the library index is rebuilt."""

    @hookspec
    def post_invalidate(self) -> None:
        """Called after the engine caches are invalidated."""
