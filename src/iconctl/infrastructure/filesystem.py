"""Filesystem walking for icon layers.

INVARIANT: Files are truth. The engine only reads the layer directories;
it never writes to them. Everything here returns sorted results so that
discovery is reproducible for a fixed filesystem state.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from iconctl.domain.types import ICON_EXTENSION


def _raise(exc: OSError) -> None:
    raise exc


def scan_layer(root: Path, *, extension: str = ICON_EXTENSION) -> dict[str, tuple[str, ...]]:
    """Map each library directory under *root* to its sorted icon names.

    A directory is a library when it directly contains at least one file
    ending in *extension*. Sub-directories are walked and keyed on their
    own; the root itself is never a library.

    Raises:
        OSError: If any directory under *root* cannot be listed.
    """
    libraries: dict[str, tuple[str, ...]] = {}
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        icons = sorted(
            name[: -len(extension)]
            for name in filenames
            if name.endswith(extension) and len(name) > len(extension)
        )
        if not icons:
            continue
        relative = Path(dirpath).relative_to(root).as_posix()
        if relative in ("", "."):
            continue
        libraries[relative] = tuple(icons)
    return dict(sorted(libraries.items()))


def iter_icon_files(root: Path, *, extension: str = ICON_EXTENSION) -> Iterator[Path]:
    """Yield every icon file under *root*, skipping unreadable directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(extension):
                yield Path(dirpath) / name


def icon_path(root: Path, library_path: str, icon_name: str, *, extension: str = ICON_EXTENSION) -> Path:
    """Candidate file for *icon_name* inside *library_path* under *root*."""
    return root.joinpath(*library_path.split("/"), f"{icon_name}{extension}")
