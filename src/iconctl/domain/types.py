"""Value types shared by the registry, discovery, and resolver."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ICON_EXTENSION = ".svg"


def library_key(namespace: str | None, library_path: str) -> str:
    """Build a LibraryKey: ``path`` for the app layer, ``ns:path`` otherwise."""
    return f"{namespace}:{library_path}" if namespace else library_path


@dataclass(frozen=True)
class PathLayer:
    """One search root. ``namespace`` is None for the application layer."""

    namespace: str | None
    root: Path

    @property
    def is_app(self) -> bool:
        return self.namespace is None


@dataclass(frozen=True)
class LibraryEntry:
    """A discovered library and the icon names it directly contains."""

    key: str
    icon_names: tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.icon_names)


@dataclass(frozen=True)
class IconReference:
    """A parsed reference: ``[namespace:]library_path/icon_name``."""

    namespace: str | None
    library_path: str
    icon_name: str

    @property
    def library_key(self) -> str:
        return library_key(self.namespace, self.library_path)

    def __str__(self) -> str:
        return f"{self.library_key}/{self.icon_name}"


@dataclass(frozen=True)
class IconHandle:
    """A successfully resolved icon.

    Handles are plain values: they are never cached by the engine and
    compare equal when all three fields match.
    """

    file_path: Path
    icon_name: str
    library_key: str
