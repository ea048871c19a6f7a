"""Reference resolution: point lookup of one icon across the layers.

Resolution is a deterministic first-match walk over the registry: only
layers whose namespace equals the reference's namespace are candidates,
and the earliest one holding ``library_path/icon_name.svg`` wins.
"""

from __future__ import annotations

import logging

from iconctl.domain.errors import EngineNotFoundError, IconNotFoundError
from iconctl.domain.references import parse_reference
from iconctl.domain.types import ICON_EXTENSION, IconHandle, IconReference
from iconctl.infrastructure.filesystem import icon_path
from iconctl.infrastructure.registry import LayerRegistry

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Resolve reference strings against a :class:`LayerRegistry`."""

    def __init__(self, registry: LayerRegistry, *, extension: str = ICON_EXTENSION) -> None:
        self._registry = registry
        self._extension = extension

    def resolve(self, reference: str) -> IconHandle:
        """Parse *reference* and return the handle of the first matching file.

        Raises:
            InvalidReferenceError: Blank or malformed reference.
            MissingLibraryError: No library path in the reference.
            EngineNotFoundError: Namespace prefix is not registered.
            IconNotFoundError: No compatible layer holds the file.
        """
        parsed = parse_reference(reference)
        raw = reference.strip()

        if parsed.namespace is not None:
            available = self._registry.namespaces()
            if parsed.namespace not in available:
                raise EngineNotFoundError(raw, parsed.namespace, available)

        return self.lookup(parsed, reference=raw)

    def lookup(self, parsed: IconReference, *, reference: str | None = None) -> IconHandle:
        """Walk the layers for an already-parsed reference."""
        attempted: list[str] = []
        for layer in self._registry.layers():
            if layer.namespace != parsed.namespace:
                continue
            candidate = icon_path(
                layer.root, parsed.library_path, parsed.icon_name, extension=self._extension
            )
            attempted.append(str(candidate))
            if candidate.is_file():
                return IconHandle(
                    file_path=candidate,
                    icon_name=parsed.icon_name,
                    library_key=parsed.library_key,
                )

        logger.debug("Icon %s not found (attempted %d path(s))", parsed, len(attempted))
        raise IconNotFoundError(
            reference or str(parsed), parsed.library_key, parsed.icon_name, attempted
        )
