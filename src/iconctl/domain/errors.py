"""Typed errors raised by reference parsing, resolution, and discovery.

Every error carries a machine-readable ``code`` and a ``context`` dict so
the service layer can convert it into a ``ServiceError`` without parsing
messages. Reference errors are terminal: they describe a caller or content
mistake, never a transient condition.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class IconError(Exception):
    """Base exception for iconctl."""

    code: str = "ICON_ERROR"
    context: dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}

    @property
    def message(self) -> str:
        return str(self)

    def to_json_error(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "code": self.code,
            "message": str(self),
            "context": self.context,
        }


class InvalidReferenceError(IconError, ValueError):
    """The reference string is blank or structurally malformed."""

    code = "INVALID_REFERENCE"


class MissingLibraryError(IconError, ValueError):
    """The reference names an icon without a library path."""

    code = "MISSING_LIBRARY"


class EngineNotFoundError(IconError, LookupError):
    """The namespace prefix is not registered by any layer."""

    code = "ENGINE_NOT_FOUND"

    def __init__(self, reference: str, namespace: str, available: list[str]) -> None:
        listed = ", ".join(available) if available else "none available"
        super().__init__(
            f"Engine '{namespace}' not found for reference '{reference}'. "
            f"Available engines: {listed}",
            context={"reference": reference, "namespace": namespace, "available": available},
        )
        self.namespace = namespace
        self.available = available


class IconNotFoundError(IconError, LookupError):
    """No compatible layer holds the requested icon file."""

    code = "ICON_NOT_FOUND"

    def __init__(self, reference: str, library_key: str, icon_name: str, attempted: list[str]) -> None:
        where = "engine library" if ":" in library_key else "library"
        super().__init__(
            f"Icon '{icon_name}' not found in {where} '{library_key}' "
            f"(attempted: {', '.join(attempted) or 'no compatible layers'})",
            context={"reference": reference, "attempted": attempted},
        )
        self.attempted = attempted


class DiscoveryError(IconError):
    """One or more layer roots could not be walked.

    ``partial`` holds the libraries discovered from the layers that were
    readable; the engine's cache is left untouched.
    """

    code = "DISCOVERY_FAILED"

    def __init__(self, failures: list[dict[str, str]], partial: Mapping[str, Any]) -> None:
        roots = ", ".join(f["root"] for f in failures)
        super().__init__(
            f"Library discovery failed for {len(failures)} layer(s): {roots}",
            context={"failures": failures},
        )
        self.failures = failures
        self.partial = partial
