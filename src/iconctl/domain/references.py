"""Reference grammar and parser.

Grammar::

    reference    := [namespace ":"] library-path "/" icon-name
    library-path := segment ("/" segment)*

There is no escaping mechanism, so neither icon names nor library segments
may contain ``/`` or ``:``. Parsing is purely structural; whether the
namespace is registered is checked by the resolver.
"""

from __future__ import annotations

from iconctl.domain.errors import InvalidReferenceError, MissingLibraryError
from iconctl.domain.types import IconReference

_FORMAT_HINT = "Use format: library/icon or engine:library/icon"
_RESERVED_SEGMENTS = frozenset({".", ".."})


def _invalid(reference: str, reason: str) -> InvalidReferenceError:
    return InvalidReferenceError(
        f"Invalid icon reference '{reference}': {reason}. {_FORMAT_HINT}",
        context={"reference": reference},
    )


def _missing_library(reference: str) -> MissingLibraryError:
    return MissingLibraryError(
        f"Missing library in icon reference: '{reference}'. {_FORMAT_HINT}",
        context={"reference": reference},
    )


def _check_segment(reference: str, segment: str, what: str) -> None:
    if not segment.strip():
        raise _invalid(reference, f"empty {what}")
    if segment in _RESERVED_SEGMENTS:
        raise _invalid(reference, f"{what} may not be {segment!r}")


def parse_reference(reference: str | None) -> IconReference:
    """Parse *reference* into an :class:`IconReference`.

    Raises:
        InvalidReferenceError: Blank input or a malformed segment.
        MissingLibraryError: No library path precedes the icon name.
    """
    if reference is None or not reference.strip():
        raise InvalidReferenceError("Icon reference cannot be blank", context={"reference": reference or ""})
    reference = reference.strip()

    library_path, sep, icon_name = reference.rpartition("/")
    if not sep or not library_path:
        raise _missing_library(reference)

    _check_segment(reference, icon_name, "icon name")
    if ":" in icon_name:
        raise _invalid(reference, "icon name may not contain ':'")

    namespace: str | None = None
    if ":" in library_path:
        namespace, _, library_path = library_path.partition(":")
        if not namespace.strip():
            raise _invalid(reference, "empty namespace")
        if not library_path:
            raise _missing_library(reference)
        if ":" in library_path:
            raise _invalid(reference, "only one namespace prefix is allowed")

    for segment in library_path.split("/"):
        _check_segment(reference, segment, "library segment")

    return IconReference(namespace=namespace, library_path=library_path, icon_name=icon_name)
