"""Namespace normalization for plugin-provided icon layers.

A plugin declares an identifier such as ``AcmeUI``, ``acme.ui`` or
``AcmeUi::Engine``; the registry stores it as a lowercase, path-safe token
(``acme_ui``) so it can prefix reference strings.
"""

from __future__ import annotations

import re

NAMESPACE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_]*$")

_MODULE_SEPARATORS = re.compile(r"::|[./]")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_NON_TOKEN = re.compile(r"[^a-z0-9]+")


def _underscore(segment: str) -> str:
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", segment)
    text = _CAMEL_BOUNDARY.sub(r"\1_\2", text)
    return _NON_TOKEN.sub("_", text.lower()).strip("_")


def normalize_namespace(identifier: str) -> str:
    """Normalize a declared plugin identifier into a namespace token.

    Raises:
        ValueError: If nothing path-safe remains after normalization.
    """
    segments = [s for s in _MODULE_SEPARATORS.split(identifier.strip()) if s.strip()]
    if len(segments) > 1 and segments[-1].strip().lower() == "engine":
        segments = segments[:-1]

    token = "_".join(filter(None, (_underscore(s) for s in segments)))
    if not NAMESPACE_PATTERN.match(token):
        msg = f"Cannot derive a namespace from identifier {identifier!r}"
        raise ValueError(msg)
    return token
