"""Inline SVG presentation attributes.

Pure string templating on the opening ``<svg>`` tag: the existing
``class`` attribute is replaced, and ``role``/``aria-label`` are appended.
The rest of the document is returned untouched; no SVG validation happens.
"""

from __future__ import annotations

import html
import re
from collections.abc import Sequence

from iconctl.domain.types import IconHandle

_SVG_OPEN_LOOSE = re.compile(r"<svg\s*", re.IGNORECASE)
_SVG_OPEN_TAG = re.compile(r"<svg(\s+[^>]*)?>")
_CLASS_ATTR = re.compile(r"""\sclass=["'][^"']*["']""")


def humanize(name: str) -> str:
    """Turn an icon name into a readable label (``arrow-left`` -> ``Arrow left``)."""
    text = re.sub(r"[_\-]+", " ", name).strip()
    text = re.sub(r"\s+", " ", text)
    return text[:1].upper() + text[1:].lower()


def css_classes(
    library_key: str,
    *,
    css_class: str | None = None,
    base_classes: Sequence[str] = ("fill-current",),
    class_prefix: str = "icon",
) -> str:
    parts = [f"{class_prefix}[{library_key}]", *base_classes]
    if css_class:
        parts.append(css_class)
    return " ".join(p for p in parts if p)


def render_svg(
    svg: str,
    handle: IconHandle,
    *,
    css_class: str | None = None,
    base_classes: Sequence[str] = ("fill-current",),
    class_prefix: str = "icon",
) -> str:
    """Return *svg* with normalized attributes on its opening tag."""
    classes = css_classes(
        handle.library_key,
        css_class=css_class,
        base_classes=base_classes,
        class_prefix=class_prefix,
    )
    label = humanize(handle.icon_name)

    def _rewrite(match: re.Match[str]) -> str:
        attributes = _CLASS_ATTR.sub("", match.group(1) or "").rstrip()
        extra = [
            f'class="{html.escape(classes)}"',
            'role="img"',
            f'aria-label="{html.escape(label)}"',
        ]
        return f"<svg{attributes} {' '.join(extra)}>"

    normalized = _SVG_OPEN_LOOSE.sub("<svg ", svg, count=1)
    return _SVG_OPEN_TAG.sub(_rewrite, normalized, count=1)
