"""Buffered Rich consoles and the iconctl colour theme.

Renderers draw into a StringIO-backed Console and hand back plain text,
so ``format_result()`` stays a pure ``ServiceResult -> str`` function.
Rich drops colour codes on its own when stdout is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ICON_THEME = Theme(
    {
        "icon.ok": "bold green",
        "icon.error": "bold red",
        "icon.op": "bold cyan",
        "icon.key": "dim",
        "icon.library": "bold blue",
        "icon.namespace": "magenta",
        "icon.path": "dim",
        "icon.count": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int = 120) -> Console:
    return Console(file=StringIO(), theme=ICON_THEME, no_color=no_color, highlight=False, width=width)


def get_output(console: Console) -> str:
    buffer = console.file
    assert isinstance(buffer, StringIO)
    return buffer.getvalue()


def library_style(key: str) -> str:
    """Namespaced library keys (``ui:feather``) are tinted like namespaces."""
    return "icon.namespace" if ":" in key else "icon.library"
