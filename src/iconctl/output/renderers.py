"""Human-readable output for each icon operation.

:func:`render_result` picks a renderer from ``_OP_RENDERERS`` by
``result.op``; ops without one get every data field as ``key: value``.
Failed results always go through the error block, which lists the
candidate paths a lookup tried before giving up.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from iconctl.output.console import create_console, get_output, library_style

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from iconctl.services.result import ServiceResult

    Renderer = Callable[..., None]

_LISTING_KEYS = ("library", "namespace", "root")


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Draw *result* into a buffered console and return the text.

    Colour is left to Rich: under CliRunner or a pipe the text is plain.
    """
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One value per line, suitable for ``xargs`` and shell loops."""
    if not result.ok:
        return f"ERROR: {result.op}: {_error_message(result)}"

    data = result.data
    if result.op == "find":
        return str(data.get("path", ""))
    if result.op == "library":
        return "\n".join(data.get("icons", []))

    items = data.get("items")
    if isinstance(items, list) and items:
        lines = [_listing_label(item) for item in items]
        return "\n".join(line for line in lines if line)
    return f"OK: {result.op}"


def _error_message(result: ServiceResult) -> str:
    return result.error.message if result.error else "Unknown error"


def _listing_label(item: Any) -> str:
    if not isinstance(item, dict):
        return ""
    for key in _LISTING_KEYS:
        if item.get(key) is not None:
            return str(item[key])
    return ""


def _compact(value: Any) -> str:
    return _json.dumps(value, separators=(",", ":"))


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "icon.ok"), (f"  {result.op}", "icon.op")))


def _field(console: Console, key: str, value: Any) -> None:
    text = str(value)
    if key in ("library_key", "library"):
        style = library_style(text)
    elif key in ("path", "root"):
        style = "icon.path"
    else:
        style = ""
    console.print(Text.assemble((f"  {key}: ", "icon.key"), (text, style)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        console.print(Text(f"    {key}: {_compact(value)}"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(
        Text.assemble(
            ("ERROR", "icon.error"),
            (f"  {result.op}", "icon.op"),
            f": {_error_message(result)}",
        )
    )
    err = result.error
    if err is None:
        return

    attempted = err.detail.get("attempted") or []
    if attempted:
        console.print(Text("  attempted:", style="dim"))
    for path in attempted:
        console.print(Text(f"    {path}", style="icon.path"))

    if not verbose:
        return
    extra = {k: v for k, v in err.detail.items() if k != "attempted"}
    if extra:
        console.print(Text("  detail:", style="dim"))
    for key, value in extra.items():
        console.print(Text(f"    {key}: {value}"))
    _render_meta(console, result)


def _render_find(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("reference", "icon_name", "library_key", "path"):
        if key in result.data:
            _field(console, key, result.data[key])


def _render_layers(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    layers = result.data.get("items", [])
    if not layers:
        console.print(Text("  No icon layers registered.", style="dim"))
        return

    table = Table(pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Namespace", style="icon.namespace")
    table.add_column("Root", style="icon.path")
    for position, layer in enumerate(layers, start=1):
        table.add_row(str(position), layer.get("namespace") or "(app)", str(layer.get("root", "")))
    console.print(table)


def _render_libraries(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    libraries = result.data.get("items", [])
    if not libraries:
        console.print(Text("  No icon libraries found.", style="dim"))
        return

    with_matches = verbose or any("icons" in entry for entry in libraries)
    table = Table(pad_edge=False)
    table.add_column("Library", no_wrap=True)
    table.add_column("Icons", style="icon.count", justify="right")
    if with_matches:
        table.add_column("Matches")
    for entry in libraries:
        key = str(entry.get("library", ""))
        cells: list[Any] = [Text(key, style=library_style(key)), str(entry.get("count", 0))]
        if with_matches:
            cells.append(", ".join(entry.get("icons", [])))
        table.add_row(*cells)
    console.print(table)
    _field(console, "icon_count", result.data.get("icon_count", 0))


def _render_library(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "library", result.data.get("library", ""))
    _field(console, "count", result.data.get("count", 0))
    names = result.data.get("icons", [])
    if names:
        console.print(Text("  " + "  ".join(names)), soft_wrap=False)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, _compact(value) if isinstance(value, (dict, list)) else value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Renderer] = {
    "find": _render_find,
    "layers": _render_layers,
    "libraries": _render_libraries,
    "library": _render_library,
}
