"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and colors) or
machines (--json). The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from iconctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from iconctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags resolved from the CLI."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON mode dumps the full result. A successful ``render`` prints the
    bare SVG so it can be piped into files. Otherwise quiet or Rich output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if result.ok and result.op == "render":
        return str(result.data.get("svg", ""))
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
