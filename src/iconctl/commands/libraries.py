"""Command: browse discovered icon libraries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from iconctl.commands._base import IconCommand

if TYPE_CHECKING:
    from iconctl.commands._context import AppContext


@click.command(
    cls=IconCommand,
    examples="""\
  iconctl libraries
  iconctl libraries feather
  iconctl libraries --query arrow
  iconctl libraries ui:heroicons/24-outline --query chevron""",
)
@click.argument("library", required=False)
@click.option("-q", "--query", "query", default=None, help="Only icons whose name contains TEXT.")
@click.pass_obj
def libraries(app: AppContext, library: str | None, query: str | None) -> None:
    """List icon libraries, or the icons of one LIBRARY."""
    app.emit(app.service.libraries(library, query=query))
