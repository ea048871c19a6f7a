"""Command: resolve an icon reference to its file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from iconctl.commands._base import IconCommand

if TYPE_CHECKING:
    from iconctl.commands._context import AppContext


@click.command(
    cls=IconCommand,
    examples="""\
  iconctl find feather/home
  iconctl find ui:feather/settings
  iconctl --quiet find heroicons/24-outline/bell""",
)
@click.argument("reference")
@click.pass_obj
def find(app: AppContext, reference: str) -> None:
    """Resolve REFERENCE ([namespace:]library/icon) to an icon file."""
    app.emit(app.service.find(reference))
