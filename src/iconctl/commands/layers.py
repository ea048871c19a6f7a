"""Command: list registered icon layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from iconctl.commands._base import IconCommand

if TYPE_CHECKING:
    from iconctl.commands._context import AppContext


@click.command(
    cls=IconCommand,
    examples="""\
  iconctl layers
  iconctl --json layers""",
)
@click.pass_obj
def layers(app: AppContext) -> None:
    """List icon search roots in precedence order."""
    app.emit(app.service.layers())
