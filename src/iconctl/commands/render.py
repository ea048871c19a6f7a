"""Command: print an icon as inline SVG."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from iconctl.commands._base import IconCommand

if TYPE_CHECKING:
    from iconctl.commands._context import AppContext


@click.command(
    cls=IconCommand,
    examples="""\
  iconctl render feather/home
  iconctl render feather/home --class "w-5 h-5"
  iconctl render ui:feather/settings > settings.svg""",
)
@click.argument("reference")
@click.option("--class", "css_class", default=None, help="Extra CSS classes for the <svg> tag.")
@click.pass_obj
def render(app: AppContext, reference: str, css_class: str | None) -> None:
    """Render REFERENCE as SVG with class, role and aria-label attributes."""
    app.emit(app.service.render(reference, css_class=css_class))
