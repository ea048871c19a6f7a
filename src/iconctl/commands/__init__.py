"""Subcommand modules for iconctl.

Provides register_commands() which uses deferred imports to keep
``iconctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from iconctl.commands.find import find
    from iconctl.commands.layers import layers
    from iconctl.commands.libraries import libraries
    from iconctl.commands.render import render
    from iconctl.commands.watch import watch

    cli.add_command(layers)
    cli.add_command(libraries)
    cli.add_command(find)
    cli.add_command(render)
    cli.add_command(watch)
