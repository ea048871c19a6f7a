"""``iconctl`` entry point: global flags, settings, subcommand wiring."""

from __future__ import annotations

from pathlib import Path

import click

from iconctl import __version__
from iconctl.commands import register_commands
from iconctl.commands._base import IconGroup
from iconctl.commands._context import AppContext
from iconctl.config.settings import IconSettings

EXAMPLES = """\
  iconctl layers
  iconctl --json find feather/home
  iconctl --root ./site libraries"""


@click.group(cls=IconGroup, invoke_without_command=True, examples=EXAMPLES)
@click.version_option(__version__, prog_name="iconctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print bare values only (paths, names).")
@click.option("-v", "--verbose", is_flag=True, help="Show error detail and debug logging.")
@click.option("--log-json", is_flag=True, help="Emit stderr logs as JSON lines.")
@click.option(
    "-c", "--config", "config_path", default=None, help="Read this iconctl.toml instead of searching."
)
@click.option(
    "--root",
    "project_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Base for relative icon roots (default: directory of iconctl.toml, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    project_root: Path | None,
    **flags: bool,
) -> None:
    """Resolve icon references against layered SVG roots."""
    ctx.obj = AppContext(
        IconSettings.from_cli(config_path=config_path, project_root=project_root, **flags)
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
