"""Command: poll icon roots and invalidate caches on change."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import click

from iconctl.commands._base import IconCommand

if TYPE_CHECKING:
    from iconctl.commands._context import AppContext


@click.command(
    cls=IconCommand,
    examples="""\
  iconctl watch
  iconctl watch --interval 5""",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds between polls (default: [watch] interval).",
)
@click.pass_obj
def watch(app: AppContext, interval: float | None) -> None:
    """Watch icon files and rebuild the library index when they change."""
    from iconctl.infrastructure.watch import PollingWatcher

    service = app.service
    if app.settings.icons.preload:
        app.emit(service.preload())

    def _report() -> None:
        click.echo("Icon files changed, rebuilding library index...", err=True)
        result = service.preload()
        if not result.ok and result.error is not None:
            click.echo(f"WARNING: {result.error.message}", err=True)

    watcher = PollingWatcher(
        app.engine,
        interval=interval or app.settings.watch.interval,
        on_change=_report,
    )
    stop = threading.Event()
    click.echo("Watching for icon changes (Ctrl+C to stop)...", err=True)
    try:
        watcher.run(stop)
    except KeyboardInterrupt:
        stop.set()
        click.echo("Stopping watcher.", err=True)
