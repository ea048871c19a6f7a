"""Per-invocation state handed to every subcommand as ``ctx.obj``.

Nothing icon-related is built until a command asks for :attr:`engine`,
which keeps ``--help``, ``--version`` and ``--examples`` free of plugin
imports and filesystem access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from iconctl.config.logging import configure_logging
from iconctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from iconctl.config.settings import IconSettings
    from iconctl.infrastructure.engine import IconEngine
    from iconctl.plugins.manager import PluginManager
    from iconctl.services.icons import IconService
    from iconctl.services.result import ServiceResult


class AppContext:
    def __init__(self, settings: IconSettings) -> None:
        self.settings = settings
        self._engine: IconEngine | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def engine(self) -> IconEngine:
        if self._engine is None:
            from iconctl.infrastructure.engine import IconEngine

            try:
                self._engine = IconEngine.from_settings(
                    self.settings, plugin_manager=self._load_plugins()
                )
            except ValueError as exc:
                # bad layer declaration in iconctl.toml
                raise click.ClickException(str(exc)) from exc
        return self._engine

    @property
    def service(self) -> IconService:
        from iconctl.services.icons import IconService

        return IconService(self.engine, render=self.settings.render)

    @property
    def output_settings(self) -> OutputSettings:
        s = self.settings
        return OutputSettings(json_output=s.json_output, quiet=s.quiet, verbose=s.verbose)

    def _load_plugins(self) -> PluginManager | None:
        plugins = self.settings.plugins
        if not plugins.enabled:
            return None

        from iconctl.infrastructure.engine import expand_root
        from iconctl.plugins.manager import PluginManager

        pm = PluginManager()
        pm.discover_and_load(
            local_dir=expand_root(plugins.local_dir, project_root=self.settings.project_root)
        )
        return pm

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits 1.

        Warnings on a successful result are echoed to stderr in text
        modes. In JSON mode they are already part of the payload.
        """
        out = self.output_settings
        text = format_result(result, settings=out)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if out.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
