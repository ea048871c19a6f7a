"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; ``iconctl find --examples`` prints sample
invocations and exits before any config or icon root is touched.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesOption(click.Option):
    """Eager flag that prints the owning command's examples."""

    def __init__(self, examples: str) -> None:
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._show,
            help="Show usage examples.",
        )
        self.examples = examples

    def _show(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class _ExamplesMixin:
    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            self.params.append(_ExamplesOption(examples))  # type: ignore[attr-defined]


class IconCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=`` in its decorator."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class IconGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; subcommands default to :class:`IconCommand`."""

    command_class = IconCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
