"""Click base classes for tt commands.

Every command and group accepts an ``examples=`` string. It is printed by an
eager ``--examples`` flag so that ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(getattr(ctx.command, "examples", ""))
    ctx.exit(0)


def examples_option() -> click.Option:
    """The ``--examples`` flag; it never reaches the command callback."""
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print_examples,
        help="Show usage examples and exit.",
    )


class _ExamplesMixin:
    """Stores ``examples`` and adds ``--examples`` when there are any."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(examples_option())


class TtCommand(_ExamplesMixin, click.Command):
    """A command with optional usage examples."""


class TtGroup(_ExamplesMixin, click.Group):
    """A group whose subcommands default to :class:`TtCommand`."""

    command_class = TtCommand
