"""Subcommand modules for tt.

Provides register_commands() which uses deferred imports to keep
``tt --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from ttrack.commands.data import export, import_cmd, path
    from ttrack.commands.report import list_cmd, show, status
    from ttrack.commands.tracking import continue_cmd, start, stop

    cli.add_command(start)
    cli.add_command(stop)
    cli.add_command(continue_cmd)

    cli.add_command(list_cmd)
    cli.add_command(show)
    cli.add_command(status)

    cli.add_command(path)
    cli.add_command(export)
    cli.add_command(import_cmd)
