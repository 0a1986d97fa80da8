"""Commands: data file path, export, and import."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ttrack.commands._base import TtCommand
from ttrack.config.discovery import expand_path

if TYPE_CHECKING:
    from ttrack.commands._context import AppContext


@click.command(cls=TtCommand, examples="  tt path")
@click.pass_obj
def path(app: AppContext) -> None:
    """Show the path to the data file."""
    from ttrack.services.data import DataService

    app.emit(app.service(DataService).path())


@click.command(
    cls=TtCommand,
    examples="""\
  tt export backup.json
  tt export --pretty ~/backup.json
  tt export --readable timesheet.txt""",
)
@click.argument("target", metavar="PATH")
@click.option(
    "-r",
    "--readable",
    is_flag=True,
    help="Export in a human readable format. It is for reading only and cannot be imported.",
)
@click.option("-p", "--pretty", is_flag=True, help="Pretty print JSON.")
@click.pass_obj
def export(app: AppContext, target: str, readable: bool, pretty: bool) -> None:
    """Export data to a file."""
    from ttrack.services.data import DataService

    svc = app.service(DataService)
    app.emit(svc.export(expand_path(target), readable=readable, pretty=pretty))


@click.command(
    name="import",
    cls=TtCommand,
    examples="""\
  tt import backup.json""",
)
@click.argument("source", metavar="PATH")
@click.pass_obj
def import_cmd(app: AppContext, source: str) -> None:
    """Import data from a JSON export, replacing the current entries."""
    from ttrack.services.data import DataService

    app.emit(app.service(DataService).import_(expand_path(source)))
