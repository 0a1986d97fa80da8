"""Commands: list, show, and status queries over the event log."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from ttrack.commands._base import TtCommand
from ttrack.domain.filtering import FilterSpec

if TYPE_CHECKING:
    from ttrack.commands._context import AppContext

EXIT_INACTIVE = 1

_BOUNDARY_FORMATS = '"YYYY-MM-DD HH:MM:SS", "YYYY-MM-DD" or "HH:MM:SS"'


def _filter_options[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Apply the shared FILTER argument and --from/--to options."""
    func = click.option(
        "-t",
        "--to",
        "to",
        default=None,
        help=f"Show entries before this point in time [default: end of the start day]. "
        f"Formats: {_BOUNDARY_FORMATS}.",
    )(func)
    func = click.option(
        "-f",
        "--from",
        "from_",
        default=None,
        help=f"Show entries after this point in time [default: today 00:00:00]. "
        f"Formats: {_BOUNDARY_FORMATS}.",
    )(func)
    func = click.argument("filter_token", metavar="[FILTER]", required=False)(func)
    return func


@click.command(
    name="list",
    cls=TtCommand,
    examples="""\
  tt list
  tt list week
  tt list all
  tt list meeting --from 2024-03-01 --to 2024-03-31
  tt list --from 08:00""",
)
@_filter_options
@click.pass_obj
def list_cmd(app: AppContext, filter_token: str | None, from_: str | None, to: str | None) -> None:
    """List entries. FILTER is "week", "all" or part of a description."""
    from ttrack.services.report import ReportService

    spec = FilterSpec(from_=from_, to=to, filter=filter_token)
    app.emit(app.service(ReportService).list_events(spec))


@click.command(
    cls=TtCommand,
    examples="""\
  tt show
  tt show week
  tt show --remaining
  tt show week --remaining --plain
  tt show -i --format "{h}h {mm}m {ss}s"
  tt show coding --from 2024-03-01 --to 2024-03-31""",
)
@_filter_options
@click.option("-p", "--plain", is_flag=True, help="Show only the time with no additional text.")
@click.option(
    "-r", "--remaining", is_flag=True, help="Show time until the defined time goals are met."
)
@click.option(
    "-i", "--include-seconds", is_flag=True, help="Include seconds in time calculation."
)
@click.option(
    "--format",
    "template",
    default=None,
    help='Time format with {hh} {mm} {ss} (padded) or {h} {m} {s}. [default: "{hh}:{mm}:{ss}"]',
)
@click.pass_obj
def show(
    app: AppContext,
    filter_token: str | None,
    from_: str | None,
    to: str | None,
    plain: bool,
    remaining: bool,
    include_seconds: bool,
    template: str | None,
) -> None:
    """Show work time for a timespan. FILTER is "week", "all" or part of a description."""
    from ttrack.services.report import ReportService

    spec = FilterSpec(from_=from_, to=to, filter=filter_token)
    app.emit(
        app.service(ReportService).show(
            spec,
            include_seconds=include_seconds,
            remaining=remaining,
            plain=plain,
            template=template,
        )
    )


@click.command(
    cls=TtCommand,
    examples="""\
  tt status
  tt -q status && echo tracking""",
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show the latest entry. Exits 0 while tracking is active, 1 otherwise."""
    from ttrack.services.report import ReportService

    result = app.service(ReportService).status()
    app.emit(result, exit_code=0 if result.data.get("active") else EXIT_INACTIVE)
