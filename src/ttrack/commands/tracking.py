"""Commands: start, stop, and continue time tracking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ttrack.commands._base import TtCommand

if TYPE_CHECKING:
    from ttrack.commands._context import AppContext

_AT_HELP = (
    'The time at which the event happened: "HH[:MM[:SS]]" or '
    '"YYYY-MM-DD HH[:MM[:SS]]". [default: now]'
)


@click.command(
    cls=TtCommand,
    examples="""\
  tt start
  tt start "code review"
  tt start "late entry" --at "2024-03-01 14:00"
  tt start "standup" --at 09:30""",
)
@click.argument("description", required=False)
@click.option("-a", "--at", default=None, help=_AT_HELP)
@click.pass_obj
def start(app: AppContext, description: str | None, at: str | None) -> None:
    """Start time tracking."""
    from ttrack.services.tracking import TrackingService

    app.emit(app.service(TrackingService).start(description, at=at))


@click.command(
    cls=TtCommand,
    examples="""\
  tt stop
  tt stop "done for today"
  tt stop --at 17:45""",
)
@click.argument("description", required=False)
@click.option("-a", "--at", default=None, help=_AT_HELP)
@click.pass_obj
def stop(app: AppContext, description: str | None, at: str | None) -> None:
    """Stop time tracking."""
    from ttrack.services.tracking import TrackingService

    app.emit(app.service(TrackingService).stop(description, at=at))


@click.command(
    name="continue",
    cls=TtCommand,
    examples="""\
  tt continue""",
)
@click.pass_obj
def continue_cmd(app: AppContext) -> None:
    """Continue time tracking with the last description."""
    from ttrack.services.tracking import TrackingService

    app.emit(app.service(TrackingService).continue_())
