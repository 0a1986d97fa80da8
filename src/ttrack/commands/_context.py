"""AppContext: the object every subcommand receives via ``@click.pass_obj``.

It holds the settings for the run, opens the event store on first use, builds
services, and turns a ServiceResult into output and an exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ttrack.config.logging import configure_logging
from ttrack.output.formatters import OutputSettings, format_result
from ttrack.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from ttrack.config.settings import TtSettings
    from ttrack.infrastructure.store import EventStore
    from ttrack.services.base import BaseService
    from ttrack.services.result import ServiceResult

EXIT_FAILURE = 1


class AppContext:
    """Per-invocation state shared by the root group and its commands.

    The store is not opened until a command asks for it, so ``--help``,
    ``--version`` and ``--examples`` never read the data file.
    """

    def __init__(self, settings: TtSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._store: EventStore | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def store(self) -> EventStore:
        if self._store is None:
            from ttrack.infrastructure.store import EventStore

            self._store = EventStore.from_settings(self.settings)
        return self._store

    def service[S: BaseService](self, cls: type[S]) -> S:
        """Construct *cls* over this run's store and settings."""
        return cls(self.store, self.settings)

    def emit(self, result: ServiceResult, *, exit_code: int = 0) -> None:
        """Print *result* and end with the matching exit status.

        A failed result is written to stderr and exits with 1. Otherwise the
        rendered text goes to stdout and each warning to stderr (in JSON mode
        the warnings are part of the payload). A non-zero *exit_code* is
        raised after a successful result has been printed.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(EXIT_FAILURE)

        if text:
            click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if exit_code:
            raise SystemExit(exit_code)
