"""Root CLI group for tt with global flags and command registration."""

from __future__ import annotations

import click

from ttrack import __version__
from ttrack.commands import register_commands
from ttrack.commands._base import TtGroup
from ttrack.commands._context import AppContext
from ttrack.config.settings import TtSettings


@click.group(
    cls=TtGroup,
    invoke_without_command=True,
    examples="""\
  tt                      # today's work time
  tt start "code review"
  tt stop
  tt show week --remaining
  tt --json status
  tt -d ~/work.json list all""",
)
@click.version_option(version=__version__, prog_name="tt")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-d",
    "--data-file",
    default=None,
    help="Which data file to use. [default: ~/timetracking.json]",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_file: str | None,
) -> None:
    """tt: personal time tracking. Without a command, shows today's work time."""
    settings = TtSettings.from_cli(
        config_path=config_path,
        # An absent flag is False; pass None so env vars and TOML can still set it.
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        data_file=data_file,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from ttrack.commands.report import show

        ctx.invoke(show)


register_commands(cli)
