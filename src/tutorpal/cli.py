"""Root CLI group for tutorpal with global flags and command registration."""

from __future__ import annotations

import click

from tutorpal import __version__
from tutorpal.commands import register_commands
from tutorpal.commands._base import TutorGroup
from tutorpal.commands._context import AppContext
from tutorpal.config.settings import TutorPalSettings

ROOT_EXAMPLES = """\
  tutorpal add -n "John Doe" -p 98765432 -r student -j 15-01-2025 -c Math
  tutorpal mark 1 W04-2025
  tutorpal --json list --role student
  tutorpal --data-file ~/tutoring.json pay 1 01-2025
  tutorpal shell"""


@click.group(
    cls=TutorGroup,
    invoke_without_command=True,
    examples=ROOT_EXAMPLES,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="tutorpal")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Only print the result message.")
@click.option("-v", "--verbose", is_flag=True, help="Wide tables and debug logging.")
@click.option("--log-json", is_flag=True, help="Log as JSON lines on stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Use this tutorpal.toml.")
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Address book JSON file (overrides [storage] path).",
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
    """tutorpal — tutor and student records from the terminal."""
    ctx.obj = AppContext(
        TutorPalSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            data_file=data_file,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
