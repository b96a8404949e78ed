"""Command: shell (interactive session driven by the text parser)."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

import click

from tutorpal.commands._base import TutorCommand
from tutorpal.commands._context import HANDLED_ERRORS

if TYPE_CHECKING:
    from tutorpal.commands._context import AppContext

WELCOME = "Welcome to TutorPal! Type 'help' to see all commands, 'exit' to quit."
PROMPT = "tutorpal> "


@click.command(
    cls=TutorCommand,
    epilog=None,
    examples="""\
  tutorpal shell
  tutorpal> add n/John Doe p/98765432 r/student j/15-01-2025 c/Math
  tutorpal> mark 1 w/W04-2025
  tutorpal> exit""",
)
@click.pass_obj
def shell(app: AppContext) -> None:
    """Start an interactive session. Failures are reported and the session continues."""
    stdin = click.get_text_stream("stdin")
    click.echo(WELCOME)
    while True:
        click.echo(PROMPT, nl=False)
        try:
            line = stdin.readline()
        except KeyboardInterrupt:
            click.echo()
            break
        if not line:
            break
        if not line.strip():
            continue
        word = line.split()[0].lower()
        try:
            result = app.dispatch(partial(app.parser.parse, line))
        except HANDLED_ERRORS as exc:
            app.report(word, exc)
            continue
        app.emit(result)
        if result.exit:
            break
