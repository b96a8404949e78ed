"""Click base classes shared by every tutorpal subcommand.

``TutorCommand`` and ``TutorGroup`` take an ``examples`` string. Passing
``--examples`` prints it and exits, so ``--help`` stays short. Subcommands
also inherit an epilog pointing at the interactive shell syntax.
"""

from __future__ import annotations

from typing import Any

import click

SHELL_HINT = "Inside 'tutorpal shell' the same command takes prefixed arguments; see 'help WORD'."


class _ExamplesMixin:
    """Adds the eager ``--examples`` flag when examples were supplied."""

    examples: str | None
    params: list[click.Parameter]

    def _install_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_examples,
                help="Show usage examples and exit.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class TutorCommand(_ExamplesMixin, click.Command):
    """A tutorpal subcommand: ``--examples`` support plus the shell hint epilog."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("epilog", SHELL_HINT)
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class TutorGroup(_ExamplesMixin, click.Group):
    """Root group; plain ``@group.command`` children become :class:`TutorCommand`."""

    command_class = TutorCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
