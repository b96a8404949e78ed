"""Subcommand modules for tutorpal.

Provides register_commands() which uses deferred imports to keep
``tutorpal --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from tutorpal.commands.people import add, clear, delete, display, edit, find, list_cmd
    from tutorpal.commands.records import delpay, mark, pay, schedule, unmark, unpay
    from tutorpal.commands.shell import shell

    for command in (
        add, edit, delete, display, list_cmd, find, clear,
        mark, unmark, pay, unpay, delpay, schedule, shell,
    ):
        cli.add_command(command)
