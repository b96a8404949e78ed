"""The closed set of command variants, keyed by command word.

INVARIANT: Command words are unique. The parser and the help command both
resolve words through this table, so adding a variant means adding it here.
"""

from __future__ import annotations

from tutorpal.domain.errors import InvalidArgumentError
from tutorpal.services.attendance import MarkCommand, UnmarkCommand
from tutorpal.services.base import Command
from tutorpal.services.clear import ClearCommand
from tutorpal.services.payment import DelpayCommand, PayCommand, UnpayCommand
from tutorpal.services.people import (
    AddCommand,
    DeleteCommand,
    DisplayCommand,
    EditCommand,
    FindCommand,
    ListCommand,
)
from tutorpal.services.schedule import ScheduleCommand
from tutorpal.services.session import ExitCommand, HelpCommand

COMMANDS: tuple[type[Command], ...] = (
    AddCommand,
    EditCommand,
    DeleteCommand,
    DisplayCommand,
    ListCommand,
    FindCommand,
    ClearCommand,
    MarkCommand,
    UnmarkCommand,
    PayCommand,
    UnpayCommand,
    DelpayCommand,
    ScheduleCommand,
    HelpCommand,
    ExitCommand,
)

COMMAND_WORDS: dict[str, type[Command]] = {cls.command_word: cls for cls in COMMANDS}

MESSAGE_UNKNOWN_COMMAND = "Unknown command: {word!r}. Type 'help' to see all commands."


def lookup(word: str) -> type[Command]:
    """Resolve *word* (case-insensitive) to its command variant."""
    try:
        return COMMAND_WORDS[word.strip().lower()]
    except KeyError:
        raise InvalidArgumentError(MESSAGE_UNKNOWN_COMMAND.format(word=word)) from None


def describe(word: str) -> str:
    """Full usage text plus an example for one command word."""
    cls = lookup(word)
    return f"{cls.usage}\nExample: {cls.example}"


def summary() -> str:
    """One line per command: its word and an example invocation."""
    width = max(len(cls.command_word) for cls in COMMANDS)
    return "\n".join(f"{cls.command_word:<{width}}  {cls.example}" for cls in COMMANDS)
