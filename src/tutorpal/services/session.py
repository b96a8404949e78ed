"""Front-end control commands: help and exit. Neither touches the records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tutorpal.services.base import Command

if TYPE_CHECKING:
    from tutorpal.domain.model import Model
    from tutorpal.services.result import CommandResult


@dataclass(frozen=True)
class HelpCommand(Command):
    """Shows usage for one command word, or a summary of all of them."""

    command_word: ClassVar[str] = "help"
    usage: ClassVar[str] = "help: Shows program usage instructions\nParameters: [COMMAND_WORD]"
    example: ClassVar[str] = "help mark"
    mutates: ClassVar[bool] = False

    topic: str | None = None

    def apply(self, model: Model) -> CommandResult:
        from tutorpal.services.registry import describe, summary

        text = describe(self.topic) if self.topic else summary()
        return self._result(text, show_help=True)


@dataclass(frozen=True)
class ExitCommand(Command):
    command_word: ClassVar[str] = "exit"
    usage: ClassVar[str] = "exit: Exits the program\nParameters: -"
    example: ClassVar[str] = "exit"
    mutates: ClassVar[bool] = False

    MESSAGE_EXIT: ClassVar[str] = "Exiting TutorPal as requested ..."

    def apply(self, model: Model) -> CommandResult:
        return self._result(self.MESSAGE_EXIT, exit=True)
