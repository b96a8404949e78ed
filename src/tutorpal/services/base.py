"""Command — abstract foundation for all user-invocable operations.

Each concrete variant carries its per-invocation arguments as dataclass
fields and a class-level ``command_word`` the parser routes on.
Variants are constructed fresh for every request, executed once, and
discarded.

Contract of :meth:`Command.execute`:
- ``model`` must not be None (programming error, raises ``TypeError``).
- Mutation is all-or-nothing: validation happens first, the write last.
- No I/O. The only side effect is the model mutation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from tutorpal.domain.errors import InvalidArgumentError
from tutorpal.services.result import CommandResult

if TYPE_CHECKING:
    from tutorpal.domain.model import Model
    from tutorpal.domain.person import Person

logger = logging.getLogger(__name__)

MESSAGE_INVALID_INDEX = "The person index provided is invalid"


class CommandError(Exception):
    """A command's preconditions do not hold against the current model."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class Index:
    """A 1-based position in the displayed person list."""

    one_based: int

    def __post_init__(self) -> None:
        if self.one_based < 1:
            raise InvalidArgumentError("Index must be a positive integer.")

    @property
    def zero_based(self) -> int:
        return self.one_based - 1

    @classmethod
    def parse(cls, text: str) -> Index:
        stripped = text.strip()
        if not stripped.isdigit():
            raise InvalidArgumentError("Index must be a positive integer.")
        return cls(int(stripped))

    def __str__(self) -> str:
        return str(self.one_based)


class Command(ABC):
    """Abstract base for every command variant.

    Subclasses set ``command_word``, ``usage`` and ``example`` and implement
    :meth:`apply`. ``mutates`` tells the front-end whether a successful run
    needs to be persisted.

    Usage::

        @dataclass(frozen=True)
        class DeleteCommand(Command):
            command_word: ClassVar[str] = "delete"
            index: Index

            def apply(self, model: Model) -> CommandResult:
                ...
    """

    command_word: ClassVar[str]
    usage: ClassVar[str] = ""
    example: ClassVar[str] = ""
    mutates: ClassVar[bool] = True

    def execute(self, model: Model) -> CommandResult:
        """Run this command against *model* and return its result."""
        if model is None:
            msg = f"{type(self).__name__}.execute() requires a model"
            raise TypeError(msg)
        logger.debug("Executing %r", self)
        result = self.apply(model)
        logger.debug("Executed %s: %s", self.command_word, result.message)
        return result

    @abstractmethod
    def apply(self, model: Model) -> CommandResult:
        """Variant-specific validation and mutation."""

    def _result(
        self,
        message: str,
        *,
        show_help: bool = False,
        exit: bool = False,
        data: dict[str, Any] | None = None,
    ) -> CommandResult:
        return CommandResult(
            message=message,
            command_word=self.command_word,
            show_help=show_help,
            exit=exit,
            data=data or {},
        )


def person_at(model: Model, index: Index) -> Person:
    """Return the displayed person at *index* or raise :class:`CommandError`."""
    shown = model.filtered_persons()
    if index.zero_based >= len(shown):
        raise CommandError(MESSAGE_INVALID_INDEX)
    return shown[index.zero_based]
