"""ClearCommand — discard every record by installing an empty address book."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tutorpal.domain.address_book import AddressBook
from tutorpal.services.base import Command

if TYPE_CHECKING:
    from tutorpal.domain.model import Model
    from tutorpal.services.result import CommandResult


@dataclass(frozen=True)
class ClearCommand(Command):
    """Clears the address book. Idempotent; has no failure path."""

    command_word: ClassVar[str] = "clear"
    usage: ClassVar[str] = "clear: Clears all TutorPal entries\nParameters: -"
    example: ClassVar[str] = "clear"

    MESSAGE_SUCCESS: ClassVar[str] = "Address book has been cleared!"

    def apply(self, model: Model) -> CommandResult:
        model.set_address_book(AddressBook())
        return self._result(self.MESSAGE_SUCCESS)
