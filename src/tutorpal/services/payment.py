"""Payment commands: mark a month as paid or unpaid, or delete its record.

``pay`` and ``delpay`` apply to tutors and students; ``unpay`` only to students.
The month must lie between the join month and the current month.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tutorpal.domain.periods import Month
from tutorpal.domain.person import Role
from tutorpal.services.base import Command, CommandError, Index, person_at

if TYPE_CHECKING:
    from tutorpal.domain.model import Model
    from tutorpal.services.result import CommandResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayCommand(Command):
    command_word: ClassVar[str] = "pay"
    usage: ClassVar[str] = (
        "pay: Marks a month's payment as paid for the person identified by the index number\n"
        "Parameters: INDEX (must be a positive integer) m/MM-YYYY"
    )
    example: ClassVar[str] = "pay 1 m/01-2025"

    MESSAGE_SUCCESS: ClassVar[str] = "Payment for {name} for {month} has been marked as paid."

    index: Index
    month: Month

    def apply(self, model: Model) -> CommandResult:
        person = person_at(model, self.index)
        edited = person.mark_paid(self.month, model.today())
        model.set_person(person, edited)
        logger.info("Marked %s paid for %s", person.name, self.month)
        return self._result(self.MESSAGE_SUCCESS.format(name=edited.name, month=self.month))


@dataclass(frozen=True)
class UnpayCommand(Command):
    command_word: ClassVar[str] = "unpay"
    usage: ClassVar[str] = (
        "unpay: Marks a month's payment as unpaid for the student identified by the index number\n"
        "Parameters: INDEX (must be a positive integer) m/MM-YYYY"
    )
    example: ClassVar[str] = "unpay 1 m/01-2025"

    MESSAGE_SUCCESS: ClassVar[str] = "Payment for {name} for {month} has been marked as unpaid."
    MESSAGE_NOT_STUDENT: ClassVar[str] = (
        "Index belongs to a tutor. Please provide an index tied to a student instead"
    )

    index: Index
    month: Month

    def apply(self, model: Model) -> CommandResult:
        person = person_at(model, self.index)
        if person.role == Role.TUTOR:
            raise CommandError(self.MESSAGE_NOT_STUDENT)
        edited = person.mark_unpaid(self.month, model.today())
        model.set_person(person, edited)
        return self._result(self.MESSAGE_SUCCESS.format(name=edited.name, month=self.month))


@dataclass(frozen=True)
class DelpayCommand(Command):
    """Removes a month's payment record, whether it says paid or unpaid."""

    command_word: ClassVar[str] = "delpay"
    usage: ClassVar[str] = (
        "delpay: Deletes the payment record for a specific month for the person identified "
        "by the index number\n"
        "Parameters: INDEX (must be a positive integer) m/MM-YYYY"
    )
    example: ClassVar[str] = "delpay 1 m/01-2025"

    MESSAGE_SUCCESS: ClassVar[str] = "Deleted payment record for {name} for {month}."

    index: Index
    month: Month

    def apply(self, model: Model) -> CommandResult:
        person = person_at(model, self.index)
        edited = person.delete_payment(self.month, model.today())
        model.set_person(person, edited)
        logger.info("Deleted payment record of %s for %s", person.name, self.month)
        return self._result(self.MESSAGE_SUCCESS.format(name=edited.name, month=self.month))
