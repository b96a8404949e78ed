"""Attendance commands: mark and unmark a student's ISO week.

The week must lie between the student's join week and the current week
(inclusive); anything else raises ``InvalidRangeError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tutorpal.domain.periods import IsoWeek
from tutorpal.domain.person import Person, Role
from tutorpal.services.base import Command, CommandError, Index, person_at

if TYPE_CHECKING:
    from tutorpal.domain.model import Model
    from tutorpal.services.result import CommandResult

MESSAGE_NOT_STUDENT = "Attendance can only be tracked for students; {name} is a tutor."


def _student_at(model: Model, index: Index) -> Person:
    person = person_at(model, index)
    if person.role != Role.STUDENT:
        raise CommandError(MESSAGE_NOT_STUDENT.format(name=person.name))
    return person


@dataclass(frozen=True)
class MarkCommand(Command):
    command_word: ClassVar[str] = "mark"
    usage: ClassVar[str] = (
        "mark: Marks the attendance of the student identified by the index number\n"
        "Parameters: INDEX (must be a positive integer) w/W[XX]-YYYY"
    )
    example: ClassVar[str] = "mark 1 w/W04-2025"

    MESSAGE_SUCCESS: ClassVar[str] = "Marked attendance for {name} in {week}"

    index: Index
    week: IsoWeek

    def apply(self, model: Model) -> CommandResult:
        student = _student_at(model, self.index)
        edited = student.mark_attendance(self.week, model.today())
        model.set_person(student, edited)
        return self._result(self.MESSAGE_SUCCESS.format(name=edited.name, week=self.week))


@dataclass(frozen=True)
class UnmarkCommand(Command):
    command_word: ClassVar[str] = "unmark"
    usage: ClassVar[str] = (
        "unmark: Unmarks the attendance of the student identified by the index number\n"
        "Parameters: INDEX (must be a positive integer) w/W[XX]-YYYY"
    )
    example: ClassVar[str] = "unmark 1 w/W04-2025"

    MESSAGE_SUCCESS: ClassVar[str] = "Unmarked attendance for {name} in {week}"

    index: Index
    week: IsoWeek

    def apply(self, model: Model) -> CommandResult:
        student = _student_at(model, self.index)
        edited = student.unmark_attendance(self.week, model.today())
        model.set_person(student, edited)
        return self._result(self.MESSAGE_SUCCESS.format(name=edited.name, week=self.week))
