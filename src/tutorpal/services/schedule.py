"""ScheduleCommand — book a weekly lesson slot for a person.

The slot is validated with :func:`validate_range` against the teaching
window passed in at construction (configured in ``[schedule]``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import TYPE_CHECKING, ClassVar

from tutorpal.domain.person import Lesson, Weekday
from tutorpal.domain.ranges import Bounds, validate_range
from tutorpal.services.base import Command, Index, person_at

if TYPE_CHECKING:
    from tutorpal.domain.model import Model
    from tutorpal.services.result import CommandResult

DEFAULT_WINDOW: Bounds[time] = Bounds(time(8, 0), time(22, 0))


@dataclass(frozen=True)
class ScheduleCommand(Command):
    command_word: ClassVar[str] = "schedule"
    usage: ClassVar[str] = (
        "schedule: Books a weekly lesson for the person identified by the index number\n"
        "Parameters: INDEX (must be a positive integer) d/DAY f/HH:MM t/HH:MM"
    )
    example: ClassVar[str] = "schedule 1 d/mon f/09:00 t/10:30"

    MESSAGE_SUCCESS: ClassVar[str] = "Scheduled {lesson} for {name}"

    index: Index
    day: Weekday
    start: time
    end: time
    window: Bounds[time] = DEFAULT_WINDOW

    def apply(self, model: Model) -> CommandResult:
        slot = validate_range(self.start, self.end, self.window)
        person = person_at(model, self.index)
        lesson = Lesson(day=self.day, slot=slot)
        edited = person.add_lesson(lesson)
        model.set_person(person, edited)
        return self._result(self.MESSAGE_SUCCESS.format(lesson=lesson, name=edited.name))
