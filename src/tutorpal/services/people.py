"""Person lifecycle commands: add, edit, delete, display, list, find."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from typing import TYPE_CHECKING, Any, ClassVar

from tutorpal.domain.errors import InvalidArgumentError
from tutorpal.domain.model import show_all
from tutorpal.domain.person import Person, Role
from tutorpal.services.base import Command, CommandError, Index, person_at

if TYPE_CHECKING:
    from tutorpal.domain.model import Model
    from tutorpal.services.result import CommandResult

logger = logging.getLogger(__name__)

PAYMENT_STATUSES = ("paid", "unpaid", "overdue")


def person_summary(person: Person, position: int, today: date) -> dict[str, Any]:
    """Flatten a person into the payload shape the renderers consume."""
    return {
        "index": position,
        "name": person.name,
        "phone": person.phone,
        "email": person.email,
        "role": str(person.role),
        "classes": list(person.classes),
        "joined": person.joined.isoformat(),
        "payment": person.payment_status(today),
        "attended": sorted(str(w) for w in person.attendance),
        "lessons": [str(lesson) for lesson in person.lessons],
    }


def person_detail(person: Person, position: int, today: date) -> dict[str, Any]:
    """Summary plus the full payment records, for ``display``."""
    return {
        **person_summary(person, position, today),
        "paid_months": [str(m) for m in sorted(person.paid_months)],
        "unpaid_months": [str(m) for m in sorted(person.unpaid_months)],
    }


def _listing(model: Model) -> dict[str, Any]:
    today = model.today()
    shown = model.filtered_persons()
    return {
        "persons": [person_summary(p, i, today) for i, p in enumerate(shown, start=1)],
        "count": len(shown),
    }


@dataclass(frozen=True)
class AddCommand(Command):
    """Adds a person. The join date must not lie in the future."""

    command_word: ClassVar[str] = "add"
    usage: ClassVar[str] = (
        "add: Adds a person to TutorPal\n"
        "Parameters: n/NAME p/PHONE r/ROLE j/JOIN_DATE [e/EMAIL] [c/CLASS]..."
    )
    example: ClassVar[str] = "add n/John Doe p/98765432 r/student j/15-01-2025 c/Math"

    MESSAGE_SUCCESS: ClassVar[str] = "New person added: {name}"
    MESSAGE_DUPLICATE: ClassVar[str] = "This person already exists in the address book"

    person: Person

    def apply(self, model: Model) -> CommandResult:
        self.person.ensure_joined_by(model.today())
        if model.has_person(self.person):
            raise CommandError(self.MESSAGE_DUPLICATE)
        model.add_person(self.person)
        logger.info("Added %s (%s)", self.person.name, self.person.role)
        return self._result(self.MESSAGE_SUCCESS.format(name=self.person.name))


@dataclass(frozen=True)
class EditCommand(Command):
    """Overwrites selected fields of the displayed person at ``index``.

    Fields left as ``None`` keep their current value. The role cannot be
    changed. A new join date must stay inside [2000-01-01, today] and must
    not be later than any attendance or payment record already kept.
    """

    command_word: ClassVar[str] = "edit"
    usage: ClassVar[str] = (
        "edit: Edits the details of the person identified by the index number in the "
        "displayed list. Existing values will be overwritten by the input values.\n"
        "Parameters: INDEX (must be a positive integer) "
        "[n/NAME] [p/PHONE] [e/EMAIL] [j/JOIN_DATE] [c/CLASS]...\n"
        "Tutors may repeat c/; students must have exactly one class."
    )
    example: ClassVar[str] = "edit 1 p/91234567 e/johndoe@example.com"

    MESSAGE_SUCCESS: ClassVar[str] = "Edited Person: {name}"
    MESSAGE_NOT_EDITED: ClassVar[str] = "At least one field to edit must be provided."
    MESSAGE_DUPLICATE: ClassVar[str] = "This person already exists in the address book"
    MESSAGE_NO_CLASS: ClassVar[str] = "At least one class must be specified."
    MESSAGE_STUDENT_CLASSES: ClassVar[str] = (
        "Students can only have one class. Please specify only one class."
    )

    index: Index
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    joined: date | None = None
    classes: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if not self._changes() and self.joined is None:
            raise InvalidArgumentError(self.MESSAGE_NOT_EDITED)

    def _changes(self) -> dict[str, Any]:
        fields = {"name": self.name, "phone": self.phone, "email": self.email, "classes": self.classes}
        return {key: value for key, value in fields.items() if value is not None}

    def apply(self, model: Model) -> CommandResult:
        target = person_at(model, self.index)
        if self.classes is not None:
            if not self.classes:
                raise CommandError(self.MESSAGE_NO_CLASS)
            if target.role == Role.STUDENT and len(self.classes) > 1:
                raise CommandError(self.MESSAGE_STUDENT_CLASSES)

        edited = replace(target, **self._changes())
        if self.joined is not None and self.joined != target.joined:
            edited = edited.with_join_date(self.joined, model.today())
        if not target.is_same_person(edited) and model.has_person(edited):
            raise CommandError(self.MESSAGE_DUPLICATE)

        model.set_person(target, edited)
        model.update_filter(show_all)
        logger.info("Edited %s", edited.name)
        return self._result(self.MESSAGE_SUCCESS.format(name=edited.name))


@dataclass(frozen=True)
class DeleteCommand(Command):
    command_word: ClassVar[str] = "delete"
    usage: ClassVar[str] = (
        "delete: Deletes the person identified by the index number in the displayed list\n"
        "Parameters: INDEX (must be a positive integer)"
    )
    example: ClassVar[str] = "delete 1"

    MESSAGE_SUCCESS: ClassVar[str] = "Deleted Person: {name}"

    index: Index

    def apply(self, model: Model) -> CommandResult:
        target = person_at(model, self.index)
        model.delete_person(target)
        return self._result(self.MESSAGE_SUCCESS.format(name=target.name))


@dataclass(frozen=True)
class DisplayCommand(Command):
    """Shows every detail of one displayed person, payment records included."""

    command_word: ClassVar[str] = "display"
    usage: ClassVar[str] = (
        "display: Displays detailed information of the person identified by the index "
        "number in the displayed list\n"
        "Parameters: INDEX (must be a positive integer)"
    )
    example: ClassVar[str] = "display 1"
    mutates: ClassVar[bool] = False

    MESSAGE_SUCCESS: ClassVar[str] = "Displayed Person: {name}"

    index: Index

    def apply(self, model: Model) -> CommandResult:
        person = person_at(model, self.index)
        detail = person_detail(person, self.index.one_based, model.today())
        return self._result(self.MESSAGE_SUCCESS.format(name=person.name), data={"person": detail})


@dataclass(frozen=True)
class ListCommand(Command):
    """Shows all persons, optionally narrowed down.

    ``role`` combines with any other filter. Of ``class_name``, ``tutor`` and
    ``payment`` at most one may be given. ``tutor`` keeps the students who
    share a class with any tutor whose name contains that text.
    """

    command_word: ClassVar[str] = "list"
    usage: ClassVar[str] = (
        "list: Lists persons, optionally filtered by role plus one of class, tutor "
        "or payment status\n"
        "Parameters: [r/ROLE] [c/CLASS | tu/TUTOR_NAME | ps/STATUS[,STATUS]...]"
    )
    example: ClassVar[str] = "list r/student c/Math"
    mutates: ClassVar[bool] = False

    MESSAGE_CONFLICTING: ClassVar[str] = (
        "Only one of the class, tutor and payment status filters can be used at a time."
    )
    MESSAGE_BAD_STATUS: ClassVar[str] = (
        "Payment status should be one of: " + ", ".join(PAYMENT_STATUSES)
    )

    role: Role | None = None
    class_name: str | None = None
    tutor: str | None = None
    payment: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        chosen = [f for f in (self.class_name, self.tutor, self.payment) if f]
        if len(chosen) > 1:
            raise InvalidArgumentError(self.MESSAGE_CONFLICTING)
        if any(status.casefold() not in PAYMENT_STATUSES for status in self.payment):
            raise InvalidArgumentError(self.MESSAGE_BAD_STATUS)

    def apply(self, model: Model) -> CommandResult:
        if self.role is None and not (self.class_name or self.tutor or self.payment):
            model.update_filter(show_all)
            return self._result("Listed all persons", data=_listing(model))

        keep = self._class_filter(model)
        model.update_filter(lambda person: self._role_ok(person) and keep(person))
        payload = _listing(model)
        return self._result(self._message(payload["count"]), data=payload)

    def _role_ok(self, person: Person) -> bool:
        return self.role is None or person.role == self.role

    def _class_filter(self, model: Model) -> Callable[[Person], bool]:
        if self.class_name:
            wanted = {self.class_name.casefold()}
            return lambda person: any(c.casefold() in wanted for c in person.classes)
        if self.tutor:
            needle = self.tutor.casefold()
            taught = {
                c.casefold()
                for p in model.address_book
                if p.role == Role.TUTOR and needle in p.name.casefold()
                for c in p.classes
            }
            return lambda person: person.role == Role.STUDENT and any(
                c.casefold() in taught for c in person.classes
            )
        if self.payment:
            statuses = {s.casefold() for s in self.payment}
            today = model.today()
            return lambda person: person.payment_status(today) in statuses
        return show_all

    def _message(self, count: int) -> str:
        if self.tutor:
            return f"Listed {count} students taught by {self.tutor}"
        if self.payment:
            return f"Listed {count} persons with payment status {', '.join(self.payment)}"
        return f"Listed {count} persons"


@dataclass(frozen=True)
class FindCommand(Command):
    """Shows persons whose name contains any keyword as a whole word."""

    command_word: ClassVar[str] = "find"
    usage: ClassVar[str] = (
        "find: Finds persons whose names contain any of the given keywords "
        "(case-insensitive)\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]..."
    )
    example: ClassVar[str] = "find alice bob"
    mutates: ClassVar[bool] = False

    keywords: tuple[str, ...]

    def apply(self, model: Model) -> CommandResult:
        wanted = {k.casefold() for k in self.keywords}

        def matches(person: Person) -> bool:
            return any(word.casefold() in wanted for word in person.name.split())

        model.update_filter(matches)
        payload = _listing(model)
        return self._result(f"{payload['count']} persons listed!", data=payload)
