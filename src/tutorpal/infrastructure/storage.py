"""JSON file storage for the address book.

The on-disk shape is a set of pydantic models holding plain strings, kept
separate from the domain records. Conversion back to the domain re-runs
every domain validation, so a hand-edited file cannot smuggle an invalid
record into the model.

INVARIANT: Saves are atomic (write to a sibling temp file, then replace).
A failed save leaves neither a partial data file nor a stray temp file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from tutorpal.domain.address_book import AddressBook
from tutorpal.domain.errors import InvalidArgumentError
from tutorpal.domain.periods import IsoWeek, Month
from tutorpal.domain.person import EARLIEST_JOIN_DATE, Lesson, Person, Role, Weekday
from tutorpal.domain.ranges import Bounds, Range, ensure_within

logger = logging.getLogger(__name__)

TIME_FORMAT = "%H:%M"

# Stored records may have joined any time from the earliest join date on.
_STORED_JOIN_DATES = Bounds(EARLIEST_JOIN_DATE, date.max)


class StorageError(Exception):
    """The data file could not be read or written."""


class StoredLesson(BaseModel):
    """``{"day": "mon", "start": "09:00", "end": "10:00"}``"""

    model_config = {"frozen": True}

    day: str
    start: str
    end: str

    @classmethod
    def from_domain(cls, lesson: Lesson) -> StoredLesson:
        return cls(
            day=lesson.day.value,
            start=lesson.slot.start.strftime(TIME_FORMAT),
            end=lesson.slot.end.strftime(TIME_FORMAT),
        )

    def to_domain(self) -> Lesson:
        try:
            start = datetime.strptime(self.start, TIME_FORMAT).time()
            end = datetime.strptime(self.end, TIME_FORMAT).time()
        except ValueError as exc:
            raise InvalidArgumentError(f"Invalid lesson time: {exc}") from exc
        return Lesson(day=Weekday.parse(self.day), slot=Range(start, end))


class StoredPerson(BaseModel):
    model_config = {"frozen": True}

    name: str
    phone: str
    role: str
    joined: date
    email: str | None = None
    classes: list[str] = Field(default_factory=list)
    attendance: list[str] = Field(default_factory=list)
    paid_months: list[str] = Field(default_factory=list)
    unpaid_months: list[str] = Field(default_factory=list)
    lessons: list[StoredLesson] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, person: Person) -> StoredPerson:
        return cls(
            name=person.name,
            phone=person.phone,
            role=person.role.value,
            joined=person.joined,
            email=person.email,
            classes=list(person.classes),
            attendance=[str(w) for w in sorted(person.attendance)],
            paid_months=[str(m) for m in sorted(person.paid_months)],
            unpaid_months=[str(m) for m in sorted(person.unpaid_months)],
            lessons=[StoredLesson.from_domain(lesson) for lesson in person.lessons],
        )

    def to_domain(self) -> Person:
        try:
            role = Role(self.role)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown role {self.role!r}") from exc
        ensure_within(self.joined, _STORED_JOIN_DATES, label="Join date")
        return Person(
            name=self.name,
            phone=self.phone,
            role=role,
            joined=self.joined,
            email=self.email,
            classes=tuple(self.classes),
            attendance=frozenset(IsoWeek.parse(w) for w in self.attendance),
            paid_months=frozenset(Month.parse(m) for m in self.paid_months),
            unpaid_months=frozenset(Month.parse(m) for m in self.unpaid_months),
            lessons=tuple(stored.to_domain() for stored in self.lessons),
        )


class StoredAddressBook(BaseModel):
    persons: list[StoredPerson] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, book: AddressBook) -> StoredAddressBook:
        return cls(persons=[StoredPerson.from_domain(p) for p in book])

    def to_domain(self) -> AddressBook:
        return AddressBook(stored.to_domain() for stored in self.persons)


class JsonAddressBookStorage:
    """Reads and writes one address book JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> AddressBook:
        """Load the address book; a missing file yields an empty one.

        Raises:
            StorageError: The file exists but is unreadable or invalid.
        """
        if not self.path.is_file():
            logger.debug("No data file at %s, starting empty", self.path)
            return AddressBook()
        try:
            raw = self.path.read_text(encoding="utf-8")
            book = StoredAddressBook.model_validate_json(raw).to_domain()
        except (OSError, ValidationError, InvalidArgumentError) as exc:
            msg = f"Could not load {self.path}: {exc}"
            raise StorageError(msg) from exc
        logger.debug("Loaded %d persons from %s", len(book), self.path)
        return book

    def save(self, book: AddressBook) -> None:
        payload = StoredAddressBook.from_domain(book).model_dump_json(indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            msg = f"Could not save {self.path}: {exc}"
            raise StorageError(msg) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            msg = f"Could not save {self.path}: {exc}"
            raise StorageError(msg) from exc
        logger.debug("Saved %d persons to %s", len(book), self.path)
