"""AddressBook — the aggregate of all person records.

INVARIANT: No two persons in an address book are the same person
(see :meth:`Person.is_same_person`).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from tutorpal.domain.errors import DuplicatePersonError, PersonNotFoundError
from tutorpal.domain.person import Person


class AddressBook:
    """Ordered, duplicate-free collection of persons."""

    def __init__(self, persons: Iterable[Person] = ()) -> None:
        self._persons: list[Person] = []
        for person in persons:
            self.add(person)

    @property
    def persons(self) -> tuple[Person, ...]:
        return tuple(self._persons)

    def __len__(self) -> int:
        return len(self._persons)

    def __iter__(self) -> Iterator[Person]:
        return iter(tuple(self._persons))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressBook):
            return NotImplemented
        return self._persons == other._persons

    def __repr__(self) -> str:
        return f"AddressBook({len(self._persons)} persons)"

    def copy(self) -> AddressBook:
        """Independent book holding the same (immutable) persons."""
        clone = AddressBook()
        clone._persons = list(self._persons)
        return clone

    def has_person(self, person: Person) -> bool:
        return any(existing.is_same_person(person) for existing in self._persons)

    def add(self, person: Person) -> None:
        if self.has_person(person):
            raise DuplicatePersonError(f"{person.name} already exists in the address book.")
        self._persons.append(person)

    def remove(self, person: Person) -> None:
        try:
            self._persons.remove(person)
        except ValueError as exc:
            raise PersonNotFoundError(person.name) from exc

    def replace(self, target: Person, edited: Person) -> None:
        """Swap *target* for *edited* in place, keeping its position."""
        try:
            position = self._persons.index(target)
        except ValueError as exc:
            raise PersonNotFoundError(target.name) from exc
        if not target.is_same_person(edited) and self.has_person(edited):
            raise DuplicatePersonError(f"{edited.name} already exists in the address book.")
        self._persons[position] = edited
