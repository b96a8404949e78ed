"""Model — the single mutable handle the command layer operates on.

The caller owns exactly one ``Model`` and passes it into every
``Command.execute`` call. The model holds the current :class:`AddressBook`,
the filter that defines the displayed list (what 1-based indices refer to),
and the clock used for "today"-relative range checks.

INVARIANT: Replacing the address book is an atomic swap; no command ever
observes a half-old, half-new address book.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from tutorpal.domain.address_book import AddressBook
from tutorpal.domain.person import Person

PersonPredicate = Callable[[Person], bool]


def show_all(_person: Person) -> bool:
    return True


class Model:
    """Caller-owned state: address book, display filter, and clock."""

    def __init__(
        self,
        address_book: AddressBook | None = None,
        *,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._address_book = address_book if address_book is not None else AddressBook()
        self._clock = clock
        self._predicate: PersonPredicate = show_all

    @property
    def address_book(self) -> AddressBook:
        return self._address_book

    def set_address_book(self, address_book: AddressBook) -> None:
        """Install *address_book* wholesale and reset the display filter."""
        self._address_book = address_book
        self._predicate = show_all

    def today(self) -> date:
        return self._clock()

    # --- Person access ---

    def has_person(self, person: Person) -> bool:
        return self._address_book.has_person(person)

    def add_person(self, person: Person) -> None:
        self._address_book.add(person)
        self._predicate = show_all

    def delete_person(self, person: Person) -> None:
        self._address_book.remove(person)

    def set_person(self, target: Person, edited: Person) -> None:
        self._address_book.replace(target, edited)

    # --- Displayed list ---

    def filtered_persons(self) -> list[Person]:
        return [p for p in self._address_book if self._predicate(p)]

    def update_filter(self, predicate: PersonPredicate) -> None:
        self._predicate = predicate
