"""Tests for JSON address book storage."""

from __future__ import annotations

import json
import os
from datetime import time
from pathlib import Path

import pytest

from tests.conftest import TODAY
from tutorpal.domain.address_book import AddressBook
from tutorpal.domain.periods import IsoWeek, Month
from tutorpal.domain.person import Lesson, Person, Weekday
from tutorpal.domain.ranges import Range
from tutorpal.infrastructure.storage import JsonAddressBookStorage, StorageError, StoredPerson


@pytest.fixture
def storage(tmp_path: Path) -> JsonAddressBookStorage:
    return JsonAddressBookStorage(tmp_path / "data" / "tutorpal.json")


class TestLoad:
    def test_missing_file_is_empty_book(self, storage: JsonAddressBookStorage) -> None:
        assert storage.load() == AddressBook()
        assert not storage.path.exists()

    def test_invalid_json(self, storage: JsonAddressBookStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="Could not load"):
            storage.load()

    def test_invalid_record(self, storage: JsonAddressBookStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        record = {"name": "Ann", "phone": "12", "role": "student", "joined": "2025-01-06"}
        storage.path.write_text(json.dumps({"persons": [record]}), encoding="utf-8")
        with pytest.raises(StorageError, match="Phone numbers"):
            storage.load()

    def test_unknown_role(self, storage: JsonAddressBookStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        record = {"name": "Ann", "phone": "123", "role": "parent", "joined": "2025-01-06"}
        storage.path.write_text(json.dumps({"persons": [record]}), encoding="utf-8")
        with pytest.raises(StorageError, match="Unknown role"):
            storage.load()

    def test_duplicate_records(self, storage: JsonAddressBookStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        record = {"name": "Ann", "phone": "123", "role": "student", "joined": "2025-01-06"}
        storage.path.write_text(json.dumps({"persons": [record, record]}), encoding="utf-8")
        with pytest.raises(StorageError):
            storage.load()

    def test_join_date_before_2000(self, storage: JsonAddressBookStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        record = {"name": "Ann", "phone": "123", "role": "student", "joined": "1999-12-01"}
        storage.path.write_text(json.dumps({"persons": [record]}), encoding="utf-8")
        with pytest.raises(StorageError, match="Join date"):
            storage.load()

    def test_missing_unpaid_months_defaults_to_empty(
        self, storage: JsonAddressBookStorage
    ) -> None:
        storage.path.parent.mkdir(parents=True)
        record = {"name": "Ann", "phone": "123", "role": "student", "joined": "2000-01-01"}
        storage.path.write_text(json.dumps({"persons": [record]}), encoding="utf-8")
        assert storage.load().persons[0].unpaid_months == frozenset()


class TestSave:
    def test_save_then_load(
        self, storage: JsonAddressBookStorage, alice: Person, bob: Person
    ) -> None:
        lesson = Lesson(day=Weekday.TUE, slot=Range(time(15, 0), time(16, 30)))
        busy = (
            alice.mark_attendance(IsoWeek(2025, 3), TODAY)
            .mark_paid(Month(2025, 1), TODAY)
            .mark_paid(Month(2025, 2), TODAY)
            .mark_unpaid(Month(2025, 2), TODAY)
            .add_lesson(lesson)
        )
        book = AddressBook([busy, bob])
        storage.save(book)
        assert storage.load() == book

    def test_file_layout(self, storage: JsonAddressBookStorage, alice: Person) -> None:
        storage.save(AddressBook([alice.mark_attendance(IsoWeek(2025, 3), TODAY)]))
        data = json.loads(storage.path.read_text(encoding="utf-8"))
        stored = data["persons"][0]
        assert stored["name"] == "Alice Tan"
        assert stored["joined"] == "2025-01-06"
        assert stored["attendance"] == ["W03-2025"]
        assert stored["lessons"] == []

    def test_no_temp_files_left(self, storage: JsonAddressBookStorage, alice: Person) -> None:
        storage.save(AddressBook([alice]))
        storage.save(AddressBook())
        assert [p.name for p in storage.path.parent.iterdir()] == ["tutorpal.json"]
        assert storage.load() == AddressBook()

    def test_unwritable_location(self, tmp_path: Path, alice: Person) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = JsonAddressBookStorage(blocker / "tutorpal.json")
        with pytest.raises(StorageError, match="Could not save"):
            storage.save(AddressBook([alice]))

    def test_failed_replace_removes_temp_file(
        self,
        storage: JsonAddressBookStorage,
        alice: Person,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        storage.save(AddressBook([alice]))

        def refuse(*_args: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", refuse)
        with pytest.raises(StorageError, match="disk full"):
            storage.save(AddressBook())
        assert [p.name for p in storage.path.parent.iterdir()] == ["tutorpal.json"]
        monkeypatch.undo()
        assert storage.load() == AddressBook([alice])


class TestStoredPerson:
    def test_round_trip_preserves_lessons(self, alice: Person) -> None:
        lesson = Lesson(day=Weekday.FRI, slot=Range(time(18, 0), time(19, 0)))
        person = alice.add_lesson(lesson)
        stored = StoredPerson.from_domain(person)
        assert stored.lessons[0].start == "18:00"
        assert stored.to_domain() == person
