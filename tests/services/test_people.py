"""Tests for add, edit, delete, display, list and find commands."""

from __future__ import annotations

from datetime import date

import pytest

from tests.conftest import make_person
from tutorpal.domain.errors import InvalidArgumentError, InvalidRangeError
from tutorpal.domain.model import Model
from tutorpal.domain.periods import IsoWeek, Month
from tutorpal.domain.person import Person, Role
from tutorpal.services.attendance import MarkCommand
from tutorpal.services.base import MESSAGE_INVALID_INDEX, CommandError, Index
from tutorpal.services.payment import PayCommand
from tutorpal.services.people import (
    AddCommand,
    DeleteCommand,
    DisplayCommand,
    EditCommand,
    FindCommand,
    ListCommand,
)


class TestIndex:
    def test_parse(self) -> None:
        assert Index.parse(" 3 ") == Index(3)
        assert Index(3).zero_based == 2

    @pytest.mark.parametrize("text", ["0", "-1", "abc", "", "1.5"])
    def test_parse_rejects(self, text: str) -> None:
        with pytest.raises(InvalidArgumentError, match="positive integer"):
            Index.parse(text)


class TestAddCommand:
    def test_add(self, model: Model) -> None:
        dan = make_person("Dan Goh", phone="95556666")
        result = AddCommand(person=dan).execute(model)
        assert result.message == "New person added: Dan Goh"
        assert result.command_word == "add"
        assert model.address_book.persons[-1] == dan

    def test_duplicate(self, model: Model) -> None:
        with pytest.raises(CommandError, match="already exists"):
            AddCommand(person=make_person("alice tan")).execute(model)
        assert len(model.address_book) == 3

    def test_future_join_date(self, model: Model) -> None:
        future = make_person("Dan Goh", joined=date(2025, 3, 13))
        with pytest.raises(InvalidRangeError, match="Join date"):
            AddCommand(person=future).execute(model)
        assert len(model.address_book) == 3


class TestEditCommand:
    def test_edit_contact_details(self, model: Model) -> None:
        result = EditCommand(index=Index(1), phone="91112222", email="alice@example.com").execute(
            model
        )
        assert result.message == "Edited Person: Alice Tan"
        edited = model.address_book.persons[0]
        assert (edited.phone, edited.email) == ("91112222", "alice@example.com")
        assert edited.classes == ("Math",)

    def test_requires_a_field(self) -> None:
        with pytest.raises(InvalidArgumentError, match="At least one field"):
            EditCommand(index=Index(1))

    def test_resets_displayed_list(self, model: Model) -> None:
        ListCommand(role=Role.TUTOR).execute(model)
        EditCommand(index=Index(1), name="Bob Lim Jr").execute(model)
        assert len(model.filtered_persons()) == 3
        assert model.address_book.persons[1].name == "Bob Lim Jr"

    def test_rename_to_existing_person(self, model: Model) -> None:
        before = model.address_book.persons
        with pytest.raises(CommandError, match="already exists"):
            EditCommand(index=Index(1), name="carol ng").execute(model)
        assert model.address_book.persons == before

    def test_change_case_of_own_name(self, model: Model) -> None:
        EditCommand(index=Index(1), name="ALICE TAN").execute(model)
        assert model.address_book.persons[0].name == "ALICE TAN"

    def test_student_takes_one_class(self, model: Model) -> None:
        with pytest.raises(CommandError, match="only have one class"):
            EditCommand(index=Index(1), classes=("Math", "Science")).execute(model)

    def test_tutor_takes_many_classes(self, model: Model) -> None:
        EditCommand(index=Index(2), classes=("Math", "Science")).execute(model)
        assert model.address_book.persons[1].classes == ("Math", "Science")

    def test_classes_cannot_be_emptied(self, model: Model) -> None:
        with pytest.raises(CommandError, match="At least one class"):
            EditCommand(index=Index(2), classes=()).execute(model)

    def test_invalid_field(self, model: Model) -> None:
        with pytest.raises(InvalidArgumentError, match="Phone numbers"):
            EditCommand(index=Index(1), phone="12").execute(model)

    def test_join_date(self, model: Model) -> None:
        EditCommand(index=Index(3), joined=date(2025, 1, 13)).execute(model)
        assert model.address_book.persons[2].joined == date(2025, 1, 13)

    def test_future_join_date(self, model: Model) -> None:
        before = model.address_book.persons
        with pytest.raises(InvalidRangeError, match="Join date"):
            EditCommand(index=Index(1), joined=date(2025, 3, 13)).execute(model)
        assert model.address_book.persons == before

    def test_join_date_after_records(self, model: Model) -> None:
        MarkCommand(index=Index(1), week=IsoWeek(2025, 3)).execute(model)
        PayCommand(index=Index(1), month=Month(2025, 2)).execute(model)
        before = model.address_book.persons
        with pytest.raises(InvalidRangeError, match="earliest attended week"):
            EditCommand(index=Index(1), phone="90001111", joined=date(2025, 2, 3)).execute(model)
        assert model.address_book.persons == before

    def test_invalid_index(self, model: Model) -> None:
        with pytest.raises(CommandError):
            EditCommand(index=Index(4), name="Zed").execute(model)


class TestDeleteCommand:
    def test_delete(self, model: Model, bob: Person) -> None:
        result = DeleteCommand(index=Index(2)).execute(model)
        assert result.message == "Deleted Person: Bob Lim"
        assert not model.has_person(bob)

    def test_index_out_of_range(self, model: Model) -> None:
        with pytest.raises(CommandError) as info:
            DeleteCommand(index=Index(4)).execute(model)
        assert info.value.message == MESSAGE_INVALID_INDEX
        assert len(model.address_book) == 3

    def test_index_refers_to_displayed_list(self, model: Model, carol: Person) -> None:
        ListCommand(role=Role.STUDENT).execute(model)
        DeleteCommand(index=Index(2)).execute(model)
        assert not model.has_person(carol)
        assert len(model.address_book) == 2


class TestDisplayCommand:
    def test_display(self, model: Model) -> None:
        PayCommand(index=Index(1), month=Month(2025, 1)).execute(model)
        result = DisplayCommand(index=Index(1)).execute(model)
        assert result.message == "Displayed Person: Alice Tan"
        person = result.data["person"]
        assert person["index"] == 1
        assert person["paid_months"] == ["01-2025"]
        assert person["unpaid_months"] == []
        assert DisplayCommand.mutates is False

    def test_index_refers_to_displayed_list(self, model: Model) -> None:
        ListCommand(role=Role.TUTOR).execute(model)
        result = DisplayCommand(index=Index(1)).execute(model)
        assert result.data["person"]["name"] == "Bob Lim"

    def test_invalid_index(self, model: Model) -> None:
        with pytest.raises(CommandError):
            DisplayCommand(index=Index(4)).execute(model)


class TestListCommand:
    def test_list_all(self, model: Model) -> None:
        model.update_filter(lambda p: False)
        result = ListCommand().execute(model)
        assert result.message == "Listed all persons"
        assert result.data["count"] == 3
        assert [p["name"] for p in result.data["persons"]] == ["Alice Tan", "Bob Lim", "Carol Ng"]

    def test_payload_shape(self, model: Model) -> None:
        first = ListCommand().execute(model).data["persons"][0]
        assert first["index"] == 1
        assert first["role"] == "student"
        assert first["classes"] == ["Math"]
        assert first["joined"] == "2025-01-06"
        assert first["payment"] == "overdue"

    def test_filter_by_role(self, model: Model) -> None:
        result = ListCommand(role=Role.TUTOR).execute(model)
        assert result.message == "Listed 1 persons"
        assert result.data["persons"][0]["name"] == "Bob Lim"

    def test_filter_by_class_ignores_case(self, model: Model) -> None:
        result = ListCommand(class_name="math").execute(model)
        assert [p["name"] for p in result.data["persons"]] == ["Alice Tan"]

    def test_filter_by_role_and_class(self, model: Model) -> None:
        result = ListCommand(role=Role.TUTOR, class_name="Math").execute(model)
        assert result.data["count"] == 0

    def test_does_not_mutate_records(self, model: Model) -> None:
        before = model.address_book.persons
        ListCommand(role=Role.STUDENT).execute(model)
        assert model.address_book.persons == before
        assert ListCommand.mutates is False

    def test_filter_by_tutor(self, model: Model) -> None:
        EditCommand(index=Index(2), classes=("Math",)).execute(model)
        result = ListCommand(tutor="bob").execute(model)
        assert result.message == "Listed 1 students taught by bob"
        assert [p["name"] for p in result.data["persons"]] == ["Alice Tan"]

    def test_unknown_tutor_lists_nobody(self, model: Model) -> None:
        assert ListCommand(tutor="Nobody").execute(model).data["count"] == 0

    def test_filter_by_payment_status(self, model: Model) -> None:
        PayCommand(index=Index(3), month=Month(2025, 2)).execute(model)
        PayCommand(index=Index(3), month=Month(2025, 3)).execute(model)
        paid = ListCommand(payment=("PAID",)).execute(model)
        assert [p["name"] for p in paid.data["persons"]] == ["Carol Ng"]
        behind = ListCommand(payment=("overdue", "unpaid")).execute(model)
        assert behind.message == "Listed 2 persons with payment status overdue, unpaid"

    def test_filter_by_role_and_payment(self, model: Model) -> None:
        result = ListCommand(role=Role.STUDENT, payment=("overdue",)).execute(model)
        assert [p["name"] for p in result.data["persons"]] == ["Alice Tan", "Carol Ng"]

    def test_conflicting_filters(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Only one of"):
            ListCommand(class_name="Math", tutor="Bob")

    def test_unknown_payment_status(self) -> None:
        with pytest.raises(InvalidArgumentError, match="paid, unpaid, overdue"):
            ListCommand(payment=("late",))


class TestFindCommand:
    def test_find_single_keyword(self, model: Model) -> None:
        result = FindCommand(keywords=("alice",)).execute(model)
        assert result.message == "1 persons listed!"

    def test_find_any_keyword(self, model: Model) -> None:
        result = FindCommand(keywords=("TAN", "ng")).execute(model)
        assert [p["name"] for p in result.data["persons"]] == ["Alice Tan", "Carol Ng"]

    def test_partial_words_do_not_match(self, model: Model) -> None:
        result = FindCommand(keywords=("Ali",)).execute(model)
        assert result.message == "0 persons listed!"
        assert model.filtered_persons() == []
