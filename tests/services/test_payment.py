"""Tests for pay, unpay and delpay commands."""

from __future__ import annotations

import pytest

from tutorpal.domain.errors import InvalidArgumentError, InvalidRangeError
from tutorpal.domain.model import Model
from tutorpal.domain.periods import Month
from tutorpal.services.base import CommandError, Index
from tutorpal.services.payment import DelpayCommand, PayCommand, UnpayCommand


class TestPayCommand:
    def test_pay_student(self, model: Model) -> None:
        result = PayCommand(index=Index(1), month=Month(2025, 2)).execute(model)
        assert result.message == "Payment for Alice Tan for 02-2025 has been marked as paid."
        assert model.address_book.persons[0].is_paid(Month(2025, 2))

    def test_pay_tutor(self, model: Model) -> None:
        PayCommand(index=Index(2), month=Month(2024, 9)).execute(model)
        assert model.address_book.persons[1].is_paid(Month(2024, 9))

    @pytest.mark.parametrize("month", [Month(2024, 12), Month(2025, 4)])
    def test_month_out_of_range_is_atomic(self, model: Model, month: Month) -> None:
        before = model.address_book.persons
        with pytest.raises(InvalidRangeError):
            PayCommand(index=Index(1), month=month).execute(model)
        assert model.address_book.persons == before

    def test_already_paid(self, model: Model) -> None:
        PayCommand(index=Index(1), month=Month(2025, 1)).execute(model)
        with pytest.raises(InvalidArgumentError, match="already been marked"):
            PayCommand(index=Index(1), month=Month(2025, 1)).execute(model)


class TestUnpayCommand:
    def test_unpay(self, model: Model) -> None:
        PayCommand(index=Index(1), month=Month(2025, 3)).execute(model)
        result = UnpayCommand(index=Index(1), month=Month(2025, 3)).execute(model)
        assert result.message == "Payment for Alice Tan for 03-2025 has been marked as unpaid."
        assert not model.address_book.persons[0].paid_months

    def test_tutor_rejected(self, model: Model) -> None:
        with pytest.raises(CommandError, match="Index belongs to a tutor"):
            UnpayCommand(index=Index(2), month=Month(2025, 1)).execute(model)

    def test_not_paid(self, model: Model) -> None:
        with pytest.raises(InvalidArgumentError, match="not marked as paid"):
            UnpayCommand(index=Index(1), month=Month(2025, 1)).execute(model)

    def test_unpay_leaves_an_unpaid_record(self, model: Model) -> None:
        PayCommand(index=Index(1), month=Month(2025, 3)).execute(model)
        UnpayCommand(index=Index(1), month=Month(2025, 3)).execute(model)
        assert model.address_book.persons[0].unpaid_months == frozenset({Month(2025, 3)})


class TestDelpayCommand:
    def test_delete_paid_record(self, model: Model) -> None:
        PayCommand(index=Index(1), month=Month(2025, 1)).execute(model)
        result = DelpayCommand(index=Index(1), month=Month(2025, 1)).execute(model)
        assert result.message == "Deleted payment record for Alice Tan for 01-2025."
        assert not model.address_book.persons[0].has_payment_record(Month(2025, 1))

    def test_delete_unpaid_record(self, model: Model) -> None:
        PayCommand(index=Index(1), month=Month(2025, 2)).execute(model)
        UnpayCommand(index=Index(1), month=Month(2025, 2)).execute(model)
        DelpayCommand(index=Index(1), month=Month(2025, 2)).execute(model)
        assert model.address_book.persons[0].unpaid_months == frozenset()

    def test_tutor_allowed(self, model: Model) -> None:
        PayCommand(index=Index(2), month=Month(2024, 9)).execute(model)
        DelpayCommand(index=Index(2), month=Month(2024, 9)).execute(model)
        assert not model.address_book.persons[1].paid_months

    def test_no_record(self, model: Model) -> None:
        with pytest.raises(InvalidArgumentError, match="no payment record"):
            DelpayCommand(index=Index(1), month=Month(2025, 1)).execute(model)

    @pytest.mark.parametrize("month", [Month(2024, 12), Month(2025, 4)])
    def test_month_out_of_range(self, model: Model, month: Month) -> None:
        before = model.address_book.persons
        with pytest.raises(InvalidRangeError, match="out of valid range"):
            DelpayCommand(index=Index(1), month=month).execute(model)
        assert model.address_book.persons == before
