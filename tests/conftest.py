"""Shared pytest fixtures and test helpers for tutorpal tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from click.testing import CliRunner

from tutorpal.domain.address_book import AddressBook
from tutorpal.domain.model import Model
from tutorpal.domain.person import Person, Role

# Wednesday of ISO week W11-2025.
TODAY = date(2025, 3, 12)


def make_person(
    name: str = "Alice Tan",
    *,
    role: Role = Role.STUDENT,
    joined: date = date(2025, 1, 6),
    phone: str = "98765432",
    **kwargs: object,
) -> Person:
    """Build a valid Person, overriding only what the test cares about."""
    return Person(name=name, phone=phone, role=role, joined=joined, **kwargs)  # type: ignore[arg-type]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def alice() -> Person:
    return make_person("Alice Tan", classes=("Math",))


@pytest.fixture
def bob() -> Person:
    return make_person("Bob Lim", role=Role.TUTOR, joined=date(2024, 9, 1), phone="91234567")


@pytest.fixture
def carol() -> Person:
    return make_person("Carol Ng", joined=date(2025, 2, 10), phone="93334444", classes=("Science",))


@pytest.fixture
def model(alice: Person, bob: Person, carol: Person) -> Model:
    """Model holding three persons, with the clock pinned to TODAY."""
    return Model(AddressBook([alice, bob, carol]), clock=lambda: TODAY)


@pytest.fixture
def empty_model() -> Model:
    return Model(clock=lambda: TODAY)


@pytest.fixture
def _isolated_data(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI reads and writes an isolated data file.

    Use via ``@pytest.mark.usefixtures("_isolated_data")`` on command test
    classes.
    """
    for var in ("TUTORPAL_CONFIG", "TUTORPAL_DATA_FILE", "TUTORPAL_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
