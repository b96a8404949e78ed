"""Commands: add, edit, delete, display, list, find, clear."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tutorpal.commands._base import TutorCommand
from tutorpal.domain.person import Role

if TYPE_CHECKING:
    from tutorpal.commands._context import AppContext

_ROLES = click.Choice([r.value for r in Role], case_sensitive=False)
_STATUSES = click.Choice(["paid", "unpaid", "overdue"], case_sensitive=False)


@click.command(
    cls=TutorCommand,
    examples="""\
  tutorpal add -n "John Doe" -p 98765432 -r student -j 15-01-2025 -c Math
  tutorpal add -n "Ms Tan" -p 91234567 -r tutor -j 01-09-2024 -e tan@example.com""",
)
@click.option("-n", "--name", required=True, help="Full name.")
@click.option("-p", "--phone", required=True, help="Phone number (digits only).")
@click.option("-r", "--role", type=_ROLES, required=True, help="student or tutor.")
@click.option("-j", "--joined", required=True, help="Join date, DD-MM-YYYY.")
@click.option("-e", "--email", default=None, help="Email address.")
@click.option("-c", "--class", "classes", multiple=True, help="Class (repeatable).")
@click.pass_obj
def add(
    app: AppContext,
    name: str,
    phone: str,
    role: str,
    joined: str,
    email: str | None,
    classes: tuple[str, ...],
) -> None:
    """Add a tutor or student."""
    from tutorpal.domain.person import Person
    from tutorpal.services.parser import parse_join_date
    from tutorpal.services.people import AddCommand

    def build() -> AddCommand:
        person = Person(
            name=name.strip(),
            phone=phone.strip(),
            role=Role(role.lower()),
            joined=parse_join_date(joined),
            email=email,
            classes=classes,
        )
        return AddCommand(person=person)

    app.run(AddCommand.command_word, build)


@click.command(
    cls=TutorCommand,
    examples="""\
  tutorpal edit 1 -p 91234567 -e johndoe@example.com
  tutorpal edit 2 -j 01-02-2025
  tutorpal edit 3 -c Math -c Science""",
)
@click.argument("index")
@click.option("-n", "--name", default=None, help="New full name.")
@click.option("-p", "--phone", default=None, help="New phone number.")
@click.option("-e", "--email", default=None, help="New email address.")
@click.option("-j", "--joined", default=None, help="New join date, DD-MM-YYYY.")
@click.option("-c", "--class", "classes", multiple=True, help="Replacement class (repeatable).")
@click.pass_obj
def edit(
    app: AppContext,
    index: str,
    name: str | None,
    phone: str | None,
    email: str | None,
    joined: str | None,
    classes: tuple[str, ...],
) -> None:
    """Edit the person at INDEX; only the given fields change."""
    from tutorpal.services.base import Index
    from tutorpal.services.parser import parse_join_date
    from tutorpal.services.people import EditCommand

    def build() -> EditCommand:
        return EditCommand(
            index=Index.parse(index),
            name=name.strip() if name else None,
            phone=phone.strip() if phone else None,
            email=email,
            joined=parse_join_date(joined) if joined else None,
            classes=classes or None,
        )

    app.run(EditCommand.command_word, build)


@click.command(cls=TutorCommand, examples="  tutorpal delete 2")
@click.argument("index")
@click.pass_obj
def delete(app: AppContext, index: str) -> None:
    """Delete the person at INDEX in the list."""
    from tutorpal.services.base import Index
    from tutorpal.services.people import DeleteCommand

    app.run(DeleteCommand.command_word, lambda: DeleteCommand(index=Index.parse(index)))


@click.command(cls=TutorCommand, examples="  tutorpal display 1")
@click.argument("index")
@click.pass_obj
def display(app: AppContext, index: str) -> None:
    """Show every detail of the person at INDEX."""
    from tutorpal.services.base import Index
    from tutorpal.services.people import DisplayCommand

    app.run(DisplayCommand.command_word, lambda: DisplayCommand(index=Index.parse(index)))


@click.command(
    "list",
    cls=TutorCommand,
    examples="""\
  tutorpal list
  tutorpal list --role student --class Math
  tutorpal list --tutor "Bob Lim"
  tutorpal list -s unpaid -s overdue""",
)
@click.option("-r", "--role", type=_ROLES, default=None, help="Only this role.")
@click.option("-c", "--class", "class_name", default=None, help="Only members of this class.")
@click.option("-t", "--tutor", default=None, help="Only students of tutors matching this name.")
@click.option(
    "-s", "--payment", type=_STATUSES, multiple=True, help="Only this payment status (repeatable)."
)
@click.pass_obj
def list_cmd(
    app: AppContext,
    role: str | None,
    class_name: str | None,
    tutor: str | None,
    payment: tuple[str, ...],
) -> None:
    """List persons, optionally filtered.

    --class, --tutor and --payment are mutually exclusive; --role combines
    with any of them.
    """
    from tutorpal.services.people import ListCommand

    app.run(
        ListCommand.command_word,
        lambda: ListCommand(
            role=Role(role.lower()) if role else None,
            class_name=class_name,
            tutor=tutor,
            payment=tuple(s.lower() for s in payment),
        ),
    )


@click.command(cls=TutorCommand, examples="  tutorpal find alice bob")
@click.argument("keywords", nargs=-1, required=True)
@click.pass_obj
def find(app: AppContext, keywords: tuple[str, ...]) -> None:
    """Find persons whose names contain any of KEYWORDS."""
    from tutorpal.services.people import FindCommand

    app.run(FindCommand.command_word, lambda: FindCommand(keywords=keywords))


@click.command(cls=TutorCommand, examples="  tutorpal clear")
@click.pass_obj
def clear(app: AppContext) -> None:
    """Remove every record."""
    from tutorpal.services.clear import ClearCommand

    app.run(ClearCommand.command_word, ClearCommand)
