"""Rich renderers for CommandResult and command failures.

Results that carry a ``persons`` payload render as a table, a single
``person`` payload as a field/value sheet. Everything else renders as the
status line plus the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from tutorpal.output.console import create_console, get_output

if TYPE_CHECKING:
    from tutorpal.services.result import CommandResult

_ROLE_STYLES = {"student": "tp.role.student", "tutor": "tp.role.tutor"}
_PAYMENT_STYLES = {"paid": "tp.pay.paid", "unpaid": "tp.pay.unpaid", "overdue": "tp.pay.overdue"}


def render_result(result: CommandResult, *, verbose: bool = False) -> str:
    """Render a successful result to a styled string."""
    console = create_console()
    if result.show_help:
        console.print(result.message, markup=False)
        return get_output(console).rstrip("\n")

    console.print(Text("OK", style="tp.ok"), Text(f"  {result.command_word}", style="tp.op"))
    console.print(result.message, markup=False)
    persons = result.data.get("persons")
    if persons:
        console.print(_person_table(persons, verbose=verbose))
    person = result.data.get("person")
    if person:
        console.print(_person_sheet(person))
    return get_output(console).rstrip("\n")


def render_error(op: str, code: str, message: str) -> str:
    console = create_console()
    console.print(
        Text("ERROR", style="tp.error"),
        Text(f"  {op}", style="tp.op"),
        Text(f" [{code}]", style="tp.code"),
    )
    console.print(message, markup=False)
    return get_output(console).rstrip("\n")


def _person_table(persons: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Name", style="tp.name")
    table.add_column("Role")
    table.add_column("Phone")
    table.add_column("Classes")
    table.add_column("Payment")
    if verbose:
        table.add_column("Joined", style="dim")
        table.add_column("Lessons")
        table.add_column("Attended", justify="right")

    for person in persons:
        role = str(person.get("role", ""))
        payment = str(person.get("payment", ""))
        row: list[str | Text] = [
            str(person.get("index", "")),
            str(person.get("name", "")),
            Text(role, style=_ROLE_STYLES.get(role, "")),
            str(person.get("phone", "")),
            ", ".join(person.get("classes", [])),
            Text(payment, style=_PAYMENT_STYLES.get(payment, "")),
        ]
        if verbose:
            row.append(str(person.get("joined", "")))
            row.append(", ".join(person.get("lessons", [])))
            row.append(str(len(person.get("attended", []))))
        table.add_row(*row)
    return table


def _person_sheet(person: dict[str, Any]) -> Table:
    sheet = Table(show_header=False, box=None, pad_edge=False)
    sheet.add_column("Field", style="dim")
    sheet.add_column("Value")
    role = str(person.get("role", ""))
    payment = str(person.get("payment", ""))
    sheet.add_row("Name", Text(str(person.get("name", "")), style="tp.name"))
    sheet.add_row("Role", Text(role, style=_ROLE_STYLES.get(role, "")))
    sheet.add_row("Phone", str(person.get("phone", "")))
    sheet.add_row("Email", str(person.get("email") or "-"))
    sheet.add_row("Classes", ", ".join(person.get("classes", [])) or "-")
    sheet.add_row("Joined", str(person.get("joined", "")))
    sheet.add_row("Payment", Text(payment, style=_PAYMENT_STYLES.get(payment, "")))
    sheet.add_row("Paid", ", ".join(person.get("paid_months", [])) or "-")
    sheet.add_row("Unpaid", ", ".join(person.get("unpaid_months", [])) or "-")
    if role == "student":
        sheet.add_row("Attended", ", ".join(person.get("attended", [])) or "-")
    sheet.add_row("Lessons", ", ".join(person.get("lessons", [])) or "-")
    return sheet
