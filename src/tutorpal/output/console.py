"""Rich Console factory and theme for tutorpal output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TUTORPAL_THEME = Theme(
    {
        "tp.ok": "bold green",
        "tp.error": "bold red",
        "tp.code": "bold yellow",
        "tp.op": "bold cyan",
        "tp.name": "bold",
        "tp.role.student": "green",
        "tp.role.tutor": "blue",
        "tp.pay.paid": "green",
        "tp.pay.unpaid": "yellow",
        "tp.pay.overdue": "bold red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TUTORPAL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
