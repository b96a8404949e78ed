"""Commands: mark, unmark, pay, unpay, delpay, schedule."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tutorpal.commands._base import TutorCommand

if TYPE_CHECKING:
    from tutorpal.commands._context import AppContext


@click.command(cls=TutorCommand, examples="  tutorpal mark 1 W04-2025")
@click.argument("index")
@click.argument("week")
@click.pass_obj
def mark(app: AppContext, index: str, week: str) -> None:
    """Mark attendance of the student at INDEX for ISO WEEK (W[XX]-YYYY)."""
    from tutorpal.domain.periods import IsoWeek
    from tutorpal.services.attendance import MarkCommand
    from tutorpal.services.base import Index

    app.run(
        MarkCommand.command_word,
        lambda: MarkCommand(index=Index.parse(index), week=IsoWeek.parse(week)),
    )


@click.command(cls=TutorCommand, examples="  tutorpal unmark 1 W04-2025")
@click.argument("index")
@click.argument("week")
@click.pass_obj
def unmark(app: AppContext, index: str, week: str) -> None:
    """Unmark attendance of the student at INDEX for ISO WEEK."""
    from tutorpal.domain.periods import IsoWeek
    from tutorpal.services.attendance import UnmarkCommand
    from tutorpal.services.base import Index

    app.run(
        UnmarkCommand.command_word,
        lambda: UnmarkCommand(index=Index.parse(index), week=IsoWeek.parse(week)),
    )


@click.command(cls=TutorCommand, examples="  tutorpal pay 1 01-2025")
@click.argument("index")
@click.argument("month")
@click.pass_obj
def pay(app: AppContext, index: str, month: str) -> None:
    """Mark MONTH (MM-YYYY) as paid for the person at INDEX."""
    from tutorpal.domain.periods import Month
    from tutorpal.services.base import Index
    from tutorpal.services.payment import PayCommand

    app.run(
        PayCommand.command_word,
        lambda: PayCommand(index=Index.parse(index), month=Month.parse(month)),
    )


@click.command(cls=TutorCommand, examples="  tutorpal unpay 1 01-2025")
@click.argument("index")
@click.argument("month")
@click.pass_obj
def unpay(app: AppContext, index: str, month: str) -> None:
    """Mark MONTH as unpaid for the student at INDEX."""
    from tutorpal.domain.periods import Month
    from tutorpal.services.base import Index
    from tutorpal.services.payment import UnpayCommand

    app.run(
        UnpayCommand.command_word,
        lambda: UnpayCommand(index=Index.parse(index), month=Month.parse(month)),
    )


@click.command(cls=TutorCommand, examples="  tutorpal delpay 1 01-2025")
@click.argument("index")
@click.argument("month")
@click.pass_obj
def delpay(app: AppContext, index: str, month: str) -> None:
    """Delete the MONTH payment record (paid or unpaid) of the person at INDEX."""
    from tutorpal.domain.periods import Month
    from tutorpal.services.base import Index
    from tutorpal.services.payment import DelpayCommand

    app.run(
        DelpayCommand.command_word,
        lambda: DelpayCommand(index=Index.parse(index), month=Month.parse(month)),
    )


@click.command(
    cls=TutorCommand,
    examples="""\
  tutorpal schedule 1 mon 09:00 10:30
  tutorpal schedule 2 sat 14:00 16:00""",
)
@click.argument("index")
@click.argument("day")
@click.argument("start")
@click.argument("end")
@click.pass_obj
def schedule(app: AppContext, index: str, day: str, start: str, end: str) -> None:
    """Book a weekly lesson for the person at INDEX on DAY from START to END (HH:MM)."""
    from tutorpal.domain.person import Weekday
    from tutorpal.services.base import Index
    from tutorpal.services.parser import parse_time
    from tutorpal.services.schedule import ScheduleCommand

    app.run(
        ScheduleCommand.command_word,
        lambda: ScheduleCommand(
            index=Index.parse(index),
            day=Weekday.parse(day),
            start=parse_time(start),
            end=parse_time(end),
            window=app.settings.schedule.window(),
        ),
    )
