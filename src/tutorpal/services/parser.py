"""Text parser: turns a raw input line into a Command.

Input format: ``WORD [PREAMBLE] [PREFIX/VALUE]...`` where the preamble is
the text before the first prefix (an index, or find keywords) and each
prefix is one of the tokens in :data:`PREFIXES`.

Malformed input raises ``InvalidArgumentError`` carrying the command's
usage text. Range problems (e.g. a reversed lesson slot) are left to the
command's ``execute`` so they surface as ``InvalidRangeError``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, time

from tutorpal.domain.errors import InvalidArgumentError, InvalidRangeError
from tutorpal.domain.periods import IsoWeek, Month
from tutorpal.domain.person import Person, Role, Weekday
from tutorpal.domain.ranges import Bounds
from tutorpal.services.attendance import MarkCommand, UnmarkCommand
from tutorpal.services.base import Command, Index
from tutorpal.services.clear import ClearCommand
from tutorpal.services.payment import DelpayCommand, PayCommand, UnpayCommand
from tutorpal.services.people import (
    AddCommand,
    DeleteCommand,
    DisplayCommand,
    EditCommand,
    FindCommand,
    ListCommand,
)
from tutorpal.services.registry import lookup
from tutorpal.services.schedule import DEFAULT_WINDOW, ScheduleCommand
from tutorpal.services.session import ExitCommand, HelpCommand

PREFIXES: tuple[str, ...] = (
    "n/", "p/", "e/", "r/", "j/", "c/", "w/", "m/", "d/", "f/", "t/", "tu/", "ps/",
)
JOIN_DATE_FORMAT = "%d-%m-%Y"
TIME_FORMAT = "%H:%M"

_SPLIT = re.compile(r"(?:^|\s+)(?=(?:" + "|".join(re.escape(p) for p in PREFIXES) + "))")


class Arguments:
    """Preamble plus prefixed values of one input line."""

    def __init__(self, preamble: str, values: dict[str, list[str]]) -> None:
        self.preamble = preamble
        self._values = values

    def one(self, prefix: str) -> str | None:
        """Last value given for *prefix* (later occurrences win)."""
        found = self._values.get(prefix)
        return found[-1] if found else None

    def all(self, prefix: str) -> list[str]:
        return list(self._values.get(prefix, []))


def tokenize(text: str) -> Arguments:
    """Split *text* into preamble and prefixed values."""
    chunks = _SPLIT.split(text.strip())
    preamble = chunks[0].strip() if chunks and not chunks[0].startswith(PREFIXES) else ""
    values: dict[str, list[str]] = {}
    for chunk in chunks:
        for prefix in PREFIXES:
            if chunk.startswith(prefix):
                values.setdefault(prefix, []).append(chunk[len(prefix) :].strip())
                break
    return Arguments(preamble, values)


def parse_join_date(text: str) -> date:
    try:
        return datetime.strptime(text.strip(), JOIN_DATE_FORMAT).date()
    except ValueError as exc:
        msg = "Join dates should be in the format DD-MM-YYYY, and it should be a valid date"
        raise InvalidArgumentError(msg) from exc


def parse_time(text: str) -> time:
    try:
        return datetime.strptime(text.strip(), TIME_FORMAT).time()
    except ValueError as exc:
        raise InvalidArgumentError(f"Times should be in the format HH:MM, got {text!r}") from exc


def parse_role(text: str) -> Role:
    try:
        return Role(text.strip().lower())
    except ValueError as exc:
        raise InvalidArgumentError("Role should be either 'student' or 'tutor'") from exc


class CommandParser:
    """Central dispatcher from command word to command construction.

    Args:
        window: Teaching-window bounds handed to ``schedule`` commands.
    """

    def __init__(self, window: Bounds[time] = DEFAULT_WINDOW) -> None:
        self._window = window
        self._builders: dict[str, Callable[[Arguments], Command]] = {
            AddCommand.command_word: self._add,
            EditCommand.command_word: self._edit,
            DeleteCommand.command_word: self._delete,
            DisplayCommand.command_word: self._display,
            ListCommand.command_word: self._list,
            FindCommand.command_word: self._find,
            ClearCommand.command_word: lambda _args: ClearCommand(),
            MarkCommand.command_word: self._week(MarkCommand),
            UnmarkCommand.command_word: self._week(UnmarkCommand),
            PayCommand.command_word: self._month(PayCommand),
            UnpayCommand.command_word: self._month(UnpayCommand),
            DelpayCommand.command_word: self._month(DelpayCommand),
            ScheduleCommand.command_word: self._schedule,
            HelpCommand.command_word: lambda args: HelpCommand(topic=args.preamble or None),
            ExitCommand.command_word: lambda _args: ExitCommand(),
        }

    def parse(self, line: str) -> Command:
        """Parse one input line into a ready-to-execute command."""
        stripped = line.strip()
        if not stripped:
            raise InvalidArgumentError("Invalid command format! Type 'help' to see all commands.")
        word, _, rest = stripped.partition(" ")
        cls = lookup(word)
        try:
            return self._builders[cls.command_word](tokenize(rest))
        except InvalidRangeError:
            raise
        except InvalidArgumentError as exc:
            msg = f"{exc.message}\n{cls.usage}"
            raise InvalidArgumentError(msg) from exc

    # --- Builders ---

    def _add(self, args: Arguments) -> Command:
        name, phone, role, joined = (args.one(p) for p in ("n/", "p/", "r/", "j/"))
        if not (name and phone and role and joined) or args.preamble:
            raise InvalidArgumentError("Invalid command format!")
        person = Person(
            name=name,
            phone=phone,
            role=parse_role(role),
            joined=parse_join_date(joined),
            email=args.one("e/") or None,
            classes=tuple(args.all("c/")),
        )
        return AddCommand(person=person)

    def _edit(self, args: Arguments) -> Command:
        index = Index.parse(args.preamble)
        joined = args.one("j/")
        classes = args.all("c/")
        return EditCommand(
            index=index,
            name=args.one("n/") or None,
            phone=args.one("p/") or None,
            email=args.one("e/") or None,
            joined=parse_join_date(joined) if joined else None,
            # A lone empty "c/" asks to clear the classes, which edit rejects.
            classes=tuple(c for c in classes if c) if classes else None,
        )

    def _delete(self, args: Arguments) -> Command:
        return DeleteCommand(index=Index.parse(args.preamble))

    def _display(self, args: Arguments) -> Command:
        return DisplayCommand(index=Index.parse(args.preamble))

    def _list(self, args: Arguments) -> Command:
        if args.preamble:
            raise InvalidArgumentError("Invalid command format!")
        role = args.one("r/")
        statuses = args.one("ps/") or ""
        return ListCommand(
            role=parse_role(role) if role else None,
            class_name=args.one("c/") or None,
            tutor=args.one("tu/") or None,
            payment=tuple(s.strip() for s in statuses.split(",") if s.strip()),
        )

    def _find(self, args: Arguments) -> Command:
        keywords = tuple(args.preamble.split())
        if not keywords:
            raise InvalidArgumentError("Invalid command format!")
        return FindCommand(keywords=keywords)

    def _week(self, cls: type[MarkCommand] | type[UnmarkCommand]) -> Callable[[Arguments], Command]:
        def build(args: Arguments) -> Command:
            week = args.one("w/")
            if week is None:
                raise InvalidArgumentError("Invalid command format!")
            return cls(index=Index.parse(args.preamble), week=IsoWeek.parse(week))

        return build

    def _month(
        self, cls: type[PayCommand] | type[UnpayCommand] | type[DelpayCommand]
    ) -> Callable[[Arguments], Command]:
        def build(args: Arguments) -> Command:
            month = args.one("m/")
            if month is None:
                raise InvalidArgumentError("Invalid command format!")
            return cls(index=Index.parse(args.preamble), month=Month.parse(month))

        return build

    def _schedule(self, args: Arguments) -> Command:
        day, start, end = (args.one(p) for p in ("d/", "f/", "t/"))
        if not (day and start and end):
            raise InvalidArgumentError("Invalid command format!")
        return ScheduleCommand(
            index=Index.parse(args.preamble),
            day=Weekday.parse(day),
            start=parse_time(start),
            end=parse_time(end),
            window=self._window,
        )
