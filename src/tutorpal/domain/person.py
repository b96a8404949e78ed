"""Person records: tutors and students with attendance, payments, and lessons.

Persons are immutable. Every mutator returns a new ``Person`` so a command
can compute the full edit first and install it in one step.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import date, time
from enum import StrEnum

from tutorpal.domain.errors import InvalidArgumentError, InvalidRangeError
from tutorpal.domain.periods import IsoWeek, Month
from tutorpal.domain.ranges import Bounds, Range, ensure_within

NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 .,'/-]*$")
PHONE_PATTERN = re.compile(r"^\d{3,}$")
EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*$")
CLASS_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 -]*$")

NAME_CONSTRAINTS = "Names should only contain alphanumeric characters, spaces and . , ' / -"
PHONE_CONSTRAINTS = "Phone numbers should only contain digits, and be at least 3 digits long"
EMAIL_CONSTRAINTS = "Emails should be of the format local-part@domain"
CLASS_CONSTRAINTS = "Class names should be alphanumeric and may contain spaces or hyphens"

EARLIEST_JOIN_DATE = date(2000, 1, 1)

MESSAGE_INVALID_WEEK_RANGE = (
    "Weekly attendance period is out of valid range! "
    "It should be between the join week and the current week inclusive."
)
MESSAGE_INVALID_MONTH_RANGE = (
    "Payment month is out of valid range! "
    "It should be between the join month and the current month inclusive."
)
MESSAGE_JOIN_AFTER_RECORDS = (
    "Join date cannot be moved past existing records: the earliest {kind} is {earliest}."
)


class Role(StrEnum):
    """Whether a record describes a tutor or a student."""

    STUDENT = "student"
    TUTOR = "tutor"


class Weekday(StrEnum):
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def parse(cls, text: str) -> Weekday:
        key = text.strip().lower()[:3]
        try:
            return cls(key)
        except ValueError as exc:
            valid = ", ".join(d.value for d in cls)
            msg = f"Unknown weekday {text!r}; expected one of {valid}."
            raise InvalidArgumentError(msg) from exc


@dataclass(frozen=True)
class Lesson:
    """A recurring weekly lesson slot."""

    day: Weekday
    slot: Range[time]

    def clashes_with(self, other: Lesson) -> bool:
        return self.day == other.day and self.slot.overlaps(other.slot)

    def __str__(self) -> str:
        return f"{self.day.value.upper()} {self.slot}"


@dataclass(frozen=True)
class Person:
    """An immutable tutor or student record."""

    name: str
    phone: str
    role: Role
    joined: date
    email: str | None = None
    classes: tuple[str, ...] = ()
    attendance: frozenset[IsoWeek] = field(default_factory=frozenset)
    paid_months: frozenset[Month] = field(default_factory=frozenset)
    unpaid_months: frozenset[Month] = field(default_factory=frozenset)
    lessons: tuple[Lesson, ...] = ()

    def __post_init__(self) -> None:
        if not NAME_PATTERN.match(self.name.strip()) or self.name != self.name.strip():
            raise InvalidArgumentError(NAME_CONSTRAINTS)
        if not PHONE_PATTERN.match(self.phone):
            raise InvalidArgumentError(PHONE_CONSTRAINTS)
        if self.email is not None and not EMAIL_PATTERN.match(self.email):
            raise InvalidArgumentError(EMAIL_CONSTRAINTS)
        for class_name in self.classes:
            if not CLASS_PATTERN.match(class_name):
                raise InvalidArgumentError(CLASS_CONSTRAINTS)
        if self.paid_months & self.unpaid_months:
            raise InvalidArgumentError("A month cannot be recorded as both paid and unpaid.")

    # ------------------------------------------------------------------
    # Identity and derived values
    # ------------------------------------------------------------------

    def is_same_person(self, other: Person) -> bool:
        """Identity check used for duplicate detection (case-insensitive name)."""
        return self.name.casefold() == other.name.casefold()

    @property
    def join_week(self) -> IsoWeek:
        return IsoWeek.of(self.joined)

    @property
    def join_month(self) -> Month:
        return Month.of(self.joined)

    def has_attended(self, week: IsoWeek) -> bool:
        return week in self.attendance

    def is_paid(self, month: Month) -> bool:
        return month in self.paid_months

    def has_payment_record(self, month: Month) -> bool:
        return month in self.paid_months or month in self.unpaid_months

    def payment_status(self, today: date) -> str:
        """``overdue`` if any earlier month is unpaid, else ``paid``/``unpaid``."""
        current = Month.of(today)
        month = self.join_month
        while month < current:
            if month not in self.paid_months:
                return "overdue"
            month = month.next()
        return "paid" if current in self.paid_months else "unpaid"

    # ------------------------------------------------------------------
    # Range-checked edits
    # ------------------------------------------------------------------

    def ensure_joined_by(self, today: date) -> None:
        """Reject join dates before 2000 or after *today*."""
        bounds = Bounds(EARLIEST_JOIN_DATE, today)
        ensure_within(self.joined, bounds, label="Join date")

    def mark_attendance(self, week: IsoWeek, today: date) -> Person:
        self._check_week(week, today)
        if self.has_attended(week):
            raise InvalidArgumentError(f"Attendance for {week} is already marked.")
        return replace(self, attendance=self.attendance | {week})

    def unmark_attendance(self, week: IsoWeek, today: date) -> Person:
        self._check_week(week, today)
        if not self.has_attended(week):
            raise InvalidArgumentError(f"Attendance for {week} is not marked yet.")
        return replace(self, attendance=self.attendance - {week})

    def mark_paid(self, month: Month, today: date) -> Person:
        self._check_month(month, today)
        if self.is_paid(month):
            raise InvalidArgumentError(f"Payment for {month} has already been marked as paid.")
        return replace(
            self,
            paid_months=self.paid_months | {month},
            unpaid_months=self.unpaid_months - {month},
        )

    def mark_unpaid(self, month: Month, today: date) -> Person:
        self._check_month(month, today)
        if not self.is_paid(month):
            raise InvalidArgumentError(f"Payment for {month} is not marked as paid.")
        return replace(
            self,
            paid_months=self.paid_months - {month},
            unpaid_months=self.unpaid_months | {month},
        )

    def delete_payment(self, month: Month, today: date) -> Person:
        """Drop the paid or unpaid record for *month* altogether."""
        self._check_month(month, today)
        if not self.has_payment_record(month):
            raise InvalidArgumentError(f"There is no payment record for {month} to delete.")
        return replace(
            self,
            paid_months=self.paid_months - {month},
            unpaid_months=self.unpaid_months - {month},
        )

    def with_join_date(self, joined: date, today: date) -> Person:
        """Move the join date, keeping every existing record inside the new range.

        Raises:
            InvalidRangeError: *joined* is outside [2000-01-01, today] or later
                than the earliest attendance or payment record.
        """
        edited = replace(self, joined=joined)
        edited.ensure_joined_by(today)
        if self.attendance and min(self.attendance) < edited.join_week:
            earliest = min(self.attendance)
            raise InvalidRangeError(
                MESSAGE_JOIN_AFTER_RECORDS.format(kind="attended week", earliest=earliest)
            )
        payments = self.paid_months | self.unpaid_months
        if payments and min(payments) < edited.join_month:
            raise InvalidRangeError(
                MESSAGE_JOIN_AFTER_RECORDS.format(kind="payment month", earliest=min(payments))
            )
        return edited

    def add_lesson(self, lesson: Lesson) -> Person:
        for existing in self.lessons:
            if lesson.clashes_with(existing):
                msg = f"Lesson {lesson} clashes with existing lesson {existing}."
                raise InvalidArgumentError(msg)
        ordered = sorted((*self.lessons, lesson), key=_lesson_key)
        return replace(self, lessons=tuple(ordered))

    def _check_week(self, week: IsoWeek, today: date) -> None:
        bounds = Bounds(self.join_week, IsoWeek.of(today))
        try:
            ensure_within(week, bounds, label="Week")
        except InvalidRangeError as exc:
            raise InvalidRangeError(MESSAGE_INVALID_WEEK_RANGE, exc) from exc

    def _check_month(self, month: Month, today: date) -> None:
        bounds = Bounds(self.join_month, Month.of(today))
        try:
            ensure_within(month, bounds, label="Month")
        except InvalidRangeError as exc:
            raise InvalidRangeError(MESSAGE_INVALID_MONTH_RANGE, exc) from exc


_WEEKDAY_ORDER = {day: index for index, day in enumerate(Weekday)}


def _lesson_key(lesson: Lesson) -> tuple[int, time]:
    return _WEEKDAY_ORDER[lesson.day], lesson.slot.start
