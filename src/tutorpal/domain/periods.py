"""Calendar periods: ISO weeks (attendance) and months (payments).

ISO-8601 week rules:
- Weeks start on Monday.
- Week 1 is the week containing January 4.
- Each ISO year has 52 or 53 weeks.

Both types are immutable and totally ordered, so they can be used as
:class:`~tutorpal.domain.ranges.Bounds` endpoints.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

from tutorpal.domain.errors import InvalidArgumentError

MIN_YEAR = 2000
MAX_YEAR = 9999

WEEK_PATTERN = re.compile(r"^W(0[1-9]|[1-4][0-9]|5[0-3])-(\d{4})$", re.IGNORECASE)
MONTH_PATTERN = re.compile(r"^(0[1-9]|1[0-2])-(\d{4})$")

WEEK_CONSTRAINTS = (
    "Weekly attendance must be in the format W[XX]-YYYY, where:\n"
    "1) W is case insensitive,\n"
    "2) week number [XX] is between 01 and 52 (or 53 if that year has 53 weeks), and\n"
    f"3) YYYY is a 4-digit year between {MIN_YEAR} and {MAX_YEAR} inclusive.\n"
    "Example: W04-2025 represents the fourth ISO week of 2025."
)
MONTH_CONSTRAINTS = (
    f"Months must be in the format MM-YYYY with a year between {MIN_YEAR} and {MAX_YEAR}. "
    "Example: 01-2025"
)


def weeks_in_iso_year(year: int) -> int:
    """Number of ISO weeks (52 or 53) in *year*.

    28 December always falls in the last ISO week of its year.
    """
    return date(year, 12, 28).isocalendar().week


@dataclass(frozen=True, order=True)
class IsoWeek:
    """One ISO week of an ISO week-based year, e.g. ``W04-2025``."""

    year: int
    week: int

    def __post_init__(self) -> None:
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise InvalidArgumentError(WEEK_CONSTRAINTS)
        if not 1 <= self.week <= weeks_in_iso_year(self.year):
            raise InvalidArgumentError(WEEK_CONSTRAINTS)

    @classmethod
    def parse(cls, text: str) -> IsoWeek:
        """Parse ``W[XX]-YYYY`` (``W`` case-insensitive)."""
        match = WEEK_PATTERN.match(text.strip())
        if match is None:
            raise InvalidArgumentError(WEEK_CONSTRAINTS)
        return cls(year=int(match.group(2)), week=int(match.group(1)))

    @classmethod
    def of(cls, day: date) -> IsoWeek:
        """The ISO week containing *day*.

        Calendar dates always map to a real week, so the year floor used for
        typed input does not apply: 2000-01-01 belongs to ``W52-1999``.
        """
        iso = day.isocalendar()
        week = object.__new__(cls)
        object.__setattr__(week, "year", iso.year)
        object.__setattr__(week, "week", iso.week)
        return week

    def __str__(self) -> str:
        return f"W{self.week:02d}-{self.year:04d}"


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month, written ``MM-YYYY``."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not MIN_YEAR <= self.year <= MAX_YEAR or not 1 <= self.month <= 12:
            raise InvalidArgumentError(MONTH_CONSTRAINTS)

    @classmethod
    def parse(cls, text: str) -> Month:
        match = MONTH_PATTERN.match(text.strip())
        if match is None:
            raise InvalidArgumentError(MONTH_CONSTRAINTS)
        return cls(year=int(match.group(2)), month=int(match.group(1)))

    @classmethod
    def of(cls, day: date) -> Month:
        return cls(year=day.year, month=day.month)

    def next(self) -> Month:
        if self.month == 12:
            return Month(year=self.year + 1, month=1)
        return Month(year=self.year, month=self.month + 1)

    def __str__(self) -> str:
        return f"{self.month:02d}-{self.year:04d}"
