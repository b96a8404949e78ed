"""Range values and range-validity checks.

A :class:`Range` is an ordered ``(start, end)`` pair over any totally
ordered domain (times, dates, ISO weeks, months). :class:`Bounds` is the
policy window a value must fall into; the inclusivity of each end is a
parameter, not a hard-coded rule.

INVARIANT: Every ``Range`` satisfies ``start < end``. Validation is pure:
the same inputs always give the same verdict, and the bounds are always
passed explicitly (no clock is read here).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tutorpal.domain.errors import InvalidArgumentError, InvalidRangeError

T = TypeVar("T")

MESSAGE_ORDER = "Range start ({start}) must be before its end ({end})."
MESSAGE_OUTSIDE = "{label} {value} is outside the valid range {bounds}."


@dataclass(frozen=True)
class Bounds(Generic[T]):
    """Permitted window ``lower .. upper`` for a ranged value."""

    lower: T
    upper: T
    include_lower: bool = True
    include_upper: bool = True

    def contains(self, value: T) -> bool:
        """Check whether *value* lies inside the window."""
        lower: Any = self.lower
        upper: Any = self.upper
        above = value >= lower if self.include_lower else value > lower
        below = value <= upper if self.include_upper else value < upper
        return bool(above and below)

    def __str__(self) -> str:
        left = "[" if self.include_lower else "("
        right = "]" if self.include_upper else ")"
        return f"{left}{_fmt(self.lower)}, {_fmt(self.upper)}{right}"


@dataclass(frozen=True)
class Range(Generic[T]):
    """Immutable ``(start, end)`` pair with ``start < end``."""

    start: T
    end: T

    def __post_init__(self) -> None:
        _require_endpoints(self.start, self.end)
        if not _less_than(self.start, self.end):
            raise InvalidRangeError(
                MESSAGE_ORDER.format(start=_fmt(self.start), end=_fmt(self.end))
            )

    def contains(self, value: T) -> bool:
        """Half-open membership: ``start <= value < end``."""
        start: Any = self.start
        return bool(start <= value < self.end)  # type: ignore[operator]

    def overlaps(self, other: Range[T]) -> bool:
        """True if the two half-open ranges share any point."""
        return _less_than(self.start, other.end) and _less_than(other.start, self.end)

    def __str__(self) -> str:
        return f"{_fmt(self.start)}-{_fmt(self.end)}"


def validate_range(start: T, end: T, bounds: Bounds[T]) -> Range[T]:
    """Build a :class:`Range` after checking ordering and bound policy.

    Ordering is checked before bounds, so a reversed range is always
    reported as an ordering problem.

    Raises:
        InvalidArgumentError: an endpoint is missing or not comparable.
        InvalidRangeError: ``start >= end`` or an endpoint is outside *bounds*.
    """
    span = Range(start, end)
    ensure_within(start, bounds, label="Range start")
    ensure_within(end, bounds, label="Range end")
    return span


def ensure_within(value: T, bounds: Bounds[T], *, label: str = "Value") -> T:
    """Return *value* unchanged if it lies inside *bounds*.

    Raises:
        InvalidArgumentError: *value* is missing or not comparable with the bounds.
        InvalidRangeError: *value* is outside *bounds*.
    """
    if value is None:
        raise InvalidArgumentError(f"{label} is missing.")
    try:
        inside = bounds.contains(value)
    except TypeError as exc:
        msg = f"{label} {value!r} cannot be compared with {bounds}."
        raise InvalidArgumentError(msg) from exc
    if not inside:
        raise InvalidRangeError(
            MESSAGE_OUTSIDE.format(label=label, value=_fmt(value), bounds=bounds)
        )
    return value


def _require_endpoints(start: Any, end: Any) -> None:
    if start is None or end is None:
        raise InvalidArgumentError("Range start and end are both required.")
    if type(start) is not type(end):
        msg = (
            f"Range endpoints must share a type, got "
            f"{type(start).__name__} and {type(end).__name__}."
        )
        raise InvalidArgumentError(msg)


def _less_than(left: Any, right: Any) -> bool:
    try:
        return bool(left < right)
    except TypeError as exc:
        msg = f"Range endpoints {left!r} and {right!r} are not comparable."
        raise InvalidArgumentError(msg) from exc


def _fmt(value: Any) -> str:
    # Times render without seconds to match the HH:MM input format.
    strftime = getattr(value, "strftime", None)
    if strftime is not None and hasattr(value, "hour") and not hasattr(value, "year"):
        return str(strftime("%H:%M"))
    return str(value)
