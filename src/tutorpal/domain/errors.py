"""Domain error taxonomy.

Two tiers:
- ``InvalidArgumentError``: malformed input (bad format, missing value,
  wrong type). Recoverable and user-facing.
- ``InvalidRangeError``: a value that is structurally a range (or a point
  checked against a range) but violates ordering or bound policy.

INVARIANT: ``InvalidRangeError`` is a subclass of ``InvalidArgumentError`` so
callers may catch it first for range-specific guidance and fall back to the
generic handler for everything else.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Malformed input that is not specifically a range problem."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRangeError(InvalidArgumentError):
    """A range (or a point inside one) is outside the valid range.

    The optional *cause* is chained as ``__cause__`` so the original
    diagnostic survives, exactly as ``raise ... from cause`` would.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class DuplicatePersonError(InvalidArgumentError):
    """The address book already holds a person with the same identity."""


class PersonNotFoundError(LookupError):
    """A person expected in the address book is absent."""
