"""CommandResult — the outcome of one command execution.

INVARIANT: Every successful ``Command.execute`` returns exactly one
CommandResult, and it is never mutated afterwards. Failures are raised,
never encoded in a result.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Immutable, user-facing outcome of a command.

    Attributes:
        message: Feedback shown to the user.
        command_word: Word of the command that produced this result.
        show_help: The front-end should show help.
        exit: The front-end should terminate.
        data: Optional structured payload (e.g. the displayed persons).
    """

    model_config = {"frozen": True}

    message: str
    command_word: str = ""
    show_help: bool = False
    exit: bool = False
    data: dict[str, Any] = Field(default_factory=dict)
