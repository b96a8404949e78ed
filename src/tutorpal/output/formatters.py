"""Output mode selection: Rich for humans, JSON for machines, bare for --quiet."""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING

from pydantic import BaseModel

from tutorpal.output.renderers import render_error, render_result

if TYPE_CHECKING:
    from tutorpal.services.result import CommandResult


class OutputSettings(BaseModel):
    """Output flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: CommandResult, *, settings: OutputSettings | None = None) -> str:
    """Format a successful CommandResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        payload = {"ok": True, **result.model_dump(mode="json")}
        return _json.dumps(payload, indent=2)
    if settings.quiet:
        return result.message
    return render_result(result, verbose=settings.verbose)


def format_error(
    op: str,
    code: str,
    message: str,
    *,
    settings: OutputSettings | None = None,
) -> str:
    """Format a command failure for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        payload = {"ok": False, "command_word": op, "error": {"code": code, "message": message}}
        return _json.dumps(payload, indent=2)
    if settings.quiet:
        return f"ERROR: {message}"
    return render_error(op, code, message)
