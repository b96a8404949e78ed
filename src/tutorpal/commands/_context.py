"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. It owns the one live Model, executes commands against
it, persists successful mutations, and routes results to stdout/stderr.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, NoReturn

import click

from tutorpal.config.logging import command_context, configure_logging
from tutorpal.domain.errors import InvalidArgumentError, InvalidRangeError
from tutorpal.infrastructure.storage import JsonAddressBookStorage, StorageError
from tutorpal.output.formatters import OutputSettings, format_error, format_result
from tutorpal.services.base import CommandError

if TYPE_CHECKING:
    from tutorpal.config.settings import TutorPalSettings
    from tutorpal.domain.model import Model
    from tutorpal.services.base import Command
    from tutorpal.services.parser import CommandParser
    from tutorpal.services.result import CommandResult

logger = logging.getLogger(__name__)

HANDLED_ERRORS = (InvalidArgumentError, CommandError, StorageError)


def error_code(exc: BaseException) -> str:
    """Map a handled failure to its stable output code.

    Range failures are checked first: they are also generic argument failures.
    """
    if isinstance(exc, InvalidRangeError):
        return "INVALID_RANGE"
    if isinstance(exc, InvalidArgumentError):
        return "INVALID_ARGUMENT"
    if isinstance(exc, StorageError):
        return "STORAGE_ERROR"
    return "COMMAND_FAILED"


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The model is loaded lazily on first use so ``--help`` and ``--version``
    never touch the data file.
    """

    def __init__(self, settings: TutorPalSettings) -> None:
        self.settings = settings
        self._model: Model | None = None
        self._parser: CommandParser | None = None
        self.storage = JsonAddressBookStorage(settings.resolved_data_file)

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def model(self) -> Model:
        """The live model (loaded from storage on first access)."""
        if self._model is None:
            from tutorpal.domain.model import Model

            self._model = Model(self.storage.load())
        return self._model

    @property
    def parser(self) -> CommandParser:
        if self._parser is None:
            from tutorpal.services.parser import CommandParser

            self._parser = CommandParser(window=self.settings.schedule.window())
        return self._parser

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def dispatch(self, build: Callable[[], Command]) -> CommandResult:
        """Build, execute, and (for mutating commands) persist one command.

        Raises whatever the build or the execution raises; nothing is saved
        unless execution succeeded. If the save fails, the model is put back
        to the address book it held before the command ran.
        """
        command = build()
        with command_context(command.command_word):
            model = self.model
            if not command.mutates:
                return command.execute(model)
            snapshot = model.address_book.copy()
            result = command.execute(model)
            try:
                self.storage.save(model.address_book)
            except StorageError:
                logger.debug("Save failed; rolling back %s", command.command_word)
                model.set_address_book(snapshot)
                raise
        return result

    def run(self, op: str, build: Callable[[], Command]) -> None:
        """Dispatch and emit; failures go to stderr with exit code 1."""
        try:
            result = self.dispatch(build)
        except HANDLED_ERRORS as exc:
            self.fail(op, exc)
        self.emit(result)

    def emit(self, result: CommandResult) -> None:
        click.echo(format_result(result, settings=self.output_settings))

    def report(self, op: str, exc: Exception) -> None:
        """Write a failure to stderr without exiting."""
        code = error_code(exc)
        logger.debug("%s failed with %s: %s", op, code, exc)
        click.echo(format_error(op, code, str(exc), settings=self.output_settings), err=True)

    def fail(self, op: str, exc: Exception) -> NoReturn:
        self.report(op, exc)
        raise SystemExit(1)
