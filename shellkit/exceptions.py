"""Exceptions raised by shellkit commands."""

from typing import Optional


class ShellkitError(Exception):
    """Base class for every error reported to the user."""

    exit_code = 1

    def __init__(self, message: str, exit_code: Optional[int] = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(ShellkitError):
    """Invalid command-line arguments."""

    pass


class ValidationError(ShellkitError):
    """Invalid input file, directory or user value."""

    pass


class CollectionError(ShellkitError):
    """Video collection problem, carrying the numeric code of the failure."""

    pass


class CommandError(ShellkitError):
    """An external command could not be run."""

    pass


class ToolNotFoundError(CommandError):
    """A required external binary is not on PATH."""

    exit_code = 127
