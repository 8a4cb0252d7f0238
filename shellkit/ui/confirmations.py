"""User confirmation and input handling."""

from enum import Enum, auto
from typing import Optional, Sequence

from shellkit.ui.console import console


class ConfirmationResult(Enum):
    """Result of a user confirmation prompt."""
    ACCEPT = auto()
    REJECT = auto()
    UNKNOWN = auto()


def parse_user_response(response: str, default: bool = False) -> ConfirmationResult:
    """
    Parse user response string into a ConfirmationResult.

    Only the first character counts, as the shell versions read a single key.

    Args:
        response: Raw user input string.
        default: Answer assumed for an empty response.

    Returns:
        ConfirmationResult enum value.
    """
    response = response.strip().lower()

    if not response:
        return ConfirmationResult.ACCEPT if default else ConfirmationResult.REJECT

    if response[0] == 'y':
        return ConfirmationResult.ACCEPT

    if response[0] == 'n':
        return ConfirmationResult.REJECT

    return ConfirmationResult.UNKNOWN


def ask_yes_no(question: str, default: bool = False) -> bool:
    """
    Ask a [Y/n] or [y/N] question.

    Unknown answers fall back to the default, so "[Y/n]" only refuses on
    an explicit no and "[y/N]" only accepts on an explicit yes.

    Args:
        question: Question text, without the choice hint.
        default: Answer for empty or unrecognised input.

    Returns:
        True if the user accepted.
    """
    hint = "[Y/n]" if default else "[y/N]"
    answer = console.input(f"[bold yellow]{question} {hint}: [/bold yellow]")
    result = parse_user_response(answer, default=default)
    if result is ConfirmationResult.UNKNOWN:
        return default
    return result is ConfirmationResult.ACCEPT


def validate_number_selection(selection: str, options: Sequence[str]) -> Optional[int]:
    """
    Validate a 1-based menu selection.

    Args:
        selection: User input (should be a number).
        options: Available options.

    Returns:
        The selected number, 0 for cancel, or None if invalid.
    """
    try:
        index = int(selection.strip())
    except ValueError:
        return None
    if 0 <= index <= len(options):
        return index
    return None


def wait_for_enter(message: str) -> None:
    """Block until the user presses Enter."""
    console.input(f"[green]{message}[/green]")
