"""User interface components."""

from shellkit.ui.console import ConsoleUI, console
from shellkit.ui.confirmations import (
    ConfirmationResult,
    parse_user_response,
    ask_yes_no,
    validate_number_selection,
    wait_for_enter,
)

__all__ = [
    "ConsoleUI",
    "console",
    "ConfirmationResult",
    "parse_user_response",
    "ask_yes_no",
    "validate_number_selection",
    "wait_for_enter",
]
