"""Interactive GPG key generation (gpgkeygen)."""

import re
from typing import Callable, Optional

from loguru import logger

from shellkit.exceptions import ValidationError
from shellkit.ui.console import console
from shellkit.utils.commands import run_command

NAME_PATTERN = re.compile(r"^[A-Z][a-zA-Z '.-]*[^-0-9]$")
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,4}$')

VALIDATORS = {
    "name": NAME_PATTERN,
    "email": EMAIL_PATTERN,
}


def validate_input(value: str, kind: str) -> str:
    """
    Check a user ID component.

    Args:
        value: Input string.
        kind: "name" or "email".

    Returns:
        The value, unchanged.

    Raises:
        ValidationError: If the value does not match, or kind is unknown.
    """
    pattern = VALIDATORS.get(kind)
    if pattern is None:
        raise ValidationError(
            f'Validation type value "{kind}" is invalid; Must be "name" or "email".'
        )
    if not pattern.match(value):
        raise ValidationError(
            f'Invalid {kind} "{value}". (Matched against: {pattern.pattern})'
        )
    return value


def query_until_valid(
    label: str,
    kind: str,
    prompt: Optional[Callable[[str], str]] = None
) -> str:
    """Ask for a value until it validates."""
    prompt = prompt or console.input
    while True:
        answer = prompt(f"[bold green]{label}: [/bold green]").strip()
        try:
            return validate_input(answer, kind)
        except ValidationError as e:
            console.print_error(str(e))


def user_id(name: str, email: str) -> str:
    return f"{name} <{email}>"


def interactive_keygen(prompt: Optional[Callable[[str], str]] = None) -> int:
    """
    Ask for a name and email, then let gpg generate the key.

    gpg asks for the passphrase itself through pinentry.

    Returns:
        gpg's exit status.
    """
    name = query_until_valid("Full name", "name", prompt)
    email = query_until_valid("Email", "email", prompt)

    uid = user_id(name, email)
    console.print(f"[bold green]Full Name: [/bold green][dim green]{name}[/dim green]")
    console.print(f"[bold green]Email: [/bold green][dim green]{email}[/dim green]")

    logger.info(f"Generating key for {uid}")
    return run_command(["gpg", "--quick-generate-key", uid]).returncode
