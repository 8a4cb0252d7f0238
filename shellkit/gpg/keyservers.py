"""GPG keyserver selection (gpgks)."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from shellkit.config.settings import (
    KEYSERVERS,
    DEFAULT_KEYSERVER,
    KEYSERVER_STATE_KEY,
)
from shellkit.exceptions import UsageError
from shellkit.ui.console import console
from shellkit.ui.confirmations import validate_number_selection
from shellkit.utils.app_state import AppStateManager

LIST_PATTERN = re.compile(r'^(-l|(--)?l(ist)?)$')
ALL_PATTERN = re.compile(r'^(-a|(--)?a(ll)?)$')
QUIET_PATTERN = re.compile(r'^(-q|(--)?q(uiet)?)$')
NUMBER_PATTERN = re.compile(r'^-?[0-9]+$')


def get_saved_keyserver(db_path: Optional[Path] = None) -> Optional[str]:
    """Return the keyserver stored by a previous selection, if any."""
    with AppStateManager(db_path) as state:
        return state.get(KEYSERVER_STATE_KEY)


def save_keyserver(keyserver: str, db_path: Optional[Path] = None) -> bool:
    """Persist keyserver as the active one."""
    with AppStateManager(db_path) as state:
        saved = state.set(KEYSERVER_STATE_KEY, keyserver)
    if saved:
        logger.info(f"Active keyserver set to {keyserver}")
    return saved


def current_keyserver(db_path: Optional[Path] = None) -> str:
    """
    Resolve the keyserver to use.

    Order: KEYSERVER environment variable, stored selection, default.
    """
    from_env = os.getenv("KEYSERVER")
    if from_env:
        return from_env
    return get_saved_keyserver(db_path) or DEFAULT_KEYSERVER


@dataclass
class KeyserverRequest:
    """Parsed gpgks arguments."""

    numbered: bool = False
    plain: bool = False
    quiet: bool = False
    numbers: List[int] = field(default_factory=list)


def parse_keyserver_arguments(
    tokens: Sequence[str],
    keyservers: Sequence[str] = KEYSERVERS
) -> KeyserverRequest:
    """
    Interpret gpgks arguments.

    Accepts l/list/-l/--list, a/all/-a/--all, q/quiet/-q/--quiet and
    1-based keyserver numbers, in any order. No argument means list.

    Raises:
        UsageError: For unknown words or numbers outside 1..len(keyservers).
    """
    request = KeyserverRequest(numbered=not tokens)

    for token in tokens:
        if LIST_PATTERN.match(token):
            request.numbered = True
        elif ALL_PATTERN.match(token):
            request.plain = True
        elif QUIET_PATTERN.match(token):
            request.quiet = True
        elif not NUMBER_PATTERN.match(token):
            raise UsageError(f'Invalid parameter "{token}" (not a number).')
        else:
            number = int(token)
            if number < 1 or number > len(keyservers):
                raise UsageError(
                    f"Number {number} is out of range. "
                    f"Choose a value between 1 and {len(keyservers)}."
                )
            request.numbers.append(number)

    return request


def print_numbered(keyservers: Sequence[str] = KEYSERVERS) -> None:
    """Print keyservers numbered from 1."""
    for i, server in enumerate(keyservers, 1):
        console.print(f"[bold cyan]{i}: [underline]{server}[/underline][/bold cyan]")


def gpgks(
    tokens: Sequence[str],
    keyservers: Sequence[str] = KEYSERVERS,
    db_path: Optional[Path] = None
) -> Optional[str]:
    """
    List keyservers or select one.

    When numbers are given the last one becomes the active keyserver and
    every selected keyserver is printed unless quiet was requested.

    Returns:
        The newly selected keyserver, or None when only listing.
    """
    request = parse_keyserver_arguments(tokens, keyservers)

    if request.numbered:
        print_numbered(keyservers)
        return None

    if request.plain:
        console.print_list(keyservers)
        return None

    if not request.numbers:
        # Only -q given: nothing to select
        return None

    selected = keyservers[request.numbers[-1] - 1]
    save_keyserver(selected, db_path)
    if not request.quiet:
        console.print_list(keyservers[number - 1] for number in request.numbers)
    return selected


def choose_keyserver(
    keyservers: Sequence[str] = KEYSERVERS,
    db_path: Optional[Path] = None
) -> Optional[str]:
    """
    Interactive menu to change the active keyserver.

    Returns:
        The new keyserver, or None if the user cancelled.

    Raises:
        UsageError: If the answer is not a number in range.
    """
    console.print("[bold green]0: [/bold green][dim green](Cancel)[/dim green]")
    for i, server in enumerate(keyservers, 1):
        console.print(f"[bold green]{i}: [/bold green][dim green]{server}[/dim green]")

    answer = console.input("\n[bold green]Which keyserver to use?: [/bold green]")
    if not NUMBER_PATTERN.match(answer.strip()):
        raise UsageError(f"Selection '{answer.strip()}' is not a number.")

    number = validate_number_selection(answer, keyservers)
    if number is None:
        raise UsageError(f"Selection '{answer.strip()}' is out of bounds.")

    if number == 0:
        console.print(
            f"[bold green]Keyserver remains as: [underline]{current_keyserver(db_path)}[/underline][/bold green]"
        )
        return None

    selected = keyservers[number - 1]
    save_keyserver(selected, db_path)
    console.print(
        f"[bold green]New keyserver for session: [underline]{selected}[/underline][/bold green]"
    )
    return selected


def export_line(keyserver: str) -> str:
    """Shell line that exports keyserver, for `eval "$(shellkit gpgks --export)"`."""
    return f"export KEYSERVER='{keyserver}'"
