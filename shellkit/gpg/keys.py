"""Key listing shortcuts (gpgkeys)."""

import os
from typing import List, Optional

from shellkit.config.settings import SEPARATOR_WIDTH
from shellkit.ui.console import console
from shellkit.utils.commands import run_command


def build_list_command(
    secret: bool = False,
    long_ids: bool = False,
    identity: Optional[str] = None
) -> List[str]:
    """
    Build a gpg key listing command.

    Args:
        secret: List secret keys instead of public keys.
        long_ids: Use long key IDs.
        identity: Only list keys matching this user ID or email.
    """
    command = [
        "gpg",
        "--list-secret-keys" if secret else "--list-public-keys",
        "--keyid-format", "long" if long_ids else "short",
    ]
    if identity:
        command.append(identity)
    return command


def section_header(title: str) -> str:
    """'-------- Title' padded with dashes to the separator width."""
    head = f"-------- {title}"
    return head + "-" * max(SEPARATOR_WIDTH - len(head), 0)


def default_identity() -> Optional[str]:
    """Identity from GPG_IDENTITY, if set."""
    return os.getenv("GPG_IDENTITY") or None


def list_keys(
    secret: bool = False,
    long_ids: bool = False,
    identity: Optional[str] = None,
    both: bool = False
) -> int:
    """
    List keys, or public and secret keys under separate headers.

    Returns:
        Exit status of the last gpg call (first failure when both).
    """
    identity = identity or default_identity()

    if not both:
        return run_command(build_list_command(secret, long_ids, identity)).returncode

    status = 0
    console.print_plain("")
    for title, is_secret in (("Public", False), ("Secret", True)):
        console.print_plain(section_header(title))
        returncode = run_command(build_list_command(is_secret, long_ids, identity)).returncode
        status = status or returncode
    return status
