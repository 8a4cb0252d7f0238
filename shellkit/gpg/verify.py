"""GPG signature verification (gpgverify)."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from shellkit.exceptions import UsageError, ValidationError
from shellkit.gpg.keyservers import current_keyserver
from shellkit.ui.console import console
from shellkit.ui.confirmations import ask_yes_no
from shellkit.utils.commands import run_command

SIGNATURE_SUFFIX = ".sig"

KEYSERVER_URL_PATTERN = re.compile(r'(https?|hkps?|ftp|file)://')
ANY_URL_PATTERN = re.compile(r'^[a-zA-Z-]+://')


@dataclass
class VerifyTarget:
    """
    A file, its detached signature and the keyserver to fetch keys from.

    Attributes:
        file: Signed file.
        signature: Detached signature file.
        keyserver: Keyserver URL.
        use_sudo: Run gpg through sudo to read an unreadable file.
    """

    file: Path
    signature: Path
    keyserver: str
    use_sudo: bool = False


def split_keyserver(args: Sequence[str]) -> Tuple[Optional[str], List[str]]:
    """
    Take a keyserver URL off the front of the arguments.

    Returns:
        (keyserver or None, remaining arguments).

    Raises:
        UsageError: If the first argument looks like a URL with an
            unsupported scheme.
    """
    args = list(args)
    if not args:
        return None, args
    first = args[0]
    if KEYSERVER_URL_PATTERN.search(first):
        return first, args[1:]
    if ANY_URL_PATTERN.match(first):
        raise UsageError(f'Keyserver URL is malformed (prefix): "{first}"')
    return None, args


def resolve_targets(args: Sequence[str]) -> Tuple[Path, Path]:
    """
    Work out the signed file and its signature.

    Two arguments are (file, signature). A single argument ending in .sig
    is the signature of the same name without the suffix; any other single
    argument is the file, with the signature next to it.

    Raises:
        UsageError: If no file was given.
    """
    if not args:
        raise UsageError("No file to verify. Usage: gpgverify ([KEYSERVER]) [FILE/SIG] ([SIG])")
    if len(args) >= 2:
        return Path(args[0]), Path(args[1])
    single = args[0]
    if single.endswith(SIGNATURE_SUFFIX):
        return Path(single[:-len(SIGNATURE_SUFFIX)]), Path(single)
    return Path(single), Path(single + SIGNATURE_SUFFIX)


def check_readable(path: Path) -> bool:
    """
    Ensure path is an existing regular file.

    Returns:
        True if the file is readable, False if it needs sudo to be read.

    Raises:
        ValidationError: If the file is missing or not a regular file.
    """
    if not path.exists():
        raise ValidationError(f'File not found: "{path}"')
    if not path.is_file():
        raise ValidationError(f'File is not a regular file: "{path}"')
    return os.access(path, os.R_OK)


def build_verify_command(target: VerifyTarget) -> List[str]:
    """Build the gpg command line for target."""
    command = [
        "gpg",
        "--keyserver", target.keyserver,
        "--keyserver-options", "auto-key-retrieve",
        "--verify", str(target.signature), str(target.file),
    ]
    if target.use_sudo:
        command.insert(0, "sudo")
    return command


def prepare_target(args: Sequence[str]) -> VerifyTarget:
    """Parse gpgverify arguments into a target, without touching the files."""
    keyserver, rest = split_keyserver(args)
    file, signature = resolve_targets(rest)
    return VerifyTarget(
        file=file,
        signature=signature,
        keyserver=keyserver or current_keyserver(),
    )


def gpgverify(args: Sequence[str]) -> int:
    """
    Verify a detached signature, fetching the signer's key automatically.

    Args:
        args: ([KEYSERVER]) [FILE/SIG] ([SIG]).

    Returns:
        gpg's exit status.
    """
    target = prepare_target(args)

    console.print(
        f"[bold blue]Checking file: [italic underline]{target.file}[/italic underline]\n"
        f"Signature file: [italic underline]{target.signature}[/italic underline]\n"
        f"Keyserver: [italic underline]{target.keyserver}[/italic underline][/bold blue]\n"
    )

    for path in (target.file, target.signature):
        if check_readable(path):
            continue
        if not ask_yes_no(f'File is unreadable: "{path}"\n\tWould you like to read it using sudo?', default=True):
            raise ValidationError(f"Cannot read file: {path}")
        target.use_sudo = True

    console.print_info("Verifying file..")
    command = build_verify_command(target)
    logger.info(f"Verifying {target.file} with {target.signature} via {target.keyserver}")
    result = run_command(command)
    return result.returncode
