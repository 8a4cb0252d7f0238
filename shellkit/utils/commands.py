"""Helpers for running the external binaries every command wraps."""

import shutil
import subprocess
from pathlib import Path
from typing import List, Sequence, Union

from loguru import logger

from shellkit.exceptions import CommandError, ToolNotFoundError

Arg = Union[str, Path]


def require_tool(name: str) -> str:
    """
    Locate an external binary on PATH.

    Args:
        name: Binary name, e.g. 'gpg'.

    Returns:
        Absolute path of the binary.

    Raises:
        ToolNotFoundError: If the binary is not installed.
    """
    path = shutil.which(name)
    if path is None:
        raise ToolNotFoundError(f"Required command '{name}' not found on PATH")
    return path


def _stringify(args: Sequence[Arg]) -> List[str]:
    return [str(arg) for arg in args]


def run_command(args: Sequence[Arg], capture: bool = False) -> subprocess.CompletedProcess:
    """
    Run a command in the foreground and return its completed process.

    The exit status is returned as-is; callers decide what a non-zero
    status means for the tool they wrap.

    Args:
        args: Command and arguments; the first item is looked up on PATH.
        capture: If True, capture stdout/stderr as text.

    Returns:
        CompletedProcess from subprocess.run.

    Raises:
        ToolNotFoundError: If the binary is missing.
        CommandError: If the binary cannot be executed.
    """
    argv = _stringify(args)
    require_tool(argv[0])
    logger.debug(f"Running: {' '.join(argv)}")
    try:
        return subprocess.run(
            argv,
            capture_output=capture,
            text=capture,
            check=False,
        )
    except OSError as e:
        raise CommandError(f"Unable to run {argv[0]}: {e}") from e


def capture_lines(args: Sequence[Arg]) -> List[str]:
    """Run a command and return the non-empty lines of its stdout."""
    result = run_command(args, capture=True)
    return [line for line in result.stdout.splitlines() if line.strip()]


def spawn_detached(args: Sequence[Arg]) -> subprocess.Popen:
    """
    Launch a command in the background, detached from the terminal.

    Output is discarded and the child gets its own session, so closing
    the terminal does not take it down.

    Args:
        args: Command and arguments.

    Returns:
        The Popen handle (never waited on).
    """
    argv = _stringify(args)
    require_tool(argv[0])
    logger.debug(f"Spawning: {' '.join(argv)}")
    try:
        return subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise CommandError(f"Unable to start {argv[0]}: {e}") from e
