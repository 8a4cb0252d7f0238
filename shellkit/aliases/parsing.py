"""Parsing of zsh `alias` listings and git alias configuration."""

import shlex
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from loguru import logger

from shellkit.exceptions import ToolNotFoundError
from shellkit.utils.commands import capture_lines


def _unquote(raw: str) -> str:
    try:
        return " ".join(shlex.split(raw))
    except ValueError:
        return raw


def split_definition(line: str) -> Optional[Tuple[str, str]]:
    """
    Split one `alias` output line into (name, value).

    zsh prints `name=value`, single-quoting either side when needed, e.g.
    `ll='ls -l'` or `'-'='cd -'`.

    Returns:
        (name, value) or None for lines without '='.
    """
    line = line.rstrip("\n")
    if line.startswith("'"):
        closing = line.find("'=", 1)
        if closing == -1:
            return None
        name, raw_value = line[1:closing], line[closing + 2:]
    else:
        if "=" not in line:
            return None
        name, raw_value = line.split("=", 1)
    name = name.strip()
    if not name:
        return None
    return name, _unquote(raw_value)


def parse_alias_definitions(lines: Iterable[str]) -> Dict[str, str]:
    """Parse `alias` or `alias -g` output into a name -> value mapping."""
    aliases = {}
    for line in lines:
        if not line.strip():
            continue
        parsed = split_definition(line)
        if parsed is None:
            logger.debug(f"Ignoring alias line: {line!r}")
            continue
        name, value = parsed
        aliases[name] = value
    return aliases


def load_alias_file(path: Optional[Path]) -> Dict[str, str]:
    """Read alias definitions from a file (or a /dev/fd process substitution)."""
    if path is None:
        return {}
    with open(path, encoding="utf-8", errors="replace") as f:
        return parse_alias_definitions(f)


def parse_git_aliases(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse `git config --get-regexp '^alias\\..+$'` output.

    Each line is `alias.NAME VALUE`.
    """
    aliases = {}
    for line in lines:
        line = line.strip()
        if not line:
            continue
        key, _, value = line.partition(" ")
        if key.startswith("alias."):
            key = key[len("alias."):]
        aliases[key] = value.strip()
    return aliases


def load_git_aliases() -> Dict[str, str]:
    """Git aliases of the current repository/user, empty without git."""
    try:
        lines = capture_lines(["git", "config", "--get-regexp", r"^alias\..+$"])
    except ToolNotFoundError:
        logger.debug("git not installed; no git aliases")
        return {}
    return dict(sorted(parse_git_aliases(lines).items()))
