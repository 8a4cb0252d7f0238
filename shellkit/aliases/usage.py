"""Alias usage statistics from the shell history file."""

import os
import re
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from loguru import logger
from tqdm import tqdm

from shellkit.exceptions import ValidationError

# Separators between the commands of one history line
COMMAND_SEPARATORS = re.compile(r'\|\|?|&&|;')


@dataclass(frozen=True)
class AliasUsage:
    """How many times an alias was used."""

    name: str
    value: str
    count: int

    def __str__(self) -> str:
        return f"{self.count}: {self.name}='{self.value}'"


def history_path(explicit: Optional[Path] = None) -> Path:
    """
    History file to analyse: the explicit path, else $HISTFILE.

    Raises:
        ValidationError: If neither is available or the file is missing.
    """
    if explicit is None:
        histfile = os.getenv("HISTFILE")
        if not histfile:
            raise ValidationError("HISTFILE is not set; pass --histfile")
        explicit = Path(histfile)
    explicit = explicit.expanduser()
    if not explicit.is_file():
        raise ValidationError(f"History file not found: {explicit}")
    return explicit


def read_history(path: Path, limit: Optional[int] = None) -> List[str]:
    """Read the history file, keeping only the last `limit` lines if given."""
    with open(path, encoding="utf-8", errors="replace") as f:
        if limit is None:
            return f.read().splitlines()
        return list(deque((line.rstrip("\n") for line in f), maxlen=limit))


def command_of(line: str) -> str:
    """Strip the `: <timestamp>:<duration>;` prefix of zsh extended history."""
    if line.startswith(": ") and ";" in line:
        return line.split(";", 1)[1]
    return line


def first_words(line: str) -> List[str]:
    """First word of each command of a history line."""
    words = []
    for entry in COMMAND_SEPARATORS.split(command_of(line)):
        parts = entry.split()
        if parts:
            words.append(parts[0])
    return words


def count_alias_usage(
    lines: Iterable[str],
    aliases: Mapping[str, str],
    show_progress: bool = True,
    total: Optional[int] = None,
) -> List[AliasUsage]:
    """
    Count how often each alias starts a command.

    Only the first word of each command counts, since that is the only
    place a regular alias expands.

    Returns:
        Usage of every alias, most used first (ties by name).
    """
    counts = {name: 0 for name in aliases}
    for line in tqdm(lines, desc="Analysing", total=total, disable=not show_progress, leave=False):
        for word in first_words(line):
            if word in counts:
                counts[word] += 1

    usage = [AliasUsage(name, aliases[name], count) for name, count in counts.items()]
    usage.sort(key=lambda item: (-item.count, item.name))
    logger.debug(f"Counted usage of {len(usage)} aliases")
    return usage


def alias_usage(
    aliases: Mapping[str, str],
    histfile: Optional[Path] = None,
    limit: Optional[int] = None,
    show_progress: bool = True,
) -> List[AliasUsage]:
    """Read the history file and count alias usage."""
    path = history_path(histfile)
    lines = read_history(path, limit)
    logger.info(f"Analysing {len(lines)} history lines from {path}")
    return count_alias_usage(lines, aliases, show_progress, total=len(lines))
