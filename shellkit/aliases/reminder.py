"""Remind the user of aliases they could have typed ("you should use")."""

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger
from rich.markup import escape

from shellkit.config.settings import YSU_MODES, YSU_POSITIONS
from shellkit.ui.console import console

KIND_ALIAS = "alias"
KIND_GLOBAL = "global alias"
KIND_GIT = "git alias"

HARDCORE_MESSAGE = "You Should Use hardcore mode enabled. Use your aliases!"


@dataclass(frozen=True)
class AliasMatch:
    """
    An alias that could replace part of the typed command.

    Attributes:
        kind: "alias", "global alias" or "git alias".
        value: What the alias expands to.
        alias: What the user could have typed.
    """

    kind: str
    value: str
    alias: str


@dataclass
class ReminderConfig:
    """Settings read from the YSU_* environment variables."""

    mode: str = "BESTMATCH"
    ignored_aliases: Tuple[str, ...] = ()
    ignored_global_aliases: Tuple[str, ...] = ()
    hardcore: bool = False
    position: str = "before"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReminderConfig":
        environ = os.environ if environ is None else environ

        mode = environ.get("YSU_MODE", "") or "BESTMATCH"
        position = environ.get("YSU_MESSAGE_POSITION", "") or "before"
        if position not in YSU_POSITIONS:
            console.print_warning(
                f"Unknown value for YSU_MESSAGE_POSITION '{position}'. "
                "Expected value 'before' or 'after'"
            )
            position = "before"

        return cls(
            mode=mode,
            ignored_aliases=tuple(environ.get("YSU_IGNORED_ALIASES", "").split()),
            ignored_global_aliases=tuple(environ.get("YSU_IGNORED_GLOBAL_ALIASES", "").split()),
            hardcore=environ.get("YSU_HARDCORE", "") == "1",
            position=position,
        )


@dataclass
class ReminderResult:
    """Suggestions for one command line."""

    matches: List[AliasMatch] = field(default_factory=list)
    found: bool = False
    hardcore: bool = False

    @property
    def blocked(self) -> bool:
        return self.hardcore and self.found


def _is_sudo(typed: str) -> bool:
    return typed.startswith("sudo ")


def _starts_with_command(typed: str, command: str) -> bool:
    return typed == command or typed.startswith(command + " ")


def check_aliases(
    typed: str,
    aliases: Mapping[str, str],
    config: ReminderConfig,
) -> Tuple[List[AliasMatch], bool]:
    """
    Find regular aliases whose expansion starts the typed command.

    An alias only counts when it is shorter than what it expands to. In
    BESTMATCH mode the alias covering the longest part of the command is
    suggested (shortest name on a tie) unless the user already typed it;
    in ALL mode every matching alias is suggested, sorted by name.

    Returns:
        (suggestions, whether any alias matched).
    """
    if _is_sudo(typed):
        return [], False

    found: List[str] = []
    best_match = ""
    best_value = ""

    for key, value in aliases.items():
        if key in config.ignored_aliases:
            continue
        if not _starts_with_command(typed, value):
            continue
        if len(value) <= len(key):
            continue

        found.append(key)
        if len(value) > len(best_value):
            best_match, best_value = key, value
        elif len(value) == len(best_value) and len(key) < len(best_match):
            best_match, best_value = key, value

    if config.mode == "ALL":
        return [AliasMatch(KIND_ALIAS, aliases[key], key) for key in sorted(found)], bool(found)

    if config.mode not in YSU_MODES or not best_match:
        return [], bool(found)

    if _starts_with_command(typed, best_match):
        return [], False
    return [AliasMatch(KIND_ALIAS, best_value, best_match)], True


def check_global_aliases(
    typed: str,
    global_aliases: Mapping[str, str],
    config: ReminderConfig,
) -> Tuple[List[AliasMatch], bool]:
    """Find global aliases whose value appears as whole words in the command."""
    if _is_sudo(typed):
        return [], False

    matches = []
    for key, value in sorted(global_aliases.items()):
        key = key.strip()
        if key in config.ignored_global_aliases:
            continue
        if (
            f" {value} " in typed
            or typed.endswith(f" {value}")
            or typed.startswith(f"{value} ")
            or typed == value
        ):
            matches.append(AliasMatch(KIND_GLOBAL, value, key))
    return matches, bool(matches)


def check_git_aliases(
    typed: str,
    expanded: str,
    git_aliases: Mapping[str, str],
) -> Tuple[List[AliasMatch], bool]:
    """Find git aliases matching a `git ...` command."""
    if _is_sudo(typed) or not typed.startswith("git "):
        return [], False

    matches = []
    for key, value in sorted(git_aliases.items()):
        if _starts_with_command(expanded, f"git {value}"):
            matches.append(AliasMatch(KIND_GIT, value, f"git {key}"))
    return matches, bool(matches)


def find_reminders(
    typed: str,
    expanded: str,
    aliases: Mapping[str, str],
    global_aliases: Mapping[str, str],
    git_aliases: Callable[[], Dict[str, str]],
    config: Optional[ReminderConfig] = None,
) -> ReminderResult:
    """
    Run every alias check against one command line.

    Args:
        typed: Command line as typed.
        expanded: Command line after alias expansion.
        aliases: Regular aliases.
        global_aliases: Global aliases.
        git_aliases: Loader for git aliases, only called for git commands.
        config: Reminder settings (environment if None).
    """
    config = config or ReminderConfig.from_env()
    result = ReminderResult(hardcore=config.hardcore)

    checks = [
        lambda: check_aliases(typed, aliases, config),
        lambda: check_global_aliases(typed, global_aliases, config),
    ]
    if typed.startswith("git "):
        checks.append(lambda: check_git_aliases(typed, expanded, git_aliases()))

    for check in checks:
        matches, found = check()
        result.matches.extend(matches)
        result.found = result.found or found

    logger.debug(f"{len(result.matches)} alias suggestions for {typed!r}")
    return result


def format_matches(matches: Sequence[AliasMatch]) -> List[str]:
    """Plain text lines `KIND: VALUE -> ALIAS`, kinds right-aligned."""
    if not matches:
        return []
    width = max(len(match.kind) for match in matches)
    return [f"{match.kind:>{width}}: {match.value} -> {match.alias}" for match in matches]


def print_reminders(result: ReminderResult) -> None:
    """Print suggestions and, when blocking, the hardcore message."""
    if result.matches:
        console.print("[bold underline blue]Found aliases based on input command: [/bold underline blue]")
        for line in format_matches(result.matches):
            console.print(f"[bold blue]{escape(line)}[/bold blue]")
        console.print("")

    if result.blocked:
        console.print_error(HARDCORE_MESSAGE)
