"""Shell alias reminders and usage statistics."""

from shellkit.aliases.parsing import (
    split_definition,
    parse_alias_definitions,
    load_alias_file,
    parse_git_aliases,
    load_git_aliases,
)
from shellkit.aliases.reminder import (
    AliasMatch,
    ReminderConfig,
    ReminderResult,
    check_aliases,
    check_global_aliases,
    check_git_aliases,
    find_reminders,
    format_matches,
    print_reminders,
)
from shellkit.aliases.usage import (
    AliasUsage,
    command_of,
    first_words,
    count_alias_usage,
    alias_usage,
)
from shellkit.aliases.hooks import render_zsh_hook

__all__ = [
    "split_definition",
    "parse_alias_definitions",
    "load_alias_file",
    "parse_git_aliases",
    "load_git_aliases",
    "AliasMatch",
    "ReminderConfig",
    "ReminderResult",
    "check_aliases",
    "check_global_aliases",
    "check_git_aliases",
    "find_reminders",
    "format_matches",
    "print_reminders",
    "AliasUsage",
    "command_of",
    "first_words",
    "count_alias_usage",
    "alias_usage",
    "render_zsh_hook",
]
