"""Configuration and CLI handling."""

from shellkit.config.settings import (
    PROC_SIGNALS,
    KILLPROC_DEFAULT_SIGNALS,
    KEYSERVERS,
    DEFAULT_KEYSERVER,
    VIDEO_EXTENSIONS,
    TIERS,
    CATEGORY_SUBDIRS,
    default_state_db,
    default_log_file,
)
from shellkit.config.context import (
    ExecutionContext,
    get_context,
    set_context,
    execution_context,
)
from shellkit.config.cli import (
    create_parser,
    parse_arguments,
    protect_free_form_args,
)

__all__ = [
    "PROC_SIGNALS",
    "KILLPROC_DEFAULT_SIGNALS",
    "KEYSERVERS",
    "DEFAULT_KEYSERVER",
    "VIDEO_EXTENSIONS",
    "TIERS",
    "CATEGORY_SUBDIRS",
    "default_state_db",
    "default_log_file",
    "ExecutionContext",
    "get_context",
    "set_context",
    "execution_context",
    "create_parser",
    "parse_arguments",
    "protect_free_form_args",
]
