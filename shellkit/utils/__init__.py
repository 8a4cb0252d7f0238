"""Utility functions."""

from shellkit.utils.commands import (
    require_tool,
    run_command,
    capture_lines,
    spawn_detached,
)
from shellkit.utils.app_state import AppStateManager

__all__ = [
    "require_tool",
    "run_command",
    "capture_lines",
    "spawn_detached",
    "AppStateManager",
]
