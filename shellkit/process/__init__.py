"""Process management commands."""

from shellkit.process.pids import get_pids
from shellkit.process.killproc import (
    KillPlan,
    KillReport,
    SignalAttempt,
    parse_kill_arguments,
    resolve_signal,
    kill_processes,
    killproc,
)

__all__ = [
    "get_pids",
    "KillPlan",
    "KillReport",
    "SignalAttempt",
    "parse_kill_arguments",
    "resolve_signal",
    "kill_processes",
    "killproc",
]
