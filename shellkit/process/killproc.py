"""Kill every process with a given name, escalating through a signal list."""

import os
import re
import signal
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from loguru import logger

from shellkit.config.settings import (
    PROC_SIGNALS,
    KILLPROC_SIGNAL_DELAY,
    killproc_default_signals,
)
from shellkit.exceptions import UsageError, ValidationError
from shellkit.process.pids import get_pids
from shellkit.ui.console import console

UID_PATTERN = re.compile(r'^[0-9]+$')
SIGNAL_LIST_PATTERN = re.compile(r'^([A-Z]+,)*[A-Z]+$')
PROCESS_NAME_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


@dataclass
class KillPlan:
    """
    What killproc should do.

    Attributes:
        process_name: Exact command name to match.
        uid: Restrict to processes of this UID (None for every user).
        signals: Signal names to send, in order.
    """

    process_name: str
    uid: Optional[int] = None
    signals: List[str] = field(default_factory=list)


@dataclass
class SignalAttempt:
    """Outcome of sending one signal to every matching process."""

    signal: str
    targeted: int
    remaining: int

    @property
    def terminated(self) -> int:
        return max(self.targeted - self.remaining, 0)


@dataclass
class KillReport:
    """Summary of a killproc run."""

    attempts: List[SignalAttempt] = field(default_factory=list)
    initial_pids: List[int] = field(default_factory=list)
    remaining_pids: List[int] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.remaining_pids


def _apply_exclusions(token: str, signals: List[str]) -> List[str]:
    """Remove each '-SIG' entry of a comma separated token from signals."""
    signals = list(signals)
    for entry in token.split(','):
        if not entry.startswith('-'):
            raise UsageError("Signals in exclude list must all start with a dash.")
        name = entry[1:]
        if name not in signals:
            raise UsageError(
                f"Specified signal to exclude is not in default signals: {name}"
            )
        signals.remove(name)
    return signals


def _parse_signal_list(token: str) -> List[str]:
    """Validate a comma separated signal list that replaces the defaults."""
    signals = []
    for name in token.split(','):
        if name not in PROC_SIGNALS:
            raise UsageError(
                f'Invalid signal "{name}"; See "kill -l" for a list of allowed values.'
            )
        signals.append(name)
    return signals


def parse_kill_arguments(
    tokens: Sequence[str],
    default_signals: Optional[Iterable[str]] = None
) -> KillPlan:
    """
    Interpret killproc's free-form arguments.

    Tokens are read left to right, so a later signal list replaces any
    earlier exclusion and vice versa:

    - digits only: UID
    - starting with '-': comma separated signals to drop from the list
    - upper-case comma separated words: signal list replacing the defaults
    - anything else made of [A-Za-z0-9_-]: the process name

    Args:
        tokens: Raw arguments.
        default_signals: Starting signal list (configured defaults if None).

    Returns:
        The resulting KillPlan.

    Raises:
        UsageError: On any malformed token or a missing process name.
    """
    if default_signals is None:
        default_signals = killproc_default_signals()
    signals = list(default_signals)
    uid: Optional[int] = None
    process_name = ""

    for token in tokens:
        if UID_PATTERN.match(token):
            uid = int(token)
        elif token.startswith('-'):
            signals = _apply_exclusions(token, signals)
        elif SIGNAL_LIST_PATTERN.match(token):
            signals = _parse_signal_list(token)
        elif PROCESS_NAME_PATTERN.match(token):
            process_name = token
        else:
            raise UsageError(f'Invalid argument "{token}" - Not a valid process name.')

    if not process_name:
        raise UsageError(
            "Process name was not provided. Usage: killproc [PROCESS_NAME] ([UID]) ([SIGNALS..])"
        )

    return KillPlan(process_name=process_name, uid=uid, signals=signals)


def resolve_signal(name: str) -> signal.Signals:
    """
    Map a signal name without the SIG prefix to the platform's signal.

    Raises:
        ValidationError: If this platform has no such signal.
    """
    try:
        return signal.Signals[f"SIG{name}"]
    except KeyError:
        raise ValidationError(f"Signal {name} is not available on this platform") from None


def send_signal(pid: int, sig: signal.Signals) -> None:
    """Send sig to pid, ignoring processes that already exited."""
    try:
        os.kill(pid, sig)
    except ProcessLookupError:
        logger.debug(f"Process {pid} exited before receiving {sig.name}")
    except PermissionError:
        console.print_warning(f"Not permitted to send {sig.name} to process {pid}")


def kill_processes(
    plan: KillPlan,
    delay: float = KILLPROC_SIGNAL_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> KillReport:
    """
    Send each signal of the plan to every matching process until none remain.

    After each signal the processes get `delay` seconds to exit before the
    PIDs are looked up again. Signals left in the plan once every process
    is gone are not sent.

    Args:
        plan: Process name, optional UID and signals to use.
        delay: Seconds to wait after each signal.
        sleep: Sleep function (replaced in tests).

    Returns:
        KillReport describing each signal round and the survivors.
    """
    report = KillReport()
    pids = get_pids(plan.process_name, plan.uid)
    report.initial_pids = list(pids)

    if not pids:
        logger.info(f"No '{plan.process_name}' processes found")
        console.print_info(f'No processes named "{plan.process_name}" found.')
        return report

    for name in plan.signals:
        if not pids:
            break

        sig = resolve_signal(name)
        console.separator()
        console.print(f"[dim green]Next signal: [/dim green][bold green]{name}[/bold green]")
        console.print(f"[dim green]Processes found: [/dim green][bold green]{len(pids)}[/bold green]")
        console.print(
            f"[italic green]  >> kill -s {name} {{{', '.join(str(pid) for pid in pids)}}}[/italic green]"
        )

        for pid in pids:
            send_signal(pid, sig)

        sleep(delay)

        remaining = get_pids(plan.process_name, plan.uid)
        attempt = SignalAttempt(signal=name, targeted=len(pids), remaining=len(remaining))
        report.attempts.append(attempt)
        logger.debug(f"{name}: {attempt.terminated}/{attempt.targeted} terminated")

        console.print(
            f"[dim green]Processes terminated with signal [/dim green]"
            f"[bold green]{name}: {attempt.terminated}/{attempt.targeted}[/bold green]"
        )
        console.print(
            f"[dim green]Processes still remaining: [/dim green]"
            f"[bold green]{attempt.remaining}[/bold green]\n"
        )
        pids = remaining

    console.separator()

    report.remaining_pids = get_pids(plan.process_name, plan.uid)
    if report.remaining_pids:
        console.print_error(
            f'Failed to kill all "{plan.process_name}" processes; '
            f"Remaining {len(report.remaining_pids)} PIDs:"
        )
        for pid in report.remaining_pids:
            console.print(f"\t[red]{pid}[/red]")
    else:
        console.print_success(f'All "{plan.process_name}" processes terminated.')

    return report


def killproc(tokens: Sequence[str]) -> KillReport:
    """Parse killproc arguments and run the kill loop."""
    plan = parse_kill_arguments(tokens)
    logger.info(
        f"killproc {plan.process_name} uid={plan.uid} signals={','.join(plan.signals)}"
    )
    return kill_processes(plan)
