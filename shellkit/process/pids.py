"""Process lookup with pgrep."""

from typing import List, Optional

from loguru import logger

from shellkit.exceptions import CommandError
from shellkit.utils.commands import run_command

# pgrep exit status when no process matched
PGREP_NO_MATCH = 1


def get_pids(process_name: str, uid: Optional[int] = None) -> List[int]:
    """
    Find PIDs whose command name is exactly process_name.

    Args:
        process_name: Command name passed to `pgrep -x`.
        uid: Only match processes owned by this UID when greater than 0.

    Returns:
        Matching PIDs, in pgrep order.

    Raises:
        CommandError: If pgrep fails for another reason than "no match".
    """
    args = ["pgrep"]
    if uid is not None and uid > 0:
        args += ["-u", str(uid)]
    args += ["-x", process_name]

    result = run_command(args, capture=True)
    if result.returncode == PGREP_NO_MATCH:
        return []
    if result.returncode != 0:
        raise CommandError(
            f"pgrep failed ({result.returncode}): {result.stderr.strip()}"
        )

    pids = []
    for line in result.stdout.split():
        try:
            pids.append(int(line))
        except ValueError:
            logger.debug(f"Ignoring unexpected pgrep output: {line!r}")
    return pids
