"""Configuration settings and constants for the shellkit package."""

import os
from pathlib import Path
from typing import Dict, List, Tuple

# Signals accepted by kill/pkill (output of `kill -l` minus the entries
# neither tool accepts).
PROC_SIGNALS: Tuple[str, ...] = (
    "HUP", "INT", "QUIT", "ILL", "TRAP", "IOT", "BUS", "FPE", "KILL", "USR1",
    "SEGV", "USR2", "PIPE", "ALRM", "TERM", "STKFLT", "CHLD", "CONT", "STOP",
    "TSTP", "TTIN", "TTOU", "URG", "XCPU", "XFSZ", "VTALRM", "PROF", "WINCH",
    "POLL", "PWR", "SYS",
)

# Signals tried by killproc, in order
KILLPROC_DEFAULT_SIGNALS: Tuple[str, ...] = ("KILL", "TERM", "HUP", "QUIT")

# Seconds to wait between a signal and the PID rescan
KILLPROC_SIGNAL_DELAY: float = 0.5

# GPG keyservers selectable with `gpgks`
KEYSERVERS: Tuple[str, ...] = (
    "hkps://keyserver.pgp.com:443",
    "hkps://pgpkeys.eu:443",
    "hkps://pgp.mit.edu:443",
    "hkps://keys.openpgp.org:443",
    "hkps://keyserver.ubuntu.com:443",
)

DEFAULT_KEYSERVER = "hkps://hkps.pool.sks-keyservers.net:443"

# Video collection
VIDEO_EXTENSIONS: Tuple[str, ...] = (
    "mp4", "mov", "wmv", "avi", "flv", "swf", "mkv", "webm"
)
PREVIEW_EXTENSION = "jpg"

# Rated sub-directories of a collection root
TIER_VIP = ".vip"
TIER_FAVOURITES = ".fav"
TIER_BOOKMARKS = ".lib"
TIER_ARCHIVE = ".del"
TIERS: Tuple[str, ...] = (TIER_VIP, TIER_FAVOURITES, TIER_BOOKMARKS, TIER_ARCHIVE)

# Sub-directories scanned in addition to the collection root
CATEGORY_SUBDIRS: Tuple[str, ...] = TIERS + (".jav",)

TIER_LABELS: Dict[str, str] = {
    TIER_VIP: "VIP collection",
    TIER_FAVOURITES: "favourites",
    TIER_BOOKMARKS: "bookmarks",
    TIER_ARCHIVE: "archive",
}

# Error codes reported when a tier directory cannot be written to
TIER_ERROR_CODES: Dict[str, int] = {
    TIER_VIP: 37,
    TIER_FAVOURITES: 24,
    TIER_BOOKMARKS: 36,
    TIER_ARCHIVE: 37,
}

ROOT_SCAN_DEPTH: int = 6
CATEGORY_SCAN_DEPTH: int = 5

# Preview dialog geometry
PREVIEW_WIDTH: int = 1920
PREVIEW_HEIGHT: int = 1080

MPV_ARGS: List[str] = ["--pause"]

# Alias reminder
YSU_MODES: Tuple[str, ...] = ("BESTMATCH", "ALL")
YSU_POSITIONS: Tuple[str, ...] = ("before", "after")
# argparse usage errors exit 2, so the hook watches for a distinct status
YSU_HARDCORE_EXIT_CODE: int = 3

# Width of the separator lines printed by killproc and gpgkeys
SEPARATOR_WIDTH: int = 80

# Persistent state
APP_STATE_TABLE = "app_state"
KEYSERVER_STATE_KEY = "keyserver"


def _cache_dir() -> Path:
    base = os.getenv("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / "shellkit"


def default_state_db() -> Path:
    """Return the SQLite state database path (SHELLKIT_STATE_DB overrides)."""
    override = os.getenv("SHELLKIT_STATE_DB")
    if override:
        return Path(override)
    return _cache_dir() / "state.db"


def default_log_file() -> Path:
    """Return the log file path (SHELLKIT_LOG_FILE overrides)."""
    override = os.getenv("SHELLKIT_LOG_FILE")
    if override:
        return Path(override)
    return _cache_dir() / "shellkit.log"


def env_list(name: str) -> List[str]:
    """
    Read a comma or whitespace separated list from an environment variable.

    Args:
        name: Environment variable name.

    Returns:
        List of non-empty entries (empty if unset).
    """
    raw = os.getenv(name, "")
    return [item for item in raw.replace(",", " ").split() if item]


def killproc_default_signals() -> Tuple[str, ...]:
    """Default killproc signals, overridable with KILLPROC_DEFAULT_SIGNALS."""
    configured = env_list("KILLPROC_DEFAULT_SIGNALS")
    return tuple(configured) if configured else KILLPROC_DEFAULT_SIGNALS
