"""Rated sub-directories of a video collection."""

import os
from pathlib import Path
from typing import Dict

from loguru import logger

from shellkit.config.settings import TIERS, TIER_LABELS, TIER_ERROR_CODES
from shellkit.exceptions import CollectionError
from shellkit.library.discovery import VideoEntry
from shellkit.ui.console import console


def ensure_tier_dirs(root: Path, dry_run: bool = False) -> Dict[str, Path]:
    """
    Make sure every tier directory exists under root.

    Args:
        root: Collection root.
        dry_run: Only report the directories that would be created.

    Returns:
        Mapping of tier name to its directory.

    Raises:
        CollectionError: 12 if a directory cannot be created, 13 if the
            path exists but is not a directory, 14 if it is unreadable.
    """
    tier_dirs = {}
    for tier in TIERS:
        path = root / tier
        tier_dirs[tier] = path

        if not path.exists():
            if dry_run:
                console.print_simulation(f"Create {path}")
                continue
            try:
                path.mkdir()
            except OSError as e:
                raise CollectionError(f"{path} (Unable to create directory: {e})", exit_code=12) from e
            logger.info(f"Created tier directory {path}")
            console.print_message(str(path))
        elif not path.is_dir():
            raise CollectionError(f"{path} (Path doesn't point to a directory)", exit_code=13)
        elif not os.access(path, os.R_OK):
            raise CollectionError(f"{path} (Directory is unreadable)", exit_code=14)

    return tier_dirs


def tier_dir_for(entry: VideoEntry, tier: str) -> Path:
    """Directory a video is moved to when rated with tier."""
    return entry.root / tier


def check_tier_writable(path: Path, tier: str, dry_run: bool = False) -> None:
    """
    Ensure a tier directory can receive files.

    In dry-run a missing directory is accepted: ensure_tier_dirs only
    reported that it would be created.

    Raises:
        CollectionError: With the tier's error code.
    """
    if dry_run and not path.exists():
        return
    if not path.is_dir() or not os.access(path, os.W_OK):
        label = TIER_LABELS[tier].capitalize()
        raise CollectionError(
            f"{label} directory not found or not writable: {path}",
            exit_code=TIER_ERROR_CODES[tier],
        )
