"""File operations for moving, deleting and tidying collection files."""

import re
import shutil
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from shellkit.library.discovery import (
    find_empty_dirs,
    find_extra_files,
    find_videos,
    preview_path,
)
from shellkit.ui.console import console
from shellkit.ui.confirmations import ask_yes_no

Confirm = Callable[[str], bool]


def move_no_clobber(source: Path, dest_dir: Path, dry_run: bool = False) -> Optional[Path]:
    """
    Move source into dest_dir unless a file of the same name is already there.

    Args:
        source: File to move.
        dest_dir: Existing destination directory.
        dry_run: If True, only simulate the operation.

    Returns:
        The new path, or None if nothing was moved (missing source, existing
        destination or a failed move).
    """
    destination = dest_dir / source.name

    if not source.exists():
        logger.warning(f"Source file not found: {source}")
        return None

    if destination.exists():
        logger.warning(f"Destination exists, not overwriting: {destination}")
        console.print_warning(f"Not overwriting existing file: {destination}")
        return None

    if dry_run:
        console.print_simulation(f"Move: {source} -> {dest_dir}/")
        return destination

    try:
        shutil.move(str(source), str(destination))
    except OSError as e:
        logger.error(f"Error moving {source}: {e}")
        console.print_error(f"Unable to move {source}: {e}")
        return None
    logger.info(f"File moved: {source} -> {destination}")
    return destination


def move_with_preview(video: Path, dest_dir: Path, dry_run: bool = False) -> Path:
    """
    Move a video and its preview sheet into dest_dir.

    Returns:
        The video's path after the call (unchanged if it was not moved).
    """
    moved = move_no_clobber(video, dest_dir, dry_run)
    if moved is None:
        return video
    sheet = preview_path(video)
    if sheet.exists():
        move_no_clobber(sheet, dest_dir, dry_run)
    return moved


def delete_with_preview(video: Path, dry_run: bool = False) -> List[Path]:
    """
    Permanently delete a video and its preview sheet.

    Returns:
        Paths that were (or would be) removed. A path that cannot be
        deleted is reported and left out.
    """
    removed = []
    for path in (video, preview_path(video)):
        if not path.exists():
            continue
        if dry_run:
            console.print_simulation(f"Delete: {path}")
        else:
            try:
                path.unlink()
            except OSError as e:
                logger.error(f"Error deleting {path}: {e}")
                console.print_error(f"Unable to delete {path}: {e}")
                continue
            logger.info(f"Deleted {path}")
            console.print(f"removed '{path}'")
        removed.append(path)
    return removed


def flatten_name(relative: str) -> str:
    """
    Turn a relative path into a flat file name.

    " - " and dashes with a single adjacent space collapse to "-", runs of
    whitespace become "-" and path separators become "--".
    """
    name = relative.replace(" - ", "-")
    name = re.sub(r'(- | -)', '-', name)
    name = re.sub(r'\s+', '-', name)
    return name.replace('/', '--')


def flatten_videos(directory: Path, dry_run: bool = False) -> List[Path]:
    """
    Move every video below directory into directory itself.

    Each video is renamed after its relative path (see flatten_name) and
    its preview sheet follows under the matching name. Existing files are
    never overwritten.

    Returns:
        New paths of the moved videos.
    """
    moved = []
    for video in find_videos(directory, recursive=True):
        relative = video.relative_to(directory).as_posix()
        target = directory / flatten_name(relative)
        if target == video:
            continue
        if target.exists():
            console.print_warning(f"Not overwriting existing file: {target}")
            continue

        sheet = preview_path(video)
        if dry_run:
            console.print_simulation(f"Rename: {relative} -> {target.name}")
        else:
            try:
                shutil.move(str(video), str(target))
            except OSError as e:
                logger.error(f"Error moving {video}: {e}")
                console.print_error(f"Unable to move {video}: {e}")
                continue
            console.print(f"renamed '{relative}' -> '{target.name}'")
            logger.info(f"Flattened {video} -> {target}")
            target_sheet = preview_path(target)
            if sheet.exists() and not target_sheet.exists():
                try:
                    shutil.move(str(sheet), str(target_sheet))
                except OSError as e:
                    logger.error(f"Error moving {sheet}: {e}")
                    console.print_warning(f"Preview sheet left behind: {sheet} ({e})")
        moved.append(target)
    return moved


def _confirm_and_remove(
    title: str,
    paths: List[Path],
    remove: Callable[[Path], None],
    confirm: Optional[Confirm],
    dry_run: bool,
) -> List[Path]:
    if not paths:
        return []

    console.print(f"######## {title}: ########")
    console.print_list(str(path) for path in paths)
    console.print("")

    confirm = confirm or (lambda question: ask_yes_no(question, default=False))
    if not confirm("Delete them all?"):
        return []

    removed = []
    for path in paths:
        if dry_run:
            console.print_simulation(f"Delete: {path}")
        else:
            try:
                remove(path)
            except OSError as e:
                logger.warning(f"Unable to delete {path}: {e}")
                console.print_warning(f"Unable to delete {path}: {e}")
                continue
            console.print(f"removed '{path}'")
        removed.append(path)
    return removed


def remove_empty_dirs(
    directory: Path,
    confirm: Optional[Confirm] = None,
    dry_run: bool = False
) -> List[Path]:
    """List empty sub-directories and delete them after confirmation."""
    return _confirm_and_remove(
        "Empty Directories", find_empty_dirs(directory), Path.rmdir, confirm, dry_run
    )


def remove_extra_files(
    directory: Path,
    confirm: Optional[Confirm] = None,
    dry_run: bool = False
) -> List[Path]:
    """List non-video files and delete them after confirmation."""
    return _confirm_and_remove(
        "Extra Files", find_extra_files(directory), Path.unlink, confirm, dry_run
    )
