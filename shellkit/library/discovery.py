"""Video discovery in a personal collection."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from loguru import logger

from shellkit.config.settings import (
    VIDEO_EXTENSIONS,
    PREVIEW_EXTENSION,
    CATEGORY_SUBDIRS,
    ROOT_SCAN_DEPTH,
    CATEGORY_SCAN_DEPTH,
)
from shellkit.exceptions import CollectionError
from shellkit.ui.console import console


@dataclass(frozen=True)
class VideoEntry:
    """
    A video found in a collection.

    Attributes:
        video: Absolute path of the video file.
        root: Collection root the video was found under.
    """

    video: Path
    root: Path

    @property
    def preview(self) -> Path:
        return preview_path(self.video)


def is_video(path: Path) -> bool:
    """True if path has one of the collection's video extensions."""
    return path.suffix.lower().lstrip('.') in VIDEO_EXTENSIONS


def preview_path(video: Path) -> Path:
    """Preview sheet of a video: same name with a .jpg extension."""
    return video.with_suffix(f".{PREVIEW_EXTENSION}")


def walk_files(
    directory: Path,
    max_depth: Optional[int] = None,
    skip_hidden: bool = False,
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """
    Yield regular files below directory.

    Args:
        directory: Directory to walk.
        max_depth: Deepest level to report; direct children are depth 1.
        skip_hidden: Skip files and directories starting with a dot.
        follow_symlinks: Descend into symlinked directories (each real
            directory is visited once).
    """
    seen = set()
    for current, dirnames, filenames in os.walk(directory, followlinks=follow_symlinks):
        current_path = Path(current)
        if follow_symlinks:
            real = os.path.realpath(current)
            if real in seen:
                dirnames[:] = []
                continue
            seen.add(real)

        depth = len(current_path.relative_to(directory).parts) + 1
        if max_depth is not None and depth >= max_depth:
            dirnames[:] = []
        if skip_hidden:
            dirnames[:] = [d for d in dirnames if not d.startswith('.')]
        dirnames.sort()

        for name in sorted(filenames):
            if skip_hidden and name.startswith('.'):
                continue
            path = current_path / name
            if path.is_file():
                yield path


def find_videos(directory: Path, recursive: bool = False) -> List[Path]:
    """
    List videos in directory, optionally in every visible sub-directory.

    Hidden files and directories are skipped.
    """
    if not recursive:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and not p.name.startswith('.') and is_video(p)
        )
    return [p for p in walk_files(directory, skip_hidden=True) if is_video(p)]


def find_videos_without_sheet(directory: Path) -> List[Path]:
    """Videos below directory that have no preview sheet."""
    return [p for p in find_videos(directory, recursive=True) if not preview_path(p).exists()]


def find_empty_dirs(directory: Path) -> List[Path]:
    """Visible sub-directories of directory that contain nothing at all."""
    empty = []
    for current, dirnames, filenames in os.walk(directory):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith('.'))
        for name in dirnames:
            candidate = Path(current) / name
            try:
                if not any(candidate.iterdir()):
                    empty.append(candidate)
            except OSError as e:
                logger.warning(f"Cannot list {candidate}: {e}")
    return empty


def find_extra_files(directory: Path) -> List[Path]:
    """
    Files below directory that are neither videos nor a video's preview sheet.

    Hidden files are included; a sheet whose video is gone counts as extra.
    """
    extras = []
    for path in walk_files(directory):
        if is_video(path):
            continue
        if path.suffix.lower() == f".{PREVIEW_EXTENSION}" and _has_video(path):
            continue
        extras.append(path)
    return extras


def _has_video(sheet: Path) -> bool:
    return any(
        sheet.with_suffix(f".{ext}").exists() or sheet.with_suffix(f".{ext.upper()}").exists()
        for ext in VIDEO_EXTENSIONS
    )


def validate_collection_root(root: Path) -> None:
    """
    Ensure root is a readable directory.

    Raises:
        CollectionError: code 1 if missing or not a directory, 2 if unreadable.
    """
    if not root.exists():
        raise CollectionError(f"Directory does not seem to exist: {root}", exit_code=1)
    if not root.is_dir():
        raise CollectionError(f"Path points to a non-directory object: {root}", exit_code=1)
    if not os.access(root, os.R_OK | os.X_OK):
        raise CollectionError(f"Directory lacks read permissions: {root}", exit_code=2)


def _collect(directory: Path, max_depth: int, skip_hidden: bool) -> List[Path]:
    return [
        path.resolve()
        for path in walk_files(directory, max_depth, skip_hidden, follow_symlinks=True)
        if is_video(path) and os.access(path, os.R_OK)
    ]


def scan_collection(root: Path) -> List[VideoEntry]:
    """
    Find every video of a collection that has a preview sheet.

    The root is scanned (hidden entries excluded), then each category
    sub-directory (.vip, .fav, .lib, .del, .jav) that exists.

    Args:
        root: Collection root (already validated).

    Returns:
        VideoEntry list in scan order.
    """
    root = root.resolve()
    found: List[Path] = []

    console.print(f"Scanning directory: {root}.. ", end="")
    videos = _collect(root, ROOT_SCAN_DEPTH, skip_hidden=True)
    console.print(f"+{len(videos)} videos")
    found.extend(videos)

    for subdir in CATEGORY_SUBDIRS:
        category = root / subdir
        if not category.is_dir():
            logger.debug(f"No {subdir} directory in {root}")
            continue
        console.print(f"Scanning directory: {category}.. ", end="")
        videos = _collect(category, CATEGORY_SCAN_DEPTH, skip_hidden=False)
        console.print(f"+{len(videos)} videos!")
        found.extend(videos)

    entries = []
    without_sheet = 0
    for video in dict.fromkeys(found):
        if preview_path(video).exists():
            entries.append(VideoEntry(video=video, root=root))
        else:
            without_sheet += 1

    if without_sheet:
        logger.info(f"{without_sheet} videos in {root} have no preview sheet and are skipped")
    return entries
