"""Interactive preview loop for sorting a video collection (prevloop).

Every video that has a preview sheet is shown, in random order, in a
full-screen yad picture dialog. The button the user presses (reported as
yad's exit status) decides whether the video is skipped, rated into one of
the tier directories, opened in mpv, archived or deleted.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from shellkit.config.settings import (
    TIER_VIP,
    TIER_FAVOURITES,
    TIER_BOOKMARKS,
    TIER_ARCHIVE,
    TIER_LABELS,
    PREVIEW_WIDTH,
    PREVIEW_HEIGHT,
)
from shellkit.config.context import get_context
from shellkit.exceptions import CollectionError, ValidationError
from shellkit.library.discovery import VideoEntry, scan_collection, validate_collection_root
from shellkit.library.file_ops import move_with_preview, delete_with_preview
from shellkit.library.player import play_video
from shellkit.library.tiers import ensure_tier_dirs, tier_dir_for, check_tier_writable
from shellkit.ui.console import console
from shellkit.ui.confirmations import wait_for_enter
from shellkit.utils.commands import run_command


class PreviewAction(Enum):
    """yad exit status of each preview dialog button."""
    SKIP = 1
    BOOKMARK = 2
    FAVOURITE = 3
    VIP = 4
    OPEN = 5
    BOOKMARK_OPEN = 6
    FAVOURITE_OPEN = 7
    VIP_OPEN = 8
    ARCHIVE = 9
    DELETE = 10
    QUIT = 11
    ARCHIVE_OPEN = 12
    FORCED_EXIT = 127
    ESCAPE = 252


# Tier each rating action moves the video to
ACTION_TIERS: Dict[PreviewAction, str] = {
    PreviewAction.BOOKMARK: TIER_BOOKMARKS,
    PreviewAction.BOOKMARK_OPEN: TIER_BOOKMARKS,
    PreviewAction.FAVOURITE: TIER_FAVOURITES,
    PreviewAction.FAVOURITE_OPEN: TIER_FAVOURITES,
    PreviewAction.VIP: TIER_VIP,
    PreviewAction.VIP_OPEN: TIER_VIP,
    PreviewAction.ARCHIVE: TIER_ARCHIVE,
    PreviewAction.ARCHIVE_OPEN: TIER_ARCHIVE,
}

OPENING_ACTIONS = {
    PreviewAction.OPEN,
    PreviewAction.BOOKMARK_OPEN,
    PreviewAction.FAVOURITE_OPEN,
    PreviewAction.VIP_OPEN,
    PreviewAction.ARCHIVE_OPEN,
}

# (icon, tooltip, action); None is an empty spacer button
YAD_BUTTONS = [
    ("edit-redo", "Go to next preview.", PreviewAction.SKIP),
    ("filenew", "Add video to bookmarks and go to next preview.", PreviewAction.BOOKMARK),
    ("appointment-missed", "Add video to favourites and go to next preview.", PreviewAction.FAVOURITE),
    ("emblem-xapp-favorite", "Add video to VIP and go to next preview.", PreviewAction.VIP),
    None,
    ("list-add", "Open the video and go to next preview.", PreviewAction.OPEN),
    ("dropboxstatus-busy", "Add to bookmarks, open the video and go to next preview.", PreviewAction.BOOKMARK_OPEN),
    ("appointment-soon", "Add to favorites, open the video and go to next preview.", PreviewAction.FAVOURITE_OPEN),
    ("emblem-xapp-favorite", "Add to VIP, open the video and go to next preview.", PreviewAction.VIP_OPEN),
    None,
    ("rotation-locked-symbolic", "Archive and hide in future, and go to the next preview.", PreviewAction.ARCHIVE),
    ("list-add", "Archive and hide in future, open the video and go to the next preview.", PreviewAction.ARCHIVE_OPEN),
    None,
    None,
    ("list-remove", "Delete video permanently and go to next preview.", PreviewAction.DELETE),
    ("yad-quit", "Exit the preview loop.", PreviewAction.QUIT),
]


def build_yad_command(preview: Path, text: str) -> List[str]:
    """Build the full-screen yad picture dialog for one preview sheet."""
    command = [
        "yad", "--picture",
        f"--width={PREVIEW_WIDTH}", f"--height={PREVIEW_HEIGHT}",
        "--maximized", "--center", "--undecorated", "--borders=0",
        "--size=fit", f"--text={text}", f"--filename={preview}",
    ]
    for button in YAD_BUTTONS:
        if button is None:
            command.append("--button=!!")
        else:
            icon, tooltip, action = button
            command.append(f"--button=!{icon}!{tooltip}:{action.value}")
    return command


def show_preview_dialog(preview: Path, text: str) -> int:
    """Show the dialog and return yad's exit status."""
    return run_command(build_yad_command(preview, text)).returncode


def parse_action(exit_code: int) -> PreviewAction:
    """
    Map a yad exit status to an action.

    Raises:
        CollectionError: For a status no button produces.
    """
    try:
        return PreviewAction(exit_code)
    except ValueError:
        raise CollectionError(
            f"(Outside case limits) Invalid yad exit value: {exit_code}",
            exit_code=exit_code or 1,
        ) from None


@dataclass
class PreviewStats:
    """Counters for a preview loop session."""

    shown: int = 0
    skipped: int = 0
    opened: int = 0
    deleted: int = 0
    missing: int = 0
    moved: Dict[str, int] = field(default_factory=dict)


class PreviewLoop:
    """
    Random preview loop over a list of videos.

    The dialog, player and random generator are injectable so the loop
    can run without a display.
    """

    def __init__(
        self,
        entries: Sequence[VideoEntry],
        dialog: Callable[[Path, str], int] = show_preview_dialog,
        player: Callable[[Path], None] = play_video,
        rng: Optional[random.Random] = None,
        dry_run: Optional[bool] = None,
    ) -> None:
        self.entries: List[VideoEntry] = list(entries)
        self.dialog = dialog
        self.player = player
        self.rng = rng or random.Random()
        self.dry_run = get_context().dry_run if dry_run is None else dry_run
        self.stats = PreviewStats()

    def handle(self, action: PreviewAction, entry: VideoEntry) -> Path:
        """
        Carry out an action on one video.

        Returns:
            Where the video is after the action.
        """
        video = entry.video

        if action is PreviewAction.SKIP:
            console.print("Skipping to next preview.")
            self.stats.skipped += 1
            return video

        if action is PreviewAction.DELETE:
            console.print("[bold red]!! Deleting current video and preview sheet.[/bold red]")
            if video in delete_with_preview(video, self.dry_run):
                self.stats.deleted += 1
            return video

        tier = ACTION_TIERS.get(action)
        if tier is not None:
            target_dir = tier_dir_for(entry, tier)
            check_tier_writable(target_dir, tier, self.dry_run)
            console.print(f"Moving video to {tier} ({TIER_LABELS[tier]}) --> {target_dir}/")
            video = move_with_preview(video, target_dir, self.dry_run)
            if video != entry.video:
                self.stats.moved[tier] = self.stats.moved.get(tier, 0) + 1

        if action in OPENING_ACTIONS:
            playable = video if video.exists() else entry.video
            try:
                self.player(playable)
            except ValidationError as e:
                console.print_error(str(e), e.exit_code)
            else:
                self.stats.opened += 1

        return video

    def run(self) -> PreviewStats:
        """
        Show previews until the list is empty or the user quits.

        Raises:
            CollectionError: On an unexpected dialog status or an unwritable
                tier directory.
        """
        while self.entries:
            index = self.rng.randrange(len(self.entries))
            entry = self.entries.pop(index)
            title = f"{index + 1}/{len(self.entries) + 1}: {entry.preview}"

            if not entry.video.is_file():
                console.print_warning(f"Video file not found, it may have been deleted: {entry.video}")
                self.stats.missing += 1
                continue
            if not entry.preview.is_file():
                console.print_warning(f"Preview sheet not found, it may have been deleted: {entry.preview}")
                self.stats.missing += 1
                continue

            console.print_plain(title)
            self.stats.shown += 1
            action = parse_action(self.dialog(entry.preview, title))
            logger.debug(f"{entry.video.name}: {action.name}")

            if action is PreviewAction.FORCED_EXIT:
                console.print("Loop stopped by forced exit. (127)")
                break
            if action is PreviewAction.ESCAPE:
                console.print("Escape button was pressed, stopping loop. (252)")
                break
            if action is PreviewAction.QUIT:
                break

            self.handle(action, entry)

        return self.stats


def collect_roots(paths: Sequence[str]) -> List[Path]:
    """
    Validate the directories given on the command line.

    Raises:
        CollectionError: 7 for a path that is not a readable directory,
            1 when no path was given.
    """
    roots = []
    for raw in paths:
        path = Path(raw).expanduser()
        try:
            validate_collection_root(path)
        except CollectionError as e:
            raise CollectionError(
                f"Invalid argument: Path not found or not readable: {raw}", exit_code=7
            ) from e
        console.print(f"Adding path to scanned directories list: {raw}")
        roots.append(path.resolve())

    if not roots:
        raise CollectionError("Root directory not provided.", exit_code=1)
    return roots


def prepare_collection(roots: Sequence[Path], dry_run: bool = False) -> List[VideoEntry]:
    """Validate each root, create its tier directories and scan it."""
    console.print_message("Scanning directory contents from all paths")
    console.print_message("Missing sub-directories are created automatically")

    entries: List[VideoEntry] = []
    for root in roots:
        console.print_message(f">> Validating directory: {root}")
        validate_collection_root(root)
        console.print_message(f">> Processing directory: {root}")
        ensure_tier_dirs(root, dry_run)
        found = scan_collection(root)
        entries.extend(found)
        console.print_message(
            f"{len(found)} videos found from current directory", f"Total count: {len(entries)}"
        )
        console.print("")
    return entries


def prevloop(paths: Sequence[str], wait: bool = True) -> PreviewStats:
    """
    Scan the given collections and run the preview loop.

    Args:
        paths: Collection root directories.
        wait: Ask the user to press Enter before the first dialog.
    """
    dry_run = get_context().dry_run
    roots = collect_roots(paths)
    entries = prepare_collection(roots, dry_run)

    console.print_message(
        f"Finished scanning directories: Found {len(entries)} videos",
        "Press Enter to begin yad preview loop",
    )
    if wait:
        wait_for_enter("")

    stats = PreviewLoop(entries, dry_run=dry_run).run()
    logger.info(
        f"Preview loop done: shown={stats.shown} skipped={stats.skipped} "
        f"opened={stats.opened} deleted={stats.deleted} moved={stats.moved}"
    )
    return stats
