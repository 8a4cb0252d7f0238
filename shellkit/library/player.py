"""Background video playback with mpv."""

import os
from pathlib import Path

from loguru import logger

from shellkit.config.settings import MPV_ARGS
from shellkit.exceptions import ValidationError
from shellkit.ui.console import console
from shellkit.utils.commands import spawn_detached


def play_video(video: Path) -> None:
    """
    Open a video in mpv, paused, without waiting for the player.

    Raises:
        ValidationError: If the file is missing or unreadable.
    """
    if not video.is_file() or not os.access(video, os.R_OK):
        raise ValidationError(f"File not found or cannot be read: {video}", exit_code=2)

    console.print(
        f"[bold cyan]>> [/bold cyan][blue]Opening Video:[/blue] "
        f"[bold rgb(60,110,190)]  {video}  [/bold rgb(60,110,190)]"
    )
    logger.info(f"Opening {video} in mpv")
    spawn_detached(["mpv", *MPV_ARGS, str(video)])
