"""Video collection browsing and maintenance."""

from shellkit.library.discovery import (
    VideoEntry,
    is_video,
    preview_path,
    walk_files,
    find_videos,
    find_videos_without_sheet,
    find_empty_dirs,
    find_extra_files,
    validate_collection_root,
    scan_collection,
)
from shellkit.library.tiers import (
    ensure_tier_dirs,
    tier_dir_for,
    check_tier_writable,
)
from shellkit.library.file_ops import (
    move_no_clobber,
    move_with_preview,
    delete_with_preview,
    flatten_name,
    flatten_videos,
    remove_empty_dirs,
    remove_extra_files,
)
from shellkit.library.player import play_video
from shellkit.library.preview import (
    PreviewAction,
    PreviewLoop,
    PreviewStats,
    build_yad_command,
    parse_action,
    collect_roots,
    prevloop,
)

__all__ = [
    "VideoEntry",
    "is_video",
    "preview_path",
    "walk_files",
    "find_videos",
    "find_videos_without_sheet",
    "find_empty_dirs",
    "find_extra_files",
    "validate_collection_root",
    "scan_collection",
    "ensure_tier_dirs",
    "tier_dir_for",
    "check_tier_writable",
    "move_no_clobber",
    "move_with_preview",
    "delete_with_preview",
    "flatten_name",
    "flatten_videos",
    "remove_empty_dirs",
    "remove_extra_files",
    "play_video",
    "PreviewAction",
    "PreviewLoop",
    "PreviewStats",
    "build_yad_command",
    "parse_action",
    "collect_roots",
    "prevloop",
]
