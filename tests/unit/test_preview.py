"""Tests for the preview loop."""

import random

import pytest
from pathlib import Path
from unittest.mock import patch, MagicMock

from shellkit.exceptions import CollectionError, ValidationError
from shellkit.library.discovery import VideoEntry
from shellkit.library.player import play_video
from shellkit.library.preview import (
    PreviewAction,
    PreviewLoop,
    build_yad_command,
    parse_action,
    collect_roots,
)
from shellkit.library.tiers import ensure_tier_dirs


def _entry(collection: Path, relative: str) -> VideoEntry:
    return VideoEntry(collection / relative, collection)


class TestBuildYadCommand:
    """Tests for build_yad_command function."""

    def test_dialog_options(self):
        """The dialog is a full-screen picture."""
        command = build_yad_command(Path("/c/clip.jpg"), "1/3: /c/clip.jpg")

        assert command[:2] == ["yad", "--picture"]
        assert "--width=1920" in command
        assert "--height=1080" in command
        assert "--filename=/c/clip.jpg" in command
        assert "--text=1/3: /c/clip.jpg" in command

    def test_buttons_report_actions(self):
        """Each button returns its action's exit status."""
        command = build_yad_command(Path("/c/clip.jpg"), "t")
        buttons = [arg for arg in command if arg.startswith("--button=")]

        codes = {b.rsplit(":", 1)[1] for b in buttons if b != "--button=!!"}
        expected = {
            str(a.value) for a in PreviewAction
            if a not in (PreviewAction.FORCED_EXIT, PreviewAction.ESCAPE)
        }
        assert codes == expected
        assert "--button=!!" in buttons


class TestParseAction:
    """Tests for parse_action function."""

    @pytest.mark.parametrize("code, action", [
        (1, PreviewAction.SKIP),
        (6, PreviewAction.BOOKMARK_OPEN),
        (12, PreviewAction.ARCHIVE_OPEN),
        (127, PreviewAction.FORCED_EXIT),
        (252, PreviewAction.ESCAPE),
    ])
    def test_known_codes(self, code, action):
        """Button statuses map to actions."""
        assert parse_action(code) is action

    def test_unknown_code(self):
        """Other statuses stop the loop with that status."""
        with pytest.raises(CollectionError, match="Invalid yad exit value: 70") as exc_info:
            parse_action(70)
        assert exc_info.value.exit_code == 70

    def test_zero_is_an_error(self):
        """Status 0 is not a button either."""
        with pytest.raises(CollectionError) as exc_info:
            parse_action(0)
        assert exc_info.value.exit_code == 1


class TestPreviewLoopHandle:
    """Tests for PreviewLoop.handle."""

    def _loop(self, collection, player=None):
        ensure_tier_dirs(collection)
        return PreviewLoop([], dialog=MagicMock(), player=player or MagicMock(), dry_run=False)

    def test_skip(self, collection):
        """Skip leaves the video in place."""
        loop = self._loop(collection)
        entry = _entry(collection, "clip.mp4")

        assert loop.handle(PreviewAction.SKIP, entry) == entry.video
        assert loop.stats.skipped == 1

    @pytest.mark.parametrize("action, tier", [
        (PreviewAction.BOOKMARK, ".lib"),
        (PreviewAction.FAVOURITE, ".fav"),
        (PreviewAction.VIP, ".vip"),
        (PreviewAction.ARCHIVE, ".del"),
    ])
    def test_rating_moves_video_and_sheet(self, collection, action, tier):
        """Rating actions move the video and its sheet to the tier."""
        loop = self._loop(collection)
        entry = _entry(collection, "clip.mp4")

        new_path = loop.handle(action, entry)

        assert new_path == collection / tier / "clip.mp4"
        assert new_path.exists()
        assert (collection / tier / "clip.jpg").exists()
        assert loop.stats.moved == {tier: 1}
        loop.player.assert_not_called()

    def test_rate_and_open(self, collection):
        """Opening actions play the moved video."""
        player = MagicMock()
        loop = self._loop(collection, player)
        entry = _entry(collection, "clip.mp4")

        loop.handle(PreviewAction.VIP_OPEN, entry)

        player.assert_called_once_with(collection / ".vip" / "clip.mp4")
        assert loop.stats.opened == 1

    def test_open_only(self, collection):
        """Open plays the video without moving it."""
        player = MagicMock()
        loop = self._loop(collection, player)
        entry = _entry(collection, "clip.mp4")

        assert loop.handle(PreviewAction.OPEN, entry) == entry.video
        player.assert_called_once_with(entry.video)

    def test_player_error_is_reported(self, collection):
        """A video the player cannot open does not stop the loop."""
        player = MagicMock(side_effect=ValidationError("cannot read", exit_code=2))
        loop = self._loop(collection, player)

        loop.handle(PreviewAction.OPEN, _entry(collection, "clip.mp4"))

        assert loop.stats.opened == 0

    def test_delete(self, collection):
        """Delete removes the video and its sheet."""
        loop = self._loop(collection)
        entry = _entry(collection, "clip.mp4")

        loop.handle(PreviewAction.DELETE, entry)

        assert not entry.video.exists()
        assert not entry.preview.exists()
        assert loop.stats.deleted == 1

    def test_video_already_in_tier_is_not_counted(self, collection):
        """Rating a video into the tier it already sits in moves nothing."""
        loop = self._loop(collection)
        entry = _entry(collection, ".fav/loved.webm")

        assert loop.handle(PreviewAction.FAVOURITE, entry) == entry.video
        assert loop.stats.moved == {}

    def test_failed_delete_is_not_counted(self, collection):
        """A video that cannot be deleted stays and is not counted."""
        loop = self._loop(collection)
        entry = _entry(collection, "clip.mp4")

        with patch("shellkit.library.file_ops.Path.unlink", side_effect=PermissionError(13, "Permission denied")):
            loop.handle(PreviewAction.DELETE, entry)

        assert entry.video.exists()
        assert loop.stats.deleted == 0

    def test_dry_run_rating_without_tier_directory(self, collection):
        """In dry-run a tier that was only planned does not stop the loop."""
        loop = PreviewLoop([], dialog=MagicMock(), player=MagicMock(), dry_run=True)
        entry = _entry(collection, "clip.mp4")

        new_path = loop.handle(PreviewAction.BOOKMARK, entry)

        assert new_path == collection / ".lib" / "clip.mp4"
        assert entry.video.exists()
        assert not (collection / ".lib").exists()
        assert loop.stats.moved == {".lib": 1}

    def test_missing_tier_directory(self, collection):
        """An unwritable tier raises the tier's code."""
        loop = PreviewLoop([], dialog=MagicMock(), player=MagicMock(), dry_run=False)

        with pytest.raises(CollectionError) as exc_info:
            loop.handle(PreviewAction.BOOKMARK, _entry(collection, "clip.mp4"))
        assert exc_info.value.exit_code == 36


class TestPreviewLoopRun:
    """Tests for PreviewLoop.run."""

    def test_shows_every_video_once(self, collection):
        """Each entry is shown exactly once, then the loop ends."""
        entries = [_entry(collection, "clip.mp4"), _entry(collection, "nested/deep.mkv")]
        dialog = MagicMock(return_value=PreviewAction.SKIP.value)

        stats = PreviewLoop(entries, dialog=dialog, player=MagicMock(), rng=random.Random(1)).run()

        assert stats.shown == 2
        assert stats.skipped == 2
        shown = sorted(c[0][0] for c in dialog.call_args_list)
        assert shown == sorted(e.preview for e in entries)

    def test_title_counts_remaining(self, collection):
        """The dialog text is index/remaining: preview."""
        entry = _entry(collection, "clip.mp4")
        dialog = MagicMock(return_value=PreviewAction.SKIP.value)

        PreviewLoop([entry], dialog=dialog, player=MagicMock()).run()

        assert dialog.call_args[0][1] == f"1/1: {entry.preview}"

    @pytest.mark.parametrize("action", [
        PreviewAction.QUIT,
        PreviewAction.FORCED_EXIT,
        PreviewAction.ESCAPE,
    ])
    def test_stopping_actions(self, collection, action):
        """Quit, forced exit and Escape stop the loop."""
        entries = [_entry(collection, "clip.mp4"), _entry(collection, "nested/deep.mkv")]
        dialog = MagicMock(return_value=action.value)

        stats = PreviewLoop(entries, dialog=dialog, player=MagicMock()).run()

        assert dialog.call_count == 1
        assert stats.shown == 1

    def test_vanished_video_is_skipped(self, collection):
        """A video deleted since the scan is warned about and skipped."""
        gone = _entry(collection, "clip.mp4")
        gone.video.unlink()
        dialog = MagicMock(return_value=PreviewAction.SKIP.value)

        stats = PreviewLoop([gone], dialog=dialog, player=MagicMock()).run()

        dialog.assert_not_called()
        assert stats.missing == 1

    def test_unknown_status_raises(self, collection):
        """An unexpected dialog status stops the loop with an error."""
        dialog = MagicMock(return_value=42)

        with pytest.raises(CollectionError):
            PreviewLoop([_entry(collection, "clip.mp4")], dialog=dialog, player=MagicMock()).run()


class TestCollectRoots:
    """Tests for collect_roots function."""

    def test_valid_paths(self, collection):
        """Valid directories are resolved."""
        assert collect_roots([str(collection)]) == [collection.resolve()]

    def test_invalid_path(self, tmp_path):
        """An invalid path fails with code 7."""
        with pytest.raises(CollectionError) as exc_info:
            collect_roots([str(tmp_path / "missing")])
        assert exc_info.value.exit_code == 7

    def test_no_path(self):
        """At least one path is required."""
        with pytest.raises(CollectionError) as exc_info:
            collect_roots([])
        assert exc_info.value.exit_code == 1


class TestPlayVideo:
    """Tests for play_video function."""

    def test_spawns_mpv(self, collection):
        """mpv starts paused and detached."""
        video = collection / "clip.mp4"
        with patch("shellkit.library.player.spawn_detached") as mock_spawn:
            play_video(video)
        mock_spawn.assert_called_once_with(["mpv", "--pause", str(video)])

    def test_missing_file(self, tmp_path):
        """Missing videos raise ValidationError with code 2."""
        with patch("shellkit.library.player.spawn_detached") as mock_spawn:
            with pytest.raises(ValidationError) as exc_info:
                play_video(tmp_path / "missing.mp4")
        assert exc_info.value.exit_code == 2
        mock_spawn.assert_not_called()
