"""Pytest configuration and fixtures."""

import subprocess

import pytest
from pathlib import Path

from shellkit.config.context import set_context


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    """Keep the state database, log file and environment inside tmp_path."""
    monkeypatch.setenv("SHELLKIT_STATE_DB", str(tmp_path / "state" / "state.db"))
    monkeypatch.setenv("SHELLKIT_LOG_FILE", str(tmp_path / "state" / "shellkit.log"))
    for name in (
        "KEYSERVER",
        "KILLPROC_DEFAULT_SIGNALS",
        "GPG_IDENTITY",
        "HISTFILE",
        "YSU_MODE",
        "YSU_IGNORED_ALIASES",
        "YSU_IGNORED_GLOBAL_ALIASES",
        "YSU_HARDCORE",
        "YSU_MESSAGE_POSITION",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    set_context(None)


@pytest.fixture
def state_db(tmp_path):
    """Path of a throwaway state database."""
    return tmp_path / "test_state.db"


@pytest.fixture
def completed():
    """Factory for subprocess.CompletedProcess results."""
    def _completed(returncode=0, stdout="", stderr=""):
        return subprocess.CompletedProcess(
            args=[], returncode=returncode, stdout=stdout, stderr=stderr
        )
    return _completed


@pytest.fixture
def collection(tmp_path):
    """
    A small video collection.

    root/
        clip.mp4 + clip.jpg
        nested/deep.mkv + deep.jpg
        nosheet.avi
        notes.txt
        .hidden/secret.mp4 + secret.jpg
        .fav/loved.webm + loved.jpg
    """
    root = tmp_path / "collection"
    root.mkdir()

    def add(relative: str, sheet: bool = True) -> Path:
        video = root / relative
        video.parent.mkdir(parents=True, exist_ok=True)
        video.write_bytes(b"fake video content")
        if sheet:
            video.with_suffix(".jpg").write_bytes(b"fake picture")
        return video

    add("clip.mp4")
    add("nested/deep.mkv")
    add("nosheet.avi", sheet=False)
    add(".hidden/secret.mp4")
    add(".fav/loved.webm")
    (root / "notes.txt").write_text("notes")
    return root
