"""Tests for the app_state module."""

import pytest
from pathlib import Path

from shellkit.utils.app_state import AppStateManager


class TestAppStateManager:
    """Tests for the AppStateManager class."""

    def test_initialisation_creates_table(self, state_db):
        """Opening the store creates the app_state table."""
        manager = AppStateManager(state_db)

        cursor = manager.conn.cursor()
        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='app_state'"
        )
        assert cursor.fetchone() is not None
        manager.close()

    def test_creates_parent_directory(self, tmp_path):
        """Missing parent directories are created."""
        db_path = tmp_path / "a" / "b" / "state.db"

        with AppStateManager(db_path):
            pass

        assert db_path.exists()

    def test_get_missing(self, state_db):
        """Unknown keys return None."""
        with AppStateManager(state_db) as manager:
            assert manager.get("missing") is None

    def test_set_and_get(self, state_db):
        """Values survive reopening the database."""
        with AppStateManager(state_db) as manager:
            assert manager.set("keyserver", "hkps://a") is True
            assert manager.set("keyserver", "hkps://b") is True

        with AppStateManager(state_db) as manager:
            assert manager.get("keyserver") == "hkps://b"

    def test_context_manager_closes(self, state_db):
        """The context manager closes the connection."""
        with AppStateManager(state_db) as manager:
            assert manager.conn is not None
        assert manager.conn is None

    def test_closed_store_is_inert(self, state_db):
        """A closed store returns None/False instead of raising."""
        manager = AppStateManager(state_db)
        manager.close()

        assert manager.get("key") is None
        assert manager.set("key", "value") is False

    def test_path_from_environment(self, tmp_path):
        """SHELLKIT_STATE_DB is the fallback path."""
        with AppStateManager() as manager:
            assert manager.db_path == tmp_path / "state" / "state.db"
