"""Persistent application state in SQLite.

A shell function can export a variable into the user's session; a child
process cannot. Values a command wants to keep between invocations (the
active GPG keyserver) are stored in a small key/value table instead.
"""

import sqlite3
import time
from pathlib import Path
from typing import Optional

from loguru import logger

from shellkit.config.settings import APP_STATE_TABLE, default_state_db


class AppStateManager:
    """
    Key/value state store backed by SQLite.

    Attributes:
        db_path: Path of the SQLite database.
        conn: Open connection, or None once closed or if opening failed.
    """

    def __init__(self, db_path: Optional[Path] = None) -> None:
        """
        Open the store, creating the database and table if needed.

        Args:
            db_path: SQLite database path. Defaults to the user cache dir
                (SHELLKIT_STATE_DB overrides it).
        """
        self.db_path = db_path or default_state_db()
        self.conn: Optional[sqlite3.Connection] = None
        self._connect()

    def _connect(self) -> None:
        """Open the connection and create the table."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(self.db_path, timeout=10.0)
            self._create_table()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Unable to open state database {self.db_path}: {e}")
            self.conn = None

    def _create_table(self) -> None:
        if not self.conn:
            return

        cursor = self.conn.cursor()
        try:
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {APP_STATE_TABLE} (
                    key TEXT PRIMARY KEY,
                    value TEXT,
                    updated_at INTEGER
                )
            """)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Unable to create state table: {e}")

    def get(self, key: str) -> Optional[str]:
        """
        Read a stored value.

        Args:
            key: State key.

        Returns:
            The stored string, or None if missing or unreadable.
        """
        if not self.conn:
            return None

        cursor = self.conn.cursor()
        try:
            cursor.execute(
                f"SELECT value FROM {APP_STATE_TABLE} WHERE key = ?",
                (key,)
            )
            row = cursor.fetchone()
            if row:
                return row[0]
        except sqlite3.Error as e:
            logger.warning(f"Unable to read state '{key}': {e}")

        return None

    def set(self, key: str, value: str) -> bool:
        """
        Store a value, replacing any previous one.

        Args:
            key: State key.
            value: Value to store.

        Returns:
            True on success.
        """
        if not self.conn:
            return False

        cursor = self.conn.cursor()
        try:
            cursor.execute(
                f"""INSERT OR REPLACE INTO {APP_STATE_TABLE}
                    (key, value, updated_at) VALUES (?, ?, ?)""",
                (key, value, int(time.time()))
            )
            self.conn.commit()
            return True
        except sqlite3.Error as e:
            logger.warning(f"Unable to write state '{key}': {e}")
            return False

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> "AppStateManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
