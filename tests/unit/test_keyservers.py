"""Tests for keyserver selection."""

import pytest
from unittest.mock import patch

from shellkit.config.settings import KEYSERVERS, DEFAULT_KEYSERVER
from shellkit.exceptions import UsageError
from shellkit.gpg.keyservers import (
    KeyserverRequest,
    parse_keyserver_arguments,
    current_keyserver,
    get_saved_keyserver,
    save_keyserver,
    gpgks,
    choose_keyserver,
    export_line,
)


class TestParseKeyserverArguments:
    """Tests for parse_keyserver_arguments function."""

    def test_no_arguments_lists(self):
        """No argument means a numbered list."""
        assert parse_keyserver_arguments([]) == KeyserverRequest(numbered=True)

    def test_request_defaults(self):
        """A bare request has no flags and an empty number list."""
        request = KeyserverRequest()
        assert request.numbers == []
        assert request.numbered is False
        assert request.plain is False

    @pytest.mark.parametrize("token", ["l", "list", "-l", "--list"])
    def test_list_spellings(self, token):
        """Every list spelling is accepted."""
        assert parse_keyserver_arguments([token]).numbered is True

    @pytest.mark.parametrize("token", ["a", "all", "-a", "--all"])
    def test_all_spellings(self, token):
        """Every all spelling is accepted."""
        assert parse_keyserver_arguments([token]).plain is True

    def test_numbers_and_quiet(self):
        """Numbers are collected in order."""
        request = parse_keyserver_arguments(["2", "q", "4"])
        assert request.numbers == [2, 4]
        assert request.quiet is True
        assert request.numbered is False

    def test_out_of_range(self):
        """Numbers outside 1..N are rejected."""
        with pytest.raises(UsageError, match=f"between 1 and {len(KEYSERVERS)}"):
            parse_keyserver_arguments([str(len(KEYSERVERS) + 1)])

    def test_zero_is_out_of_range(self):
        """Numbering starts at 1."""
        with pytest.raises(UsageError, match="Number 0 is out of range"):
            parse_keyserver_arguments(["0"])

    def test_not_a_number(self):
        """Unknown words are rejected."""
        with pytest.raises(UsageError, match='Invalid parameter "foo"'):
            parse_keyserver_arguments(["foo"])


class TestKeyserverPersistence:
    """Tests for saved keyserver resolution."""

    def test_default_when_nothing_saved(self, state_db):
        """Falls back to the default keyserver."""
        assert current_keyserver(state_db) == DEFAULT_KEYSERVER

    def test_saved_keyserver_is_used(self, state_db):
        """A saved selection wins over the default."""
        save_keyserver(KEYSERVERS[1], state_db)

        assert get_saved_keyserver(state_db) == KEYSERVERS[1]
        assert current_keyserver(state_db) == KEYSERVERS[1]

    def test_environment_wins(self, state_db, monkeypatch):
        """KEYSERVER overrides the saved selection."""
        save_keyserver(KEYSERVERS[1], state_db)
        monkeypatch.setenv("KEYSERVER", "hkps://example.org")

        assert current_keyserver(state_db) == "hkps://example.org"


class TestGpgks:
    """Tests for the gpgks command."""

    def test_list_prints_numbered(self, state_db, capsys):
        """Listing prints every keyserver with its number."""
        assert gpgks([], db_path=state_db) is None

        out = capsys.readouterr().out
        for i, server in enumerate(KEYSERVERS, 1):
            assert f"{i}: {server}" in out

    def test_all_prints_plain(self, state_db, capsys):
        """all prints one keyserver per line."""
        gpgks(["all"], db_path=state_db)

        assert capsys.readouterr().out.splitlines() == list(KEYSERVERS)

    def test_last_number_is_saved(self, state_db, capsys):
        """The last selected keyserver becomes active."""
        selected = gpgks(["1", "3"], db_path=state_db)

        assert selected == KEYSERVERS[2]
        assert get_saved_keyserver(state_db) == KEYSERVERS[2]
        assert capsys.readouterr().out.splitlines() == [KEYSERVERS[0], KEYSERVERS[2]]

    def test_quiet_selection(self, state_db, capsys):
        """quiet selects without printing."""
        gpgks(["-q", "2"], db_path=state_db)

        assert capsys.readouterr().out == ""
        assert get_saved_keyserver(state_db) == KEYSERVERS[1]


class TestChooseKeyserver:
    """Tests for the interactive keyserver menu."""

    def test_selects_keyserver(self, state_db):
        """A number selects and saves that keyserver."""
        with patch("shellkit.gpg.keyservers.console.input", return_value="4"):
            assert choose_keyserver(db_path=state_db) == KEYSERVERS[3]

        assert get_saved_keyserver(state_db) == KEYSERVERS[3]

    def test_zero_cancels(self, state_db):
        """0 keeps the current keyserver."""
        with patch("shellkit.gpg.keyservers.console.input", return_value="0"):
            assert choose_keyserver(db_path=state_db) is None

        assert get_saved_keyserver(state_db) is None

    def test_not_a_number(self, state_db):
        """Non numeric answers raise UsageError."""
        with patch("shellkit.gpg.keyservers.console.input", return_value="abc"):
            with pytest.raises(UsageError, match="not a number"):
                choose_keyserver(db_path=state_db)

    def test_out_of_bounds(self, state_db):
        """Numbers past the list raise UsageError."""
        with patch("shellkit.gpg.keyservers.console.input", return_value="99"):
            with pytest.raises(UsageError, match="out of bounds"):
                choose_keyserver(db_path=state_db)


def test_export_line():
    """The export line can be evaluated by a POSIX shell."""
    assert export_line("hkps://pgpkeys.eu:443") == "export KEYSERVER='hkps://pgpkeys.eu:443'"
