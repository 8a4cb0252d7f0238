"""Tests for console UI wrapper."""

import pytest
from unittest.mock import patch

from shellkit.ui.console import ConsoleUI


class TestConsoleUI:
    """Tests for ConsoleUI class."""

    def test_initialization(self):
        """ConsoleUI initializes with Rich Consoles."""
        ui = ConsoleUI()
        assert ui.console is not None
        assert ui.error_console.stderr is True

    def test_print_delegates_to_console(self):
        """print() delegates to Rich Console."""
        ui = ConsoleUI()
        with patch.object(ui.console, 'print') as mock_print:
            ui.print("test message")
            mock_print.assert_called_once_with("test message")

    def test_print_info(self):
        """print_info() prints with info styling."""
        ui = ConsoleUI()
        with patch.object(ui.console, 'print') as mock_print:
            ui.print_info("Info message")
            args = mock_print.call_args[0][0]
            assert "Info message" in args
            assert "blue" in args

    def test_print_warning_goes_to_stderr(self):
        """print_warning() uses the stderr console."""
        ui = ConsoleUI()
        with patch.object(ui.error_console, 'print') as mock_print:
            ui.print_warning("Warning message")
            mock_print.assert_called_once()
            assert "Warning message" in mock_print.call_args[0][0]

    def test_print_error_with_code(self):
        """print_error() prefixes the error code."""
        ui = ConsoleUI()
        with patch.object(ui.error_console, 'print') as mock_print:
            ui.print_error("Error message", 7)
            args = mock_print.call_args[0][0]
            assert "(Error:7)" in args
            assert "Error message" in args

    def test_print_error_without_code(self):
        """print_error() without code uses a plain prefix."""
        ui = ConsoleUI()
        with patch.object(ui.error_console, 'print') as mock_print:
            ui.print_error("Error message")
            assert "Error: " in mock_print.call_args[0][0]

    def test_markup_is_escaped(self, capsys):
        """User text containing brackets is printed literally."""
        ui = ConsoleUI()
        ui.print_success("file [1].mp4")
        assert "file [1].mp4" in capsys.readouterr().out

    def test_print_simulation(self):
        """print_simulation() prefixes SIMULATION."""
        ui = ConsoleUI()
        with patch.object(ui.console, 'print') as mock_print:
            ui.print_simulation("Move a -> b")
            assert "SIMULATION - Move a -> b" in mock_print.call_args[0][0]

    def test_print_message_with_detail(self, capsys):
        """print_message() shows the detail in parentheses."""
        ui = ConsoleUI()
        ui.print_message("Found 3 videos", "Total count: 3")
        assert "Found 3 videos. (Total count: 3)" in capsys.readouterr().out

    def test_print_list_plain(self, capsys):
        """print_list() prints one item per line."""
        ui = ConsoleUI()
        ui.print_list(["a", "b"])
        assert capsys.readouterr().out == "a\nb\n"

    def test_separator(self, capsys):
        """separator() prints 80 '=' then a blank line."""
        ui = ConsoleUI()
        ui.separator()
        assert capsys.readouterr().out == "=" * 80 + "\n\n"

