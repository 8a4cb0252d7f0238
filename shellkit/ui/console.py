"""Console UI wrapper using Rich library."""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from shellkit.config.settings import SEPARATOR_WIDTH


class ConsoleUI:
    """
    Wrapper for Rich Console providing styled output methods.

    Centralizes console output with consistent styling for
    different message types (info, warning, error, success).
    Errors go to stderr so command output can still be piped.
    """

    def __init__(self) -> None:
        """Initialize with Rich Consoles for stdout and stderr."""
        self.console = Console(highlight=False)
        self.error_console = Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs) -> None:
        """Print to console (delegates to Rich Console)."""
        self.console.print(*args, **kwargs)

    def print_plain(self, text: str) -> None:
        """Print text without markup or highlighting, for machine-readable output."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def separator(self, style: str = "bold dim cyan") -> None:
        """Print a fixed-width line of '=' characters followed by a blank line."""
        self.console.print(f"[{style}]{'=' * SEPARATOR_WIDTH}[/{style}]\n")

    def print_info(self, message: str) -> None:
        """Print an info message with blue styling."""
        self.console.print(f"[bold blue]{escape(message)}[/bold blue]")

    def print_message(self, message: str, detail: Optional[str] = None) -> None:
        """Print a progress message in green, with an optional dimmed detail."""
        if detail:
            self.console.print(
                f"[green]{escape(message)}.[/green] [dim green]({escape(detail)})[/dim green]"
            )
        else:
            self.console.print(f"[green]{escape(message)}[/green]")

    def print_warning(self, message: str) -> None:
        """Print a warning message with yellow styling."""
        self.error_console.print(f"[bold yellow]{escape(message)}[/bold yellow]")

    def print_error(self, message: str, code: Optional[int] = None) -> None:
        """Print an error message with red styling, prefixed by its code if any."""
        prefix = f"(Error:{code}) " if code is not None else "Error: "
        self.error_console.print(f"[bold red]{prefix}[/bold red][red]{escape(message)}[/red]")

    def print_success(self, message: str) -> None:
        """Print a success message with green styling."""
        self.console.print(f"[bold green]{escape(message)}[/bold green]")

    def print_simulation(self, message: str) -> None:
        """Print a simulation message with dim styling."""
        self.console.print(f"[dim]SIMULATION - {escape(message)}[/dim]")

    def print_list(self, items: Iterable[str], style: str = "") -> None:
        """Print one item per line."""
        for item in items:
            if style:
                self.console.print(f"[{style}]{escape(str(item))}[/{style}]")
            else:
                self.print_plain(str(item))

    def input(self, prompt: str) -> str:
        """Prompt the user and return the raw line they typed."""
        return self.console.input(prompt)


# Global console instance shared by the command modules
console = ConsoleUI()
