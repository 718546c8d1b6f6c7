"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Progress lines go to stdout; errors always go to stderr. Messages are
escaped before printing so literal brackets (e.g. "[dry-run]") are not
parsed as Rich markup.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from src.sync.models import ImportSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbose: Print progress lines (skip/created/updated/dry-run)
        console: Rich Console for stdout
        err_console: Rich Console for stderr

    Example:
        >>> handler = OutputHandler(verbose=True)
        >>> handler.print("created: notes/a.md")
        >>> handler.error("Missing NOTION_API_KEY environment variable.")
    """

    def __init__(self, verbose: bool = False, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbose: Enable progress output
            no_color: Disable color output if True
        """
        self.verbose = verbose
        self.console = Console(no_color=no_color, highlight=False)
        self.err_console = Console(stderr=True, no_color=no_color, highlight=False)

    def error(self, message: str) -> None:
        """Display error message in red on stderr.

        Args:
            message: Error message to display
        """
        self.err_console.print(escape(message), style="red", soft_wrap=True)

    def print(self, message: str) -> None:
        """Display message without formatting.

        Args:
            message: Message to display
        """
        self.console.print(escape(message), soft_wrap=True)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a single operation runs.

        Example:
            >>> with handler.spinner("Scanning inputs..."):
            ...     scan = scan_multiple_inputs(paths)
        """
        if not self.console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=escape(message))
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_summary(self, summary: ImportSummary) -> None:
        """Display import summary with color coding."""
        self.console.print("\n[bold]Import Summary:[/bold]")

        if summary.directories_created > 0:
            self.console.print(f"  [blue]▸[/blue] Directory pages: {summary.directories_created}")
        if summary.created > 0:
            self.console.print(f"  [green]+[/green] Created: {summary.created} page(s)")
        if summary.updated > 0:
            self.console.print(f"  [green]↑[/green] Updated: {summary.updated} page(s)")
        if summary.skipped > 0:
            self.console.print(f"  [dim]─[/dim] Unchanged: {summary.skipped} page(s)")
