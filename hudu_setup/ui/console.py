"""
Console output utilities built on Rich.
"""

from typing import List, Optional

from rich.console import Console as RichConsole
from rich.panel import Panel


BANNER = """
  ╦ ╦╦ ╦╔╦╗╦ ╦
  ╠═╣║ ║ ║║║ ║
  ╩ ╩╚═╝═╩╝╚═╝
  Self-Hosted .env Wizard
"""


class Console:
    """
    Console output for the wizard.

    Everything the operator sees goes through here, so tests can swap in a
    Rich console that records instead of printing.
    """

    def __init__(self, no_color: bool = False, quiet: bool = False, rich_console: Optional[RichConsole] = None):
        """
        Initialize the console.

        Args:
            no_color: Disable all colors in output
            quiet: Suppress informational output (errors and warnings still print)
            rich_console: Use this Rich console instead of creating one
        """
        self.no_color = no_color
        self.quiet = quiet
        self._console = rich_console or RichConsole(
            color_system=None if no_color else "auto",
            highlight=False,
        )

    def print(self, message: str = "", style: Optional[str] = None) -> None:
        """Print a message with optional styling."""
        if not self.quiet:
            self._console.print(message, style=style)

    def print_raw(self, text: str) -> None:
        """Print text without markup processing (e.g. file previews)."""
        self._console.print(text, markup=False, highlight=False, emoji=False, end="")

    def print_banner(self) -> None:
        """Print the Hudu setup banner."""
        if not self.quiet:
            self._console.print(
                Panel(BANNER, style="bold cyan", title="Hudu", border_style="cyan")
            )

    def print_step(self, step_num: int, total_steps: int, step_name: str) -> None:
        """Print a formatted step header."""
        if self.quiet:
            return
        self._console.print()
        self._console.print(
            f"[bold cyan][{step_num}/{total_steps}][/bold cyan] [bold]{step_name}[/bold]"
        )

    def dim(self, message: str) -> None:
        """Print a de-emphasised hint line."""
        if not self.quiet:
            self._console.print(f"    [dim]{message}[/dim]")

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self.quiet:
            self._console.print(f"    [green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(f"[yellow]⚠  {message}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error message."""
        self._console.print(f"[yellow]✗[/yellow] {message}")

    def retry(self, message: str) -> None:
        """Explain why an answer was rejected before asking again."""
        self._console.print(f"    [yellow]↳ {message}[/yellow]")

    def rule(self, style: str = "green") -> None:
        if not self.quiet:
            self._console.print("━" * 51, style=style)

    def print_choices(self, choices: List[tuple]) -> None:
        """
        Print a list of choices.

        Args:
            choices: List of (label, description lines) tuples
        """
        if self.quiet:
            return
        for label, lines in choices:
            self._console.print(f"    [bold]{label}[/bold]  - {lines[0]}")
            for line in lines[1:]:
                self._console.print(f"    {' ' * len(label)}    [dim]{line}[/dim]")
            self._console.print()
