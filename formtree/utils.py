"""Shared console helpers for formtree.

Rich-based status output used by the CLI and the submission consumers.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

console = Console()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_field_errors(errors: dict[str, str]) -> None:
    """Print the messages shown by a rejected form, one per error element."""
    table = Table(title="Validation errors", show_header=True, header_style="bold red")
    table.add_column("Field", no_wrap=True)
    table.add_column("Message")

    for element_id, message in errors.items():
        table.add_row(element_id, message)

    console.print(table)
