#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"


class InfoPanel:
    """
    Simple panel for displaying status/info.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


def show_table(title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    """Print rows as a rounded table; cells are rendered with str()."""
    table = Table(title=title, box=box.ROUNDED, header_style=f"bold {COLOR_INFO}")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*("" if cell is None else str(cell) for cell in row))
    console.print(table)


def print_raw(text: str) -> None:
    """Print text verbatim (no markup, no highlighting, no wrapping)."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")
