"""UI tables for displaying structured data.

This module provides functions for creating and displaying Rich tables
with consistent styling across the application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.table import Table

from .console import console

if TYPE_CHECKING:
    from ecalfit.core.domain.config import PeakWindow
    from ecalfit.core.results.statistics import GOFResult

__all__ = [
    "create_table",
    "print_gof_table",
    "print_summary",
    "print_windows_table",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header

    Returns
    -------
        Configured Table instance
    """
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a standard two-column summary table."""
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def print_windows_table(windows: dict[str, PeakWindow], title: str = "Peak windows") -> None:
    """Print calibration peak windows, one row per line."""
    table = create_table(title)
    table.add_column("Line", style="key")
    table.add_column("Left", justify="right")
    table.add_column("Right", justify="right")
    table.add_column("Width", justify="right", style="value")

    for label, window in windows.items():
        table.add_row(label, f"{window.left:.2f}", f"{window.right:.2f}", f"{window.width:.2f}")

    console.print(table)


def print_gof_table(results: dict[str, GOFResult | float], title: str = "Goodness of fit") -> None:
    """Print p-values of several goodness-of-fit tests side by side."""
    table = create_table(title)
    table.add_column("Test", style="key")
    table.add_column("p-value", justify="right", style="metric")
    table.add_column("Statistic", justify="right")
    table.add_column("dof", justify="right")
    table.add_column("Reliable", justify="center")

    for name, result in results.items():
        if isinstance(result, float):
            table.add_row(name, f"{result:.3f}", "-", "-", "-")
        else:
            table.add_row(
                name,
                f"{result.p_value:.3f}",
                f"{result.statistic:.2f}",
                str(result.dof),
                "yes" if result.is_reliable else "[warning]no[/warning]",
            )

    console.print(table)
