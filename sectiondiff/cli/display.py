#!/usr/bin/env python3
"""
sectiondiff CLI Display Module

Provides output formatting and display functions for comparison results.

Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

import sys

import click

try:
    import pyfiglet
except Exception:  # pragma: no cover - optional dependency
    pyfiglet = None
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..domain.results import PairComparison
from ..modules.similarity_scoring import average_score

# Diagnostics go to stderr; stdout is reserved for results
console = Console(stderr=True)
stdout_console = Console()


def format_similarity_line(name: str, value: float) -> str:
    return f"Similarity of section {name}: {value:.2f}%"


def format_missing_line(name: str, operand: int) -> str:
    return f"Error: Section {name} not present in file{operand}"


def format_undefined_line(name: str) -> str:
    return f"Error: Unable to calculate similarity of section {name}"


NO_COMMON_SECTIONS = "Error: No common sections present in both files"


def format_error(error: Exception) -> str:
    message = str(error)
    if message.startswith("Error"):
        return message
    return f"Error: {message}"


def print_banner():
    """Print sectiondiff banner"""
    if pyfiglet is not None:
        banner = pyfiglet.figlet_format("sectiondiff", font="slant")
        console.print(f"[bold blue]{escape(banner)}[/bold blue]")
    else:
        console.print("[bold blue]sectiondiff[/bold blue]")
    console.print("[bold]Positional section similarity for ELF and PE binaries[/bold]\n")


def display_pair_lines(comparison: PairComparison) -> None:
    """Plain per-section report, one line per section."""
    for name, value in comparison.scores.items():
        click.echo(format_similarity_line(name, value))
    for missing in comparison.missing:
        click.echo(format_missing_line(missing.name, missing.operand))
    for name in comparison.undefined:
        click.echo(format_undefined_line(name))
    if not comparison.scores:
        click.echo(NO_COMMON_SECTIONS)


def display_pair_table(comparison: PairComparison) -> None:
    """Rich table rendering of a single pair comparison."""
    table = Table(
        title=f"{escape(comparison.file_a)} vs {escape(comparison.file_b)}",
        show_header=True,
        expand=True,
    )
    table.add_column("Section", style="cyan", no_wrap=True)
    table.add_column("Similarity", justify="right")
    table.add_column("Status", style="dim")

    for name, value in comparison.scores.items():
        table.add_row(escape(name), f"[{_score_style(value)}]{value:.2f}%[/]", "")
    for missing in comparison.missing:
        table.add_row(escape(missing.name), "-", f"[yellow]missing in file{missing.operand}[/yellow]")
    for name in comparison.undefined:
        table.add_row(escape(name), "-", "[red]undefined[/red]")
    for name in comparison.skipped_nobits:
        table.add_row(escape(name), "-", "no file bits")

    average = average_score(comparison.scores.values())
    if average is not None:
        table.caption = f"Average over {len(comparison.scores)} sections: {average:.2f}%"
    else:
        table.caption = NO_COMMON_SECTIONS

    stdout_console.print(table)


def _score_style(value: float) -> str:
    if value >= 90.0:
        return "green"
    if value >= 50.0:
        return "yellow"
    return "red"


def display_failures(failures: list[tuple[str, str, str]]) -> None:
    """List pairs that were skipped because of open/read errors."""
    table = Table(title="Failed comparisons", show_header=True)
    table.add_column("File A", style="cyan")
    table.add_column("File B", style="cyan")
    table.add_column("Error", style="red")
    for file_a, file_b, message in failures:
        table.add_row(escape(file_a), escape(file_b), escape(message))
    console.print(table)


def display_validation_errors(validation_errors):
    """Display validation errors"""
    for error in validation_errors:
        console.print(f"[red]Error: {escape(error)}[/red]", soft_wrap=True)


def handle_main_error(e: Exception, verbose: bool) -> None:
    """
    Handle errors in main function.

    Args:
        e: Exception that occurred
        verbose: Enable verbose error output
    """
    console.print(f"[red]{escape(format_error(e))}[/red]", soft_wrap=True)
    if verbose:
        import traceback

        traceback.print_exc()
    sys.exit(1)
