#!/usr/bin/env python3
"""
sectiondiff CLI - Command Line Interface

This module provides the Click-based CLI entry point for sectiondiff.
Execution logic lives in the command classes under sectiondiff.cli.commands.

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
from dataclasses import dataclass
from typing import Any

import click

from .cli.commands import (
    Command,
    CommandContext,
    CompareCommand,
    MatrixCommand,
    VersionCommand,
)
from .cli.display import console, display_validation_errors, handle_main_error, print_banner
from .cli.validators import validate_input_mode, validate_inputs
from .config import CONTAINER_FORMATS, KEY_MODES, MISSING_SECTION_POLICIES
from .core.exceptions import UsageError


@dataclass
class CLIArgs:
    files: tuple[str, ...]
    batch: str | None
    output: str | None
    container_format: str | None
    missing: str | None
    skip_nobits: bool
    no_csv: bool
    no_json: bool
    threads: int | None
    keep_going: bool
    key_by: str | None
    table: bool
    config: str | None
    verbose: bool
    quiet: bool
    version: bool


def main(**kwargs: Any):
    """
    sectiondiff - positional section similarity for ELF and PE binaries.
    """
    args = None
    try:
        args = CLIArgs(**kwargs)
        run_cli(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Comparison interrupted by user[/yellow]")
        sys.exit(1)

    except UsageError as e:
        console.print(str(e), markup=False, highlight=False, soft_wrap=True)
        sys.exit(1)

    except Exception as e:
        handle_main_error(e, bool(args and args.verbose))


@click.command()
@click.argument("files", nargs=-1, type=click.Path())
@click.option(
    "--batch",
    "--directory",
    type=click.Path(),
    help="Compare every pair of files below a directory (recursive)",
)
@click.option("-o", "--output", help="Directory for per-section CSV files in batch mode")
@click.option(
    "--format",
    "container_format",
    type=click.Choice(CONTAINER_FORMATS),
    default=None,
    help="Container format (default: auto-detect)",
)
@click.option(
    "--missing",
    type=click.Choice(MISSING_SECTION_POLICIES),
    default=None,
    help="Sections present in only one file: drop them or report them",
)
@click.option(
    "--skip-nobits",
    is_flag=True,
    help="Do not score sections without file bits (.bss), giving compareELF-compatible output",
)
@click.option("--no-csv", is_flag=True, help="Batch mode: do not write CSV files")
@click.option("--no-json", is_flag=True, help="Batch mode: do not print JSON")
@click.option(
    "--threads",
    default=None,
    type=click.IntRange(1, 50),
    help="Number of parallel pair comparisons in batch mode (1-50, default: 1)",
)
@click.option("--keep-going", is_flag=True, help="Batch mode: skip unreadable files instead of aborting")
@click.option(
    "--key-by",
    type=click.Choice(KEY_MODES),
    default=None,
    help="How batch files are named in the matrix (default: base name)",
)
@click.option("--table", is_flag=True, help="Render the single-pair report as a table")
@click.option("--config", help="Custom config file path")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--quiet", is_flag=True, help="Only print results and errors")
@click.option("--version", is_flag=True, help="Show version information and exit")
def cli(**kwargs: Any):
    """Click-based CLI entry point."""
    main(**kwargs)


def run_cli(args: CLIArgs) -> None:
    """Primary CLI workflow separated for clarity and testability."""
    if args.version:
        _execute_version(args.verbose)

    validation_errors = validate_inputs(
        args.files,
        args.batch,
        args.output,
        args.config,
        args.threads,
    )
    if validation_errors:
        display_validation_errors(validation_errors)
        sys.exit(1)

    mode = validate_input_mode(args.files, args.batch)

    if args.table and not args.quiet:
        print_banner()

    context = _build_context(args.verbose, args.quiet, mode == "matrix")
    _dispatch_command(context, args, mode)


def _execute_version(verbose: bool) -> None:
    """Run the VersionCommand and exit."""
    version_cmd = VersionCommand(CommandContext.create(verbose=verbose))
    sys.exit(version_cmd.execute({}))


def _build_context(verbose: bool, quiet: bool, batch: bool) -> CommandContext:
    return CommandContext.create(
        config=None,
        verbose=verbose,
        quiet=quiet,
        batch=batch,
    )


def _dispatch_command(context: CommandContext, args: CLIArgs, mode: str) -> None:
    """Dispatch to the appropriate command based on CLI arguments."""
    command: Command
    if mode == "matrix":
        command = MatrixCommand(context)
        exit_code = command.execute(
            {
                "batch": args.batch,
                "output": args.output,
                "config": args.config,
                "format": args.container_format,
                "missing": args.missing,
                "skip_nobits": args.skip_nobits,
                "threads": args.threads,
                "keep_going": args.keep_going,
                "key_by": args.key_by,
                "no_csv": args.no_csv,
                "no_json": args.no_json,
            }
        )
        sys.exit(exit_code)

    command = CompareCommand(context)
    exit_code = command.execute(
        {
            "file1": args.files[0],
            "file2": args.files[1],
            "config": args.config,
            "format": args.container_format,
            "missing": args.missing,
            "skip_nobits": args.skip_nobits,
            "table": args.table,
        }
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
