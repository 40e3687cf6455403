#!/usr/bin/env python3
"""
sectiondiff CLI Input Validation Module

Provides input validation for CLI arguments before any binary is opened.

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

from pathlib import Path

from ..core.exceptions import UsageError

USAGE = "Usage: sectiondiff <file1> <file2>\n       sectiondiff --batch <directory>"

MAX_THREADS = 50


def validate_inputs(
    files: tuple[str, ...],
    batch: str | None,
    output: str | None,
    config: str | None,
    threads: int | None,
) -> list[str]:
    """
    Validate all user inputs.

    Args:
        files: Positional file operands
        batch: Batch directory
        output: Output directory for CSV files
        config: Config file path
        threads: Number of worker threads

    Returns:
        List of validation error messages (empty if all valid)
    """
    errors: list[str] = []

    for filename in files:
        errors.extend(validate_file_input(filename))
    errors.extend(validate_batch_input(batch))
    errors.extend(validate_output_input(output))
    errors.extend(validate_config_input(config))
    errors.extend(validate_threads_input(threads))

    return errors


def validate_file_input(filename: str | None) -> list[str]:
    """
    Validate a file operand.

    Missing files are left for the opener so the error names the operand.
    Only paths that exist but cannot be a binary are rejected here.
    """
    errors: list[str] = []
    if not filename:
        return errors

    file_path = Path(filename)
    if file_path.exists() and not file_path.is_file():
        errors.append(f"Path is not a regular file: {filename}")
    return errors


def validate_batch_input(batch: str | None) -> list[str]:
    """Validate batch directory input parameter."""
    errors: list[str] = []
    if not batch:
        return errors

    batch_path = Path(batch)
    if not batch_path.exists():
        errors.append(f"Batch directory does not exist: {batch}")
    elif not batch_path.is_dir():
        errors.append(f"Batch path is not a directory: {batch}")
    return errors


def validate_output_input(output: str | None) -> list[str]:
    """Validate output directory input parameter."""
    errors: list[str] = []
    if not output:
        return errors

    output_path = Path(output)
    if output_path.exists() and not output_path.is_dir():
        errors.append(f"Output path exists and is not a directory: {output}")
    return errors


def validate_config_input(config: str | None) -> list[str]:
    """Validate config file input parameter."""
    errors: list[str] = []
    if not config:
        return errors

    config_path = Path(config)
    if not config_path.exists():
        errors.append(f"Config file does not exist: {config}")
    elif not config_path.is_file():
        errors.append(f"Config path is not a file: {config}")
    elif config_path.suffix.lower() != ".json":
        errors.append(f"Config file must be JSON: {config}")
    return errors


def validate_threads_input(threads: int | None) -> list[str]:
    """Validate threads input parameter."""
    errors: list[str] = []
    if threads is None:
        return errors

    if not isinstance(threads, int) or threads < 1:
        errors.append("Threads must be a positive integer")
    elif threads > MAX_THREADS:
        errors.append(f"Too many threads (max {MAX_THREADS})")
    return errors


def validate_input_mode(files: tuple[str, ...], batch: str | None) -> str:
    """
    Decide between single-pair and batch mode.

    Returns:
        "compare" or "matrix"

    Raises:
        UsageError: Operand count does not fit either mode
    """
    if batch:
        if files:
            raise UsageError(f"--batch takes no file operands\n{USAGE}")
        return "matrix"
    if len(files) != 2:
        raise UsageError(USAGE)
    return "compare"
