#!/usr/bin/env python3
"""CSV output formatting helpers."""

from __future__ import annotations

import csv
import io
import re
from pathlib import Path

from ..adapters.file_system import default_file_system

DEFAULT_MISSING_VALUE = "0"

_UNSAFE_FILENAME_CHARS = re.compile(r"[/\\\x00]")


def format_score(value: float) -> str:
    """Shortest decimal that round-trips the score (75.5, 100.0, 33.333333333333336)."""
    return repr(float(value))


def section_csv_filename(section_name: str) -> str:
    """``<section>.csv`` with path separators and NUL replaced."""
    stem = _UNSAFE_FILENAME_CHARS.sub("_", section_name)
    if not stem:
        stem = "_unnamed"
    elif stem in (".", ".."):
        stem = stem.replace(".", "_")
    return f"{stem}.csv"


class CsvOutputFormatter:
    """
    Format one section's ``{row_file: {column_file: score}}`` map as a square table.

    The header is an empty cell followed by every second-level key in the
    order first seen. Each first-level key becomes a row; a column with no
    recorded score is written as ``missing_value``.
    """

    def __init__(self, inner_map: dict[str, dict[str, float]], missing_value: str = DEFAULT_MISSING_VALUE):
        self.inner_map = inner_map
        self.missing_value = missing_value

    def headers(self) -> list[str]:
        seen: dict[str, None] = {}
        for row in self.inner_map.values():
            for column in row:
                seen.setdefault(column)
        return list(seen)

    def rows(self) -> list[list[str]]:
        columns = self.headers()
        table = [[""] + columns]
        for row_key, row in self.inner_map.items():
            cells = [row_key]
            for column in columns:
                value = row.get(column)
                cells.append(self.missing_value if value is None else format_score(value))
            table.append(cells)
        return table

    def to_csv(self) -> str:
        output = io.StringIO()
        try:
            writer = csv.writer(output, lineterminator="\n")
            writer.writerows(self.rows())
            return output.getvalue()
        finally:
            output.close()


def emit_csv(
    section_name: str,
    inner_map: dict[str, dict[str, float]],
    directory: str | Path = ".",
    missing_value: str = DEFAULT_MISSING_VALUE,
) -> Path:
    """Write ``<directory>/<section_name>.csv`` and return its path."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / section_csv_filename(section_name)
    formatter = CsvOutputFormatter(inner_map, missing_value=missing_value)
    default_file_system.write_text(target, formatter.to_csv(), newline="")
    return target
