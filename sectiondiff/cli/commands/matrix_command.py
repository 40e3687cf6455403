#!/usr/bin/env python3
"""
sectiondiff CLI Commands - Matrix Command

All-pairs section similarity over a directory, emitted as JSON and CSV.

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
from typing import Any

from rich.markup import escape

from ...config import Config
from ...core.exceptions import SectionDiffError
from ...core.matrix_builder import MatrixBuilder
from ...core.matrix_transposer import transpose
from ...core.pair_comparator import MissingSectionPolicy, PairComparator
from ...domain.results import TransposedMatrix
from ...utils.output_csv import emit_csv
from ...utils.output_json import emit_json
from ..batch_workers import run_matrix_build
from ..display import display_failures, format_error
from .base import Command


class MatrixCommand(Command):
    """
    Build the all-pairs matrix for a directory.

    The transposed matrix (section -> file_b -> file_a -> score) is printed
    as JSON on stdout and written as one CSV per section. With --keep-going
    the pairs that failed are listed afterwards and the exit code is 1.
    """

    def execute(self, args: dict[str, Any]) -> int:
        """
        Args:
            args: Dictionary containing:
                - batch: Directory to sweep
                - output: CSV output directory
                - config: Optional config file path
                - format, missing, skip_nobits, threads, keep_going,
                  key_by, no_csv, no_json: Optional config overrides

        Returns:
            0 on success, 1 on failure
        """
        try:
            config = self._get_config(args.get("config"))
            config.apply_overrides(self._overrides(args))
            builder = self._build_builder(config)
            matrix = run_matrix_build(
                builder,
                args["batch"],
                console=self.context.console,
                show_progress=not self.context.quiet,
            )
        except (SectionDiffError, ValueError) as e:
            return self._handle_error(e)

        transposed = transpose(matrix)
        self.context.logger.info(
            f"Matrix holds {len(matrix)} scores over {len(transposed)} sections"
        )

        try:
            self._emit(config, transposed)
        except OSError as e:
            return self._handle_error(e)

        if builder.failures:
            display_failures(builder.failures)
            return 1
        return 0

    def _overrides(self, args: dict[str, Any]) -> dict[str, dict[str, Any]]:
        return {
            "comparison": {
                "format": args.get("format"),
                "skip_nobits": args.get("skip_nobits") or None,
            },
            "matrix": {
                "missing_sections": args.get("missing"),
                "max_workers": args.get("threads"),
                "fail_fast": False if args.get("keep_going") else None,
                "key_by": args.get("key_by"),
            },
            "output": {
                "csv_directory": args.get("output"),
                "write_csv": False if args.get("no_csv") else None,
                "write_json": False if args.get("no_json") else None,
            },
        }

    def _build_builder(self, config: Config) -> MatrixBuilder:
        comparator = PairComparator(
            policy=MissingSectionPolicy(config.get("matrix", "missing_sections")),
            skip_nobits=bool(config.get("comparison", "skip_nobits")),
            container_format=config.get("comparison", "format"),
        )
        return MatrixBuilder(
            comparator=comparator,
            max_workers=config.get("matrix", "max_workers"),
            fail_fast=bool(config.get("matrix", "fail_fast")),
            cache_sections=bool(config.get("matrix", "cache_sections")),
            key_by=config.get("matrix", "key_by"),
        )

    def _emit(self, config: Config, transposed: TransposedMatrix) -> None:
        if config.get("output", "write_json"):
            emit_json(transposed, indent=config.get("output", "json_indent", 4))

        if not config.get("output", "write_csv"):
            return
        directory = Path(config.get("output", "csv_directory", "."))
        missing_value = str(config.get("output", "csv_missing_value", "0"))
        for section_name, inner_map in transposed.items():
            target = emit_csv(section_name, inner_map, directory, missing_value=missing_value)
            self.context.logger.debug(f"Wrote {target}")

    def _handle_error(self, error: Exception) -> int:
        self.context.logger.debug(f"Matrix build failed: {error}", exc_info=self.context.verbose)
        self.context.console.print(f"[red]{escape(format_error(error))}[/red]", soft_wrap=True)
        return 1
