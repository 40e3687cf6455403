#!/usr/bin/env python3
"""
sectiondiff CLI Commands - Compare Command

Single-pair section similarity report.

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

from typing import Any

from rich.markup import escape

from ...config import Config
from ...core.exceptions import SectionDiffError
from ...core.pair_comparator import MissingSectionPolicy, PairComparator
from ..display import display_pair_lines, display_pair_table, format_error
from .base import Command


class CompareCommand(Command):
    """
    Compare the same-named sections of two binaries.

    Prints one line per section and exits 0, including when the files
    share no section. Open and read failures exit 1.
    """

    def execute(self, args: dict[str, Any]) -> int:
        """
        Args:
            args: Dictionary containing:
                - file1, file2: Paths to the two binaries
                - config: Optional config file path
                - format, missing, skip_nobits: Optional config overrides
                - table: Render a rich table instead of plain lines

        Returns:
            0 on success, 1 on failure
        """
        try:
            config = self._get_config(args.get("config"))
            config.apply_overrides(
                {
                    "comparison": {
                        "format": args.get("format"),
                        "missing_sections": args.get("missing"),
                        "skip_nobits": args.get("skip_nobits") or None,
                    }
                }
            )
            comparator = self._build_comparator(config)
            comparison = comparator.compare_detailed(args["file1"], args["file2"])
        except (SectionDiffError, ValueError) as e:
            return self._handle_error(format_error(e))

        if args.get("table"):
            display_pair_table(comparison)
        else:
            display_pair_lines(comparison)
        return 0

    def _build_comparator(self, config: Config) -> PairComparator:
        return PairComparator(
            policy=MissingSectionPolicy(config.get("comparison", "missing_sections")),
            skip_nobits=bool(config.get("comparison", "skip_nobits")),
            container_format=config.get("comparison", "format"),
        )

    def _handle_error(self, message: str) -> int:
        self.context.logger.debug(f"Comparison failed: {message}", exc_info=self.context.verbose)
        self.context.console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
        return 1
