#!/usr/bin/env python3
"""JSON output formatting helpers."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO


class JsonOutputFormatter:
    """Format a transposed similarity matrix to JSON."""

    def __init__(self, results: dict[str, Any]):
        self.results = results

    def to_json(self, indent: int = 4) -> str:
        """Convert results to JSON format."""
        return json.dumps(self.results, indent=indent)


def emit_json(transposed: dict[str, Any], stream: TextIO | None = None, indent: int = 4) -> None:
    """Print the full nested structure as indented JSON."""
    out = stream if stream is not None else sys.stdout
    out.write(JsonOutputFormatter(transposed).to_json(indent=indent))
    out.write("\n")
