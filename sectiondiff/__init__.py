#!/usr/bin/env python3
"""
sectiondiff - positional byte similarity of ELF and PE sections

Compares same-named sections of two binaries, or every pair of binaries in a
directory, and reports the share of equal bytes at equal offsets.

Author: Marc Rivero (@seifreed)
License: GPL-3.0
"""

from .__version__ import __author__, __author_email__, __license__, __version__

__description__ = "Positional section similarity for ELF and PE binaries"

# core first: the adapters import core.exceptions
from .core import (
    MatrixBuilder,
    MissingSectionPolicy,
    PairComparator,
    SectionDiffError,
    build,
    compare,
    read_sections,
    transpose,
)
from .domain import ComparisonMatrix, PairComparison
from .factory import open_image
from .modules import score

__all__ = [
    "ComparisonMatrix",
    "MatrixBuilder",
    "MissingSectionPolicy",
    "PairComparator",
    "PairComparison",
    "SectionDiffError",
    "build",
    "compare",
    "open_image",
    "read_sections",
    "score",
    "transpose",
    "__version__",
    "__author__",
    "__author_email__",
    "__license__",
    "__description__",
]
