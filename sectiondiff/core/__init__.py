"""Section extraction, pairwise comparison and matrix building."""

from .exceptions import (
    DuplicateFileKeyError,
    MissingSectionWarning,
    OpenError,
    ScoreUndefined,
    SectionDiffError,
    SectionReadError,
    UsageError,
)
from .matrix_builder import FileKeyMode, MatrixBuilder, build
from .matrix_transposer import transpose
from .pair_comparator import MissingSectionPolicy, PairComparator, SectionCache, compare
from .section_reader import SectionMap, read_sections

__all__ = [
    "DuplicateFileKeyError",
    "FileKeyMode",
    "MatrixBuilder",
    "MissingSectionPolicy",
    "MissingSectionWarning",
    "OpenError",
    "PairComparator",
    "ScoreUndefined",
    "SectionCache",
    "SectionDiffError",
    "SectionMap",
    "SectionReadError",
    "UsageError",
    "build",
    "compare",
    "read_sections",
    "transpose",
]
