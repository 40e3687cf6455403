"""Result models shared by the comparison engine and the CLI."""

from .results import (
    ComparisonMatrix,
    NestedMatrix,
    PairComparison,
    PairResult,
    ScoreRecord,
    SectionMissing,
    TransposedMatrix,
)

__all__ = [
    "ComparisonMatrix",
    "NestedMatrix",
    "PairComparison",
    "PairResult",
    "ScoreRecord",
    "SectionMissing",
    "TransposedMatrix",
]
