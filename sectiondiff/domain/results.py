"""Typed result models for comparison outputs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass, field
from typing import Any

# section name -> score
PairResult = dict[str, float]
# file_a -> file_b -> section -> score
NestedMatrix = dict[str, dict[str, dict[str, float]]]
# section -> file_b -> file_a -> score
TransposedMatrix = dict[str, dict[str, dict[str, float]]]


@dataclass(frozen=True)
class SectionMissing:
    """A section present in one operand only; ``operand`` is the side lacking it."""

    name: str
    operand: int


@dataclass
class PairComparison:
    """Detailed outcome of comparing two images."""

    file_a: str
    file_b: str
    scores: PairResult = field(default_factory=dict)
    missing: list[SectionMissing] = field(default_factory=list)
    undefined: list[str] = field(default_factory=list)
    skipped_nobits: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreRecord:
    """One cell of the sparse (file_a, file_b, section) similarity table."""

    file_a: str
    file_b: str
    section: str
    score: float


class ComparisonMatrix:
    """
    All-pairs similarity table stored as explicit records.

    Cells are keyed by the ordered file pair; inserting a pair again replaces
    that pair's records. Self pairs are rejected. ``by_file_pair`` and
    ``by_section`` build the two nested views on demand.
    """

    def __init__(self, records: Iterable[ScoreRecord] = ()):
        self._cells: dict[tuple[str, str], dict[str, ScoreRecord]] = {}
        for record in records:
            self._add_record(record)

    def _add_record(self, record: ScoreRecord) -> None:
        if record.file_a == record.file_b:
            raise ValueError(f"Refusing self comparison entry for {record.file_a}")
        cell = self._cells.setdefault((record.file_a, record.file_b), {})
        cell[record.section] = record

    def set_pair(self, file_a: str, file_b: str, result: PairResult) -> None:
        """Store ``result`` as the cell for (file_a, file_b), replacing any earlier cell."""
        if file_a == file_b:
            raise ValueError(f"Refusing self comparison entry for {file_a}")
        self._cells[(file_a, file_b)] = {
            section: ScoreRecord(file_a, file_b, section, value) for section, value in result.items()
        }

    def get_pair(self, file_a: str, file_b: str) -> PairResult | None:
        cell = self._cells.get((file_a, file_b))
        if cell is None:
            return None
        return {section: record.score for section, record in cell.items()}

    def has_pair(self, file_a: str, file_b: str) -> bool:
        return (file_a, file_b) in self._cells

    def pairs(self) -> list[tuple[str, str]]:
        return list(self._cells)

    def files(self) -> list[str]:
        seen: dict[str, None] = {}
        for file_a, file_b in self._cells:
            seen.setdefault(file_a)
            seen.setdefault(file_b)
        return list(seen)

    def sections(self) -> list[str]:
        seen: dict[str, None] = {}
        for record in self:
            seen.setdefault(record.section)
        return list(seen)

    def records(self) -> list[ScoreRecord]:
        return list(self)

    def __iter__(self) -> Iterator[ScoreRecord]:
        for cell in self._cells.values():
            yield from cell.values()

    def __len__(self) -> int:
        return sum(len(cell) for cell in self._cells.values())

    def by_file_pair(self) -> NestedMatrix:
        """Nested view ``{file_a: {file_b: {section: score}}}``."""
        nested: NestedMatrix = {}
        for (file_a, file_b), cell in self._cells.items():
            nested.setdefault(file_a, {})[file_b] = {
                section: record.score for section, record in cell.items()
            }
        return nested

    def by_section(self) -> TransposedMatrix:
        """Nested view ``{section: {file_b: {file_a: score}}}``."""
        nested: TransposedMatrix = {}
        for record in self:
            nested.setdefault(record.section, {}).setdefault(record.file_b, {})[
                record.file_a
            ] = record.score
        return nested

    @classmethod
    def from_nested(cls, nested: NestedMatrix) -> ComparisonMatrix:
        matrix = cls()
        for file_a, row in nested.items():
            for file_b, result in row.items():
                matrix.set_pair(file_a, file_b, result)
        return matrix

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparisonMatrix):
            return NotImplemented
        return self.by_file_pair() == other.by_file_pair()

    def __repr__(self) -> str:
        return f"ComparisonMatrix(pairs={len(self._cells)}, records={len(self)})"
