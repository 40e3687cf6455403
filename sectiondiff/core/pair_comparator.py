#!/usr/bin/env python3
"""
Pair comparator - per-section similarity between two images

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from ..domain.results import PairComparison, PairResult, SectionMissing
from ..factory import open_image
from ..modules.similarity_scoring import is_defined, score
from ..utils.file_type import FORMAT_AUTO
from ..utils.logger import get_logger
from .exceptions import MissingSectionWarning, OpenError, ScoreUndefined
from .section_reader import SectionMap, read_sections

logger = get_logger(__name__)


class MissingSectionPolicy(Enum):
    """What to do with a section name present in only one operand"""

    DROP = "drop"  # Skip silently (matrix path)
    REPORT = "report"  # Record and log it (single-pair diagnostics)


class SectionCache:
    """
    Thread-safe path -> SectionMap cache.

    Entries are never mutated once stored; concurrent loads of the same path
    may both parse the file, the first stored map wins.
    """

    def __init__(self):
        self._maps: dict[str, SectionMap] = {}
        self._lock = threading.Lock()

    def get_or_load(self, path: str, loader: Callable[[], SectionMap]) -> SectionMap:
        with self._lock:
            cached = self._maps.get(path)
        if cached is not None:
            return cached
        section_map = loader()
        with self._lock:
            return self._maps.setdefault(path, section_map)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._maps

    def __len__(self) -> int:
        with self._lock:
            return len(self._maps)


class PairComparator:
    """Compare the same-named sections of two binary images"""

    def __init__(
        self,
        policy: MissingSectionPolicy = MissingSectionPolicy.DROP,
        skip_nobits: bool = False,
        container_format: str = FORMAT_AUTO,
        section_cache: SectionCache | None = None,
    ):
        self.policy = policy
        self.skip_nobits = skip_nobits
        self.container_format = container_format
        self.section_cache = section_cache

    def load_sections(self, path: str | Path, operand: int | None = None) -> SectionMap:
        """Open ``path``, read its SectionMap and close it again."""
        filename = str(path)

        def _load() -> SectionMap:
            try:
                image = open_image(filename, self.container_format)
            except OpenError as e:
                if operand is not None:
                    raise e.with_operand(operand) from e
                raise
            with image:
                return read_sections(image)

        if self.section_cache is not None:
            return self.section_cache.get_or_load(filename, _load)
        return _load()

    def compare(self, path_a: str | Path, path_b: str | Path) -> PairResult:
        """Section name -> similarity score for sections present in both images."""
        return self.compare_detailed(path_a, path_b).scores

    def compare_detailed(self, path_a: str | Path, path_b: str | Path) -> PairComparison:
        sections_a = self.load_sections(path_a, operand=1)
        sections_b = self.load_sections(path_b, operand=2)
        result = PairComparison(file_a=str(path_a), file_b=str(path_b))

        for name, content_a in sections_a.items():
            if name not in sections_b:
                self._record_missing(result, name, operand=2)
                continue

            if self.skip_nobits and (sections_a.is_nobits(name) or sections_b.is_nobits(name)):
                result.skipped_nobits.append(name)
                continue

            value = score(content_a, sections_b[name])
            if not is_defined(value):
                logger.warning(
                    f"{ScoreUndefined.__name__}: similarity of section {name} between "
                    f"{path_a} and {path_b} is not a finite number"
                )
                result.undefined.append(name)
                continue

            result.scores[name] = value

        if self.policy is MissingSectionPolicy.REPORT:
            for name in sections_b:
                if name not in sections_a:
                    self._record_missing(result, name, operand=1)

        logger.debug(f"Compared {path_a} with {path_b}: {len(result.scores)} common sections")
        return result

    def _record_missing(self, result: PairComparison, name: str, operand: int) -> None:
        if self.policy is not MissingSectionPolicy.REPORT:
            return
        result.missing.append(SectionMissing(name=name, operand=operand))
        logger.info(f"{MissingSectionWarning.__name__}: section {name} not present in file{operand}")


def compare(
    path_a: str | Path,
    path_b: str | Path,
    policy: MissingSectionPolicy = MissingSectionPolicy.DROP,
) -> PairResult:
    """Convenience wrapper around PairComparator.compare"""
    return PairComparator(policy=policy).compare(path_a, path_b)
