#!/usr/bin/env python3
"""
Matrix builder - all-pairs section similarity over a directory

Every ordered pair of distinct files is compared, so the cost grows with the
square of the file count (each cell costing sections x section size). That
quadratic sweep is the scaling limit of the tool; nothing is pruned.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import copy
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from pathlib import Path
from typing import Protocol

from ..domain.results import ComparisonMatrix, PairResult
from ..utils.logger import get_logger
from .exceptions import DuplicateFileKeyError, OpenError, SectionDiffError
from .pair_comparator import MissingSectionPolicy, PairComparator, SectionCache

logger = get_logger(__name__)


class FileKeyMode(Enum):
    """How files found in the batch directory are keyed in the matrix"""

    NAME = "name"  # Base name; later duplicates overwrite earlier ones
    RELATIVE = "relative"  # Path relative to the batch directory
    STRICT = "strict"  # Base name; duplicates are an error


class BuildProgress(Protocol):
    def start(self, total: int) -> None: ...

    def advance(self, file_a: str, file_b: str) -> None: ...


class MatrixBuilder:
    """
    Build a ComparisonMatrix for every regular file below a directory.

    Attributes:
        comparator: PairComparator used for each ordered pair
        max_workers: Number of pair comparisons run concurrently (1 = sequential)
        fail_fast: Abort the whole build on the first open/read error
        key_mode: FileKeyMode used to name matrix rows and columns
        failures: (file_a, file_b, message) for pairs skipped when not failing fast
    """

    def __init__(
        self,
        comparator: PairComparator | None = None,
        max_workers: int = 1,
        fail_fast: bool = True,
        cache_sections: bool = True,
        key_by: FileKeyMode | str = FileKeyMode.NAME,
    ):
        if comparator is None:
            comparator = PairComparator(policy=MissingSectionPolicy.DROP)
        if cache_sections and comparator.section_cache is None:
            comparator = copy.copy(comparator)
            comparator.section_cache = SectionCache()
        self.comparator = comparator
        self.max_workers = max(1, int(max_workers))
        self.fail_fast = fail_fast
        self.key_mode = FileKeyMode(key_by)
        self.failures: list[tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def discover_files(self, directory: str | Path) -> dict[str, Path]:
        """
        Map matrix key -> file path for every regular file below ``directory``.

        Subdirectories are walked, but in NAME mode their files are keyed by
        base name only, so same-named files collide and the one processed
        last wins.
        """
        root = Path(directory)
        if not root.is_dir():
            raise OpenError(str(root), "not a directory")

        files: dict[str, Path] = {}
        for path in sorted(root.rglob("*")):
            if not path.is_file():
                continue
            key = self._key_for(root, path)
            previous = files.get(key)
            if previous is not None:
                if self.key_mode is FileKeyMode.STRICT:
                    raise DuplicateFileKeyError(key, str(previous), str(path))
                logger.warning(f"{path} shares the name '{key}' with {previous}; keeping {path}")
            files[key] = path
        return files

    def _key_for(self, root: Path, path: Path) -> str:
        if self.key_mode is FileKeyMode.RELATIVE:
            return path.relative_to(root).as_posix()
        return path.name

    def build(self, directory: str | Path, progress: BuildProgress | None = None) -> ComparisonMatrix:
        """
        Compare every ordered pair (X, Y), X != Y, of files in ``directory``.

        Raises:
            OpenError: Directory missing, or a file failed to open (fail_fast)
            SectionReadError: A section could not be read (fail_fast)
            DuplicateFileKeyError: Name collision in strict key mode
        """
        files = self.discover_files(directory)
        pairs = [
            (key_a, path_a, key_b, path_b)
            for key_a, path_a in files.items()
            for key_b, path_b in files.items()
            if key_a != key_b
        ]
        logger.info(f"Comparing {len(pairs)} ordered pairs from {len(files)} files in {directory}")

        matrix = ComparisonMatrix()
        self.failures = []
        if progress is not None:
            progress.start(len(pairs))

        if self.max_workers == 1:
            for key_a, path_a, key_b, path_b in pairs:
                result = self._compare_pair(key_a, path_a, key_b, path_b)
                self._store(matrix, key_a, key_b, result)
                if progress is not None:
                    progress.advance(key_a, key_b)
            return matrix

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_pair = {
                executor.submit(self._compare_pair, key_a, path_a, key_b, path_b): (key_a, key_b)
                for key_a, path_a, key_b, path_b in pairs
            }
            try:
                for future in as_completed(future_to_pair):
                    key_a, key_b = future_to_pair[future]
                    self._store(matrix, key_a, key_b, future.result())
                    if progress is not None:
                        progress.advance(key_a, key_b)
            except BaseException:
                for pending in future_to_pair:
                    pending.cancel()
                raise

        return matrix

    def _compare_pair(
        self, key_a: str, path_a: Path, key_b: str, path_b: Path
    ) -> PairResult | None:
        try:
            return self.comparator.compare(path_a, path_b)
        except SectionDiffError as e:
            if self.fail_fast:
                raise
            logger.error(f"Skipping pair {key_a} -> {key_b}: {e}")
            with self._lock:
                self.failures.append((key_a, key_b, str(e)))
            return None

    def _store(
        self, matrix: ComparisonMatrix, key_a: str, key_b: str, result: PairResult | None
    ) -> None:
        if result is None:
            return
        with self._lock:
            matrix.set_pair(key_a, key_b, result)


def build(directory: str | Path, **kwargs) -> ComparisonMatrix:
    """Convenience wrapper around MatrixBuilder.build"""
    return MatrixBuilder(**kwargs).build(directory)
