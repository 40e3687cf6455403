#!/usr/bin/env python3
"""Worker helpers for the all-pairs matrix sweep."""

from __future__ import annotations

import os
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeRemainingColumn

from ..core.matrix_builder import MatrixBuilder
from ..domain.results import ComparisonMatrix
from ..utils.logger import get_logger

logger = get_logger(__name__)

THREADS_ENV_VAR = "SECTIONDIFF_MAX_THREADS"


def cap_threads_for_execution(threads: int) -> int:
    cap_text = os.getenv(THREADS_ENV_VAR, "").strip()
    if not cap_text:
        return threads
    try:
        cap = int(cap_text)
    except ValueError:
        logger.debug(f"Ignoring non-numeric {THREADS_ENV_VAR}={cap_text!r}")
        return threads
    if cap <= 0:
        return threads
    return min(threads, cap)


class RichBuildProgress:
    """Progress bar fed by MatrixBuilder as pairs complete"""

    def __init__(self, progress: Progress):
        self._progress = progress
        self._task = None

    def start(self, total: int) -> None:
        self._task = self._progress.add_task("Comparing pairs...", total=total)

    def advance(self, file_a: str, file_b: str) -> None:
        if self._task is None:
            return
        self._progress.update(self._task, advance=1, description=f"{file_a} -> {file_b}")


def run_matrix_build(
    builder: MatrixBuilder,
    directory: str | Path,
    console: Console,
    show_progress: bool,
) -> ComparisonMatrix:
    """Run ``builder`` over ``directory``, with a progress bar on interactive consoles."""
    builder.max_workers = cap_threads_for_execution(builder.max_workers)
    logger.debug(f"Matrix build using {builder.max_workers} worker(s)")

    if not show_progress or not console.is_terminal:
        return builder.build(directory)

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=console,
        transient=True,
    ) as progress:
        return builder.build(directory, progress=RichBuildProgress(progress))
