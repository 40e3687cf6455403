#!/usr/bin/env python3
"""Similarity scoring helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable


def score(left: bytes, right: bytes) -> float:
    """
    Percentage of positionally equal bytes over the shorter operand's length.

    An empty operand never matches, so either side being empty yields 0.0,
    including two empty sections. Bytes past the shorter length are ignored;
    the metric is not alignment aware.
    """
    if not left or not right:
        return 0.0
    total = min(len(left), len(right))
    matching = sum(1 for x, y in zip(left, right) if x == y)
    return matching / total * 100.0


def is_defined(value: float) -> bool:
    return math.isfinite(value)


def average_score(scores: Iterable[float]) -> float | None:
    """Mean over the finite scores, None when there are none."""
    defined = [value for value in scores if is_defined(value)]
    if not defined:
        return None
    return sum(defined) / len(defined)
