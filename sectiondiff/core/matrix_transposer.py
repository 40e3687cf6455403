#!/usr/bin/env python3
"""
Matrix transposer - re-keys a comparison matrix by section name

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

from ..domain.results import ComparisonMatrix, NestedMatrix, TransposedMatrix


def transpose(matrix: ComparisonMatrix | NestedMatrix) -> TransposedMatrix:
    """
    Re-key ``[file_a][file_b][section]`` into ``[section][file_b][file_a]``.

    The outer and inner keys swap while the middle key stays, so applying
    the function twice restores the original nesting.
    """
    if isinstance(matrix, ComparisonMatrix):
        return matrix.by_section()

    transposed: TransposedMatrix = {}
    for outer_key, inner_map in matrix.items():
        for middle_key, leaf_map in inner_map.items():
            for leaf_key, value in leaf_map.items():
                transposed.setdefault(leaf_key, {}).setdefault(middle_key, {})[outer_key] = value
    return transposed
