#!/usr/bin/env python3
"""
sectiondiff Interfaces Module

Protocol-based interfaces for structural subtyping. Any object that exposes
a section table and a byte-range read primitive satisfies
BinaryImageInterface, whether it wraps pyelftools, pefile, or an in-memory
fixture.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .binary_image import BinaryImageInterface, SectionHeader, SectionKind

__all__ = [
    "BinaryImageInterface",
    "SectionHeader",
    "SectionKind",
]
