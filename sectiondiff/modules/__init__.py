#!/usr/bin/env python3
"""
sectiondiff Scoring Modules
"""

from .similarity_scoring import average_score, is_defined, score

__all__ = [
    "average_score",
    "is_defined",
    "score",
]
