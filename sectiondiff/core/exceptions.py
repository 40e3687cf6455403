#!/usr/bin/env python3
"""
sectiondiff exception hierarchy

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""


class SectionDiffError(Exception):
    """Base class for all sectiondiff errors"""


class UsageError(SectionDiffError):
    """Wrong number of positional arguments or conflicting modes"""


class OpenError(SectionDiffError):
    """A file could not be opened or parsed as a supported container"""

    def __init__(self, path: str, reason: str, operand: int | None = None):
        self.path = path
        self.reason = reason
        self.operand = operand
        super().__init__(self._format())

    def _format(self) -> str:
        if self.operand is not None:
            return f"Error opening file{self.operand} ({self.path}): {self.reason}"
        return f"Error opening {self.path}: {self.reason}"

    def with_operand(self, operand: int) -> "OpenError":
        return OpenError(self.path, self.reason, operand)


class SectionReadError(SectionDiffError, OSError):
    """A section's declared byte range could not be read in full"""

    def __init__(self, path: str, section: str, reason: str):
        self.path = path
        self.section = section
        self.reason = reason
        super().__init__(f"Error reading section {section} from {path}: {reason}")


class DuplicateFileKeyError(SectionDiffError):
    """Two files in a batch directory map to the same matrix key"""

    def __init__(self, key: str, first: str, second: str):
        self.key = key
        self.first = first
        self.second = second
        super().__init__(f"Files {first} and {second} both map to matrix key '{key}'")


class MissingSectionWarning(UserWarning):
    """A section name exists in one operand but not the other"""


class ScoreUndefined(UserWarning):
    """A computed similarity score is not a finite number"""
