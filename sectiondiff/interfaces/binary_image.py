#!/usr/bin/env python3
"""
Binary Image Protocol Interface

This module defines the Protocol interface for an opened binary container
(ELF, PE, ...). The section extraction and similarity engine is written once
against this capability interface; each container format only has to expose
its section table and a byte-range read primitive.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class SectionKind(Enum):
    """Storage kind of a section in the container file"""

    PROGBITS = "progbits"  # Content stored in the file
    NOBITS = "nobits"  # Occupies no file bytes (e.g. ELF SHT_NOBITS / .bss)


@dataclass(frozen=True)
class SectionHeader:
    """
    One entry of a container's section table.

    Attributes:
        name: Section name as stored in the container
        kind: Storage kind (file-backed or no file bits)
        offset: File offset of the first byte of the section
        size: Number of bytes the section occupies in the file
    """

    name: str
    kind: SectionKind
    offset: int
    size: int

    @property
    def has_file_bits(self) -> bool:
        return self.kind is not SectionKind.NOBITS


@runtime_checkable
class BinaryImageInterface(Protocol):
    """
    Protocol defining an opened, parsed binary container.

    Implementations own an open file handle and must release it in
    ``close()``. They are expected to be used as context managers so the
    handle is released regardless of how the comparison that opened them
    ends.

    Example:
        >>> with open_image("/bin/ls") as image:
        ...     for header in image.list_sections():
        ...         data = image.read_range(header.offset, header.size)
    """

    path: str
    format_name: str

    def list_sections(self) -> list[SectionHeader]:
        """
        Return the section table in table order.

        Returns:
            List of SectionHeader entries, possibly empty.
        """
        ...

    def read_range(self, offset: int, size: int) -> bytes:
        """
        Read ``size`` bytes starting at file offset ``offset``.

        Implementations seek before every read, so callers never depend on
        the current stream position. A read that cannot return ``size``
        bytes returns the shorter buffer; callers decide whether that is
        fatal.

        Raises:
            OSError: If seeking or reading the underlying file fails
        """
        ...

    def close(self) -> None:
        """Release the underlying file handle."""
        ...

    def __enter__(self) -> "BinaryImageInterface": ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None: ...
