#!/usr/bin/env python3
"""
Section reader - extracts raw section content from an opened image

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from collections.abc import Iterator, Mapping

from ..interfaces import BinaryImageInterface, SectionHeader
from ..utils.logger import get_logger
from .exceptions import SectionReadError

logger = get_logger(__name__)


class SectionMap(Mapping):
    """
    Read-only mapping of section name to raw section bytes, in table order.

    Sections that occupy no file bytes map to ``b""`` and are also tracked
    separately, so ``is_nobits`` can tell them apart from a file-backed
    section whose content happens to be empty.
    """

    def __init__(self, contents: dict[str, bytes] | None = None, nobits: set[str] | None = None):
        self._contents: dict[str, bytes] = dict(contents or {})
        self._nobits = frozenset(nobits or ())

    def __getitem__(self, name: str) -> bytes:
        return self._contents[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._contents)

    def __len__(self) -> int:
        return len(self._contents)

    def is_nobits(self, name: str) -> bool:
        return name in self._nobits

    @property
    def nobits(self) -> frozenset[str]:
        return self._nobits

    def __repr__(self) -> str:
        sizes = ", ".join(f"{name!r}: {len(data)}" for name, data in self._contents.items())
        return f"SectionMap({{{sizes}}})"


def read_section_bytes(image: BinaryImageInterface, header: SectionHeader) -> bytes:
    """Read exactly ``header.size`` bytes of a file-backed section."""
    if header.size == 0:
        return b""
    try:
        data = image.read_range(header.offset, header.size)
    except (OSError, ValueError, OverflowError) as e:
        raise SectionReadError(image.path, header.name, f"seek/read failed: {e}") from e
    if len(data) != header.size:
        raise SectionReadError(
            image.path,
            header.name,
            f"short read ({len(data)} of {header.size} bytes at offset {header.offset})",
        )
    return data


def read_sections(image: BinaryImageInterface) -> SectionMap:
    """
    Build the SectionMap of ``image``.

    Any section whose declared range cannot be read in full aborts the whole
    extraction; a partial map would misalign every later byte comparison.

    Raises:
        SectionReadError: On a short read or a failed seek
    """
    contents: dict[str, bytes] = {}
    nobits: set[str] = set()

    for header in image.list_sections():
        if header.has_file_bits:
            contents[header.name] = read_section_bytes(image, header)
            nobits.discard(header.name)
        else:
            contents[header.name] = b""
            nobits.add(header.name)

    logger.debug(f"Read {len(contents)} sections from {image.path}")
    return SectionMap(contents, nobits)
