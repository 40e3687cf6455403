#!/usr/bin/env python3
"""
ELF container adapter

Implements BinaryImageInterface on top of pyelftools. Only the section
table is consumed: name, type (SHT_NOBITS or not), file offset and size.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from pathlib import Path

from elftools.elf.elffile import ELFFile

from ..core.exceptions import OpenError
from ..interfaces import SectionHeader, SectionKind
from ..utils.logger import get_logger
from .file_system import FileBackedImage

logger = get_logger(__name__)


class ElfImage(FileBackedImage):
    """ELF image opened for section extraction"""

    format_name = "ELF"

    def __init__(self, path: str | Path):
        super().__init__(path)
        try:
            self._elf = ELFFile(self._handle)
            self._sections = [self._to_header(sec) for sec in self._elf.iter_sections()]
        except Exception as e:
            self.close()
            raise OpenError(self.path, f"not a valid ELF file: {e}") from e
        logger.debug(f"Parsed {len(self._sections)} ELF sections from {self.path}")

    @staticmethod
    def _to_header(section) -> SectionHeader:
        kind = SectionKind.NOBITS if section["sh_type"] == "SHT_NOBITS" else SectionKind.PROGBITS
        return SectionHeader(
            name=section.name,
            kind=kind,
            offset=section["sh_offset"],
            size=section["sh_size"],
        )

    def list_sections(self) -> list[SectionHeader]:
        return list(self._sections)
