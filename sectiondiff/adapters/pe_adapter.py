#!/usr/bin/env python3
"""
PE container adapter

Implements BinaryImageInterface on top of pefile. Section content is the
raw data described by PointerToRawData / SizeOfRawData.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from pathlib import Path

import pefile

from ..core.exceptions import OpenError
from ..interfaces import SectionHeader, SectionKind
from ..utils.logger import get_logger
from .file_system import FileBackedImage

logger = get_logger(__name__)

IMAGE_SCN_CNT_UNINITIALIZED_DATA = 0x00000080


def decode_section_name(raw_name: bytes) -> str:
    """Decode the fixed 8-byte, NUL padded PE section name"""
    return raw_name.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


class PeImage(FileBackedImage):
    """PE image opened for section extraction"""

    format_name = "PE"

    def __init__(self, path: str | Path):
        super().__init__(path)
        try:
            pe = pefile.PE(self.path, fast_load=True)
        except pefile.PEFormatError as e:
            self.close()
            raise OpenError(self.path, f"not a valid PE file: {e.value}") from e
        except Exception as e:
            self.close()
            raise OpenError(self.path, f"not a valid PE file: {e}") from e

        try:
            self._sections = [self._to_header(sec) for sec in pe.sections]
        finally:
            pe.close()
        logger.debug(f"Parsed {len(self._sections)} PE sections from {self.path}")

    @staticmethod
    def _to_header(section) -> SectionHeader:
        uninitialized = bool(section.Characteristics & IMAGE_SCN_CNT_UNINITIALIZED_DATA)
        if uninitialized and section.SizeOfRawData == 0:
            kind = SectionKind.NOBITS
        else:
            kind = SectionKind.PROGBITS
        return SectionHeader(
            name=decode_section_name(section.Name),
            kind=kind,
            offset=section.PointerToRawData,
            size=section.SizeOfRawData,
        )

    def list_sections(self) -> list[SectionHeader]:
        return list(self._sections)
