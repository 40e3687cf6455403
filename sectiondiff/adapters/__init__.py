#!/usr/bin/env python3
"""
sectiondiff Adapters Module

Adapter implementations that expose concrete container parsers through the
BinaryImageInterface Protocol, so section extraction and scoring never touch
pyelftools or pefile directly.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)

Key Components:
    ElfImage: ELF backend (pyelftools)
    PeImage: PE backend (pefile)
    FileSystemAdapter: Small IO helper used for magic detection and writes

Example:
    >>> from sectiondiff.adapters import ElfImage
    >>> from sectiondiff.interfaces import BinaryImageInterface
    >>>
    >>> with ElfImage("/bin/true") as image:
    ...     assert isinstance(image, BinaryImageInterface)
    ...     headers = image.list_sections()
"""

from .elf_adapter import ElfImage
from .file_system import FileBackedImage, FileSystemAdapter, default_file_system
from .pe_adapter import PeImage

__all__ = [
    "ElfImage",
    "PeImage",
    "FileBackedImage",
    "FileSystemAdapter",
    "default_file_system",
]
