#!/usr/bin/env python3
"""Shared helpers for detecting binary file types."""

from __future__ import annotations

from pathlib import Path

from ..adapters.file_system import default_file_system
from .logger import get_logger

_logger = get_logger(__name__)

ELF_MAGIC = b"\x7fELF"
PE_MAGIC = b"MZ"

FORMAT_ELF = "elf"
FORMAT_PE = "pe"
FORMAT_AUTO = "auto"
SUPPORTED_FORMATS = (FORMAT_ELF, FORMAT_PE)


def is_elf_file(filepath: str | Path) -> bool:
    """Return True if the file starts with the ELF magic."""
    return read_magic(filepath, 4) == ELF_MAGIC


def is_pe_file(filepath: str | Path) -> bool:
    """Return True if the file starts with an MZ header."""
    return read_magic(filepath, 2) == PE_MAGIC


def read_magic(filepath: str | Path, size: int) -> bytes:
    try:
        return default_file_system.read_bytes(filepath, size=size)
    except OSError as exc:
        _logger.debug(f"Could not read file magic bytes from {filepath}: {exc}")
        return b""


def detect_format(filepath: str | Path) -> str | None:
    """Return ``"elf"``, ``"pe"`` or None when the container is not recognized."""
    if is_elf_file(filepath):
        return FORMAT_ELF
    if is_pe_file(filepath):
        return FORMAT_PE
    return None
