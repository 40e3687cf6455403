"""Pytest configuration for shared fixtures."""

from __future__ import annotations

import logging
import struct
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from sectiondiff.interfaces import SectionHeader, SectionKind
from sectiondiff.utils.logger import setup_logger

# (name, bytes) is a file-backed section; (name, int) is a NOBITS section of that size
SectionLayout = tuple[str, "bytes | int"]


# =============================================================================
# Synthetic container builders
# =============================================================================

ELF_HEADER = struct.Struct("<16sHHIQQQIHHHHHH")
ELF_SECTION_HEADER = struct.Struct("<IIQQQQIIQQ")
SHT_PROGBITS = 1
SHT_STRTAB = 3
SHT_NOBITS = 8


def _align(value: int, alignment: int) -> int:
    return (value + alignment - 1) // alignment * alignment


def build_elf(sections: Sequence[SectionLayout]) -> bytes:
    """Little-endian ELF64 executable holding only a section table."""
    names = [name for name, _ in sections] + [".shstrtab"]
    shstrtab = bytearray(b"\x00")
    name_offsets = []
    for name in names:
        name_offsets.append(len(shstrtab))
        shstrtab += name.encode() + b"\x00"

    body = bytearray()
    offset = ELF_HEADER.size
    headers = [ELF_SECTION_HEADER.pack(0, 0, 0, 0, 0, 0, 0, 0, 0, 0)]
    for (name, content), name_offset in zip(sections, name_offsets):
        if isinstance(content, int):
            headers.append(
                ELF_SECTION_HEADER.pack(name_offset, SHT_NOBITS, 3, 0, offset, content, 0, 0, 1, 0)
            )
            continue
        headers.append(
            ELF_SECTION_HEADER.pack(name_offset, SHT_PROGBITS, 2, 0, offset, len(content), 0, 0, 1, 0)
        )
        body += content
        offset += len(content)

    headers.append(
        ELF_SECTION_HEADER.pack(name_offsets[-1], SHT_STRTAB, 0, 0, offset, len(shstrtab), 0, 0, 1, 0)
    )
    body += shstrtab
    offset += len(shstrtab)

    padding = _align(offset, 8) - offset
    body += b"\x00" * padding
    shoff = offset + padding

    ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + b"\x00" * 8
    header = ELF_HEADER.pack(
        ident, 2, 62, 1, 0, 0, shoff, 0, ELF_HEADER.size, 56, 0,
        ELF_SECTION_HEADER.size, len(headers), len(headers) - 1,
    )
    return header + bytes(body) + b"".join(headers)


ELF_SHOFF_FIELD = 0x28
ELF_SH_OFFSET_FIELD = 24
ELF_SH_SIZE_FIELD = 32


def patch_elf_section(path: Path, index: int, *, offset: int | None = None, size: int | None = None) -> None:
    """Rewrite sh_offset or sh_size of section ``index`` in an ELF written by build_elf."""
    data = bytearray(path.read_bytes())
    (shoff,) = struct.unpack_from("<Q", data, ELF_SHOFF_FIELD)
    entry = shoff + index * ELF_SECTION_HEADER.size
    if offset is not None:
        struct.pack_into("<Q", data, entry + ELF_SH_OFFSET_FIELD, offset)
    if size is not None:
        struct.pack_into("<Q", data, entry + ELF_SH_SIZE_FIELD, size)
    path.write_bytes(bytes(data))


PE_FILE_ALIGNMENT = 0x200
PE_SECTION_ALIGNMENT = 0x1000
PE_LFANEW = 0x40
PE_COFF_HEADER = struct.Struct("<HHIIIHH")
PE_OPTIONAL_HEADER = struct.Struct("<HBBIIIIIIIIIHHHHHHIIIIHHIIIIII")
PE_SECTION_HEADER = struct.Struct("<8sIIIIIIHHI")
PE_DATA_DIRECTORIES = 16
IMAGE_SCN_CODE = 0x60000020
IMAGE_SCN_DATA = 0x40000040
IMAGE_SCN_BSS = 0xC0000080


def build_pe(sections: Sequence[SectionLayout]) -> bytes:
    """Minimal PE32 image: DOS stub, NT headers, section table and raw data."""
    optional_size = PE_OPTIONAL_HEADER.size + PE_DATA_DIRECTORIES * 8
    table_offset = PE_LFANEW + 4 + PE_COFF_HEADER.size + optional_size
    size_of_headers = _align(table_offset + PE_SECTION_HEADER.size * len(sections), PE_FILE_ALIGNMENT)

    raw = bytearray()
    table = bytearray()
    raw_offset = size_of_headers
    virtual_address = PE_SECTION_ALIGNMENT
    for name, content in sections:
        if isinstance(content, int):
            table += PE_SECTION_HEADER.pack(
                name.encode(), content, virtual_address, 0, 0, 0, 0, 0, 0, IMAGE_SCN_BSS
            )
            virtual_size = content
        else:
            characteristics = IMAGE_SCN_CODE if name == ".text" else IMAGE_SCN_DATA
            table += PE_SECTION_HEADER.pack(
                name.encode(), len(content), virtual_address, len(content), raw_offset,
                0, 0, 0, 0, characteristics,
            )
            padded = _align(len(content), PE_FILE_ALIGNMENT)
            raw += content + b"\x00" * (padded - len(content))
            raw_offset += padded
            virtual_size = len(content)
        virtual_address += _align(max(virtual_size, 1), PE_SECTION_ALIGNMENT)

    optional = PE_OPTIONAL_HEADER.pack(
        0x10B, 14, 0, 0, 0, 0, 0, 0, 0, 0x400000,
        PE_SECTION_ALIGNMENT, PE_FILE_ALIGNMENT,
        6, 0, 0, 0, 6, 0, 0,
        virtual_address, size_of_headers, 0, 3, 0,
        0x100000, 0x1000, 0x100000, 0x1000, 0, PE_DATA_DIRECTORIES,
    ) + b"\x00" * (PE_DATA_DIRECTORIES * 8)
    coff = PE_COFF_HEADER.pack(0x14C, len(sections), 0, 0, 0, optional_size, 0x0102)

    dos = bytearray(PE_LFANEW)
    dos[0:2] = b"MZ"
    dos[0x3C:0x40] = struct.pack("<I", PE_LFANEW)

    headers = bytes(dos) + b"PE\x00\x00" + coff + optional + bytes(table)
    headers += b"\x00" * (size_of_headers - len(headers))
    return headers + bytes(raw)


# =============================================================================
# In-memory image for engine tests
# =============================================================================


class FakeImage:
    """BinaryImageInterface over an in-memory buffer"""

    format_name = "FAKE"

    def __init__(self, path: str, headers: list[SectionHeader], blob: bytes):
        self.path = path
        self._headers = headers
        self._blob = blob
        self.closed = False

    def list_sections(self) -> list[SectionHeader]:
        return list(self._headers)

    def read_range(self, offset: int, size: int) -> bytes:
        if self.closed:
            raise OSError("closed")
        return self._blob[offset : offset + size]

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def make_fake_image(path: str, sections: Sequence[SectionLayout]) -> FakeImage:
    headers = []
    blob = bytearray()
    for name, content in sections:
        if isinstance(content, int):
            headers.append(SectionHeader(name, SectionKind.NOBITS, len(blob), content))
        else:
            headers.append(SectionHeader(name, SectionKind.PROGBITS, len(blob), len(content)))
            blob += content
    return FakeImage(path, headers, bytes(blob))


# =============================================================================
# Fixtures
# =============================================================================


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without subprocesses")
    config.addinivalue_line("markers", "integration: tests that run the CLI in a subprocess")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch) -> Path:
    """Keep ~/.sectiondiff/config.json and the thread cap out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SECTIONDIFF_MAX_THREADS", raising=False)
    return home


@pytest.fixture(autouse=True, scope="session")
def package_log_handler():
    """Attach the stderr handler before any CliRunner swaps sys.stderr."""
    setup_logger()


@pytest.fixture(autouse=True)
def reset_sectiondiff_loggers():
    """CLI commands tune package logger levels; restore them between tests."""
    yield
    for name in (
        "sectiondiff",
        "sectiondiff.core.pair_comparator",
        "sectiondiff.core.section_reader",
    ):
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def elf_factory(tmp_path) -> Callable[..., Path]:
    """Write a synthetic ELF file and return its path."""

    def _make(name: str, sections: Sequence[SectionLayout], directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(build_elf(sections))
        return target

    return _make


@pytest.fixture
def pe_factory(tmp_path) -> Callable[..., Path]:
    """Write a synthetic PE file and return its path."""

    def _make(name: str, sections: Sequence[SectionLayout], directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(build_pe(sections))
        return target

    return _make


@pytest.fixture
def fake_image_factory() -> Callable[..., FakeImage]:
    return make_fake_image


@pytest.fixture
def elf_section_patcher() -> Callable[..., None]:
    return patch_elf_section
