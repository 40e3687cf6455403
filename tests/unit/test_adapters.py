#!/usr/bin/env python3
"""Tests for the ELF/PE adapters, file type detection and the image factory."""

import pytest

from sectiondiff.adapters import ElfImage, PeImage
from sectiondiff.adapters.pe_adapter import decode_section_name
from sectiondiff.core.exceptions import OpenError
from sectiondiff.core.section_reader import read_sections
from sectiondiff.factory import open_image
from sectiondiff.interfaces import BinaryImageInterface, SectionKind
from sectiondiff.utils.file_type import detect_format, is_elf_file, is_pe_file

pytestmark = pytest.mark.unit


def test_elf_sections_are_listed(elf_factory):
    path = elf_factory("a.elf", [(".text", b"\x90\x90\x90"), (".data", b"\x01\x02"), (".bss", 32)])

    with ElfImage(path) as image:
        assert isinstance(image, BinaryImageInterface)
        headers = {header.name: header for header in image.list_sections()}

    assert headers[".text"].size == 3
    assert headers[".text"].kind is SectionKind.PROGBITS
    assert headers[".bss"].kind is SectionKind.NOBITS
    assert headers[".bss"].size == 32
    assert ".shstrtab" in headers


def test_elf_section_bytes(elf_factory):
    path = elf_factory("a.elf", [(".text", b"\x90\x90\x90"), (".data", b"\x01\x02"), (".bss", 32)])

    with open_image(path) as image:
        sections = read_sections(image)

    assert sections[".text"] == b"\x90\x90\x90"
    assert sections[".data"] == b"\x01\x02"
    assert sections[".bss"] == b""
    assert sections.is_nobits(".bss")


def test_pe_sections_are_listed(pe_factory):
    path = pe_factory("a.exe", [(".text", b"\xcc" * 16), (".data", b"\x01\x02"), (".bss", 128)])

    with PeImage(path) as image:
        headers = image.list_sections()

    assert [header.name for header in headers] == [".text", ".data", ".bss"]
    assert headers[0].size == 16
    assert headers[1].size == 2
    assert headers[2].kind is SectionKind.NOBITS


def test_pe_section_bytes(pe_factory):
    path = pe_factory("a.exe", [(".text", b"\xcc" * 16), (".data", b"\x01\x02")])

    with open_image(path) as image:
        assert image.format_name == "PE"
        sections = read_sections(image)

    assert sections[".text"] == b"\xcc" * 16
    assert sections[".data"] == b"\x01\x02"


def test_decode_section_name_strips_padding():
    assert decode_section_name(b".text\x00\x00\x00") == ".text"
    assert decode_section_name(b"12345678") == "12345678"


def test_file_type_detection(elf_factory, pe_factory, tmp_path):
    elf = elf_factory("a.elf", [(".text", b"\x90")])
    pe = pe_factory("a.exe", [(".text", b"\x90")])
    other = tmp_path / "notes.txt"
    other.write_text("hello")

    assert is_elf_file(elf) and not is_pe_file(elf)
    assert is_pe_file(pe) and not is_elf_file(pe)
    assert detect_format(elf) == "elf"
    assert detect_format(pe) == "pe"
    assert detect_format(other) is None
    assert detect_format(tmp_path / "missing") is None


def test_open_image_closes_handle(elf_factory):
    path = elf_factory("a.elf", [(".text", b"\x90")])
    image = open_image(path)
    with image:
        assert not image.closed
    assert image.closed


def test_open_missing_file(tmp_path):
    with pytest.raises(OpenError, match="no such file"):
        open_image(tmp_path / "missing.bin")


def test_open_unsupported_file(tmp_path):
    target = tmp_path / "plain.txt"
    target.write_text("not a binary")
    with pytest.raises(OpenError, match="unsupported container format"):
        open_image(target)


def test_forced_format_mismatch(pe_factory):
    path = pe_factory("a.exe", [(".text", b"\x90")])
    with pytest.raises(OpenError, match="not a valid ELF file"):
        open_image(path, "elf")


def test_corrupt_pe_is_open_error(tmp_path):
    target = tmp_path / "broken.exe"
    target.write_bytes(b"MZ" + b"\x00" * 10)
    with pytest.raises(OpenError, match="not a valid PE file"):
        open_image(target)


def test_unknown_backend(elf_factory):
    path = elf_factory("a.elf", [(".text", b"\x90")])
    with pytest.raises(OpenError, match="unknown container format"):
        open_image(path, "macho")


def test_open_error_operand_formatting():
    error = OpenError("/tmp/x", "no such file")
    assert str(error) == "Error opening /tmp/x: no such file"
    assert str(error.with_operand(2)) == "Error opening file2 (/tmp/x): no such file"
