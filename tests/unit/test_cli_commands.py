#!/usr/bin/env python3
"""Tests for the click entry point and the command classes."""

import json

import pytest
from click.testing import CliRunner

from sectiondiff import __main__ as package_main
from sectiondiff.__version__ import __version__
from sectiondiff.cli.batch_workers import cap_threads_for_execution
from sectiondiff.cli.commands import CommandContext, CompareCommand, MatrixCommand
from sectiondiff.cli_main import cli

pytestmark = pytest.mark.unit


def _lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line]


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"sectiondiff {__version__}" in result.output


def test_no_arguments_prints_usage():
    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 1
    assert "Usage: sectiondiff <file1> <file2>" in result.output


def test_one_argument_prints_usage(tmp_path):
    result = CliRunner().invoke(cli, [str(tmp_path / "a")])

    assert result.exit_code == 1
    assert "Usage: sectiondiff <file1> <file2>" in result.output


def test_compare_reports_every_section(elf_factory):
    left = elf_factory("left", [(".text", b"\x90\x90\x90\x90"), (".data", b"\x01\x02"), (".extra", b"\x00")])
    right = elf_factory("right", [(".text", b"\x90\x90\x00\x90"), (".data", b"\x01\x02")])

    result = CliRunner().invoke(cli, [str(left), str(right)])

    assert result.exit_code == 0
    lines = _lines(result.output)
    assert "Similarity of section .text: 75.00%" in lines
    assert "Similarity of section .data: 100.00%" in lines
    assert "Error: Section .extra not present in file2" in lines


def test_compare_missing_policy_drop(elf_factory):
    left = elf_factory("left", [(".text", b"\x90"), (".extra", b"\x00")])
    right = elf_factory("right", [(".text", b"\x90")])

    result = CliRunner().invoke(cli, ["--missing", "drop", str(left), str(right)])

    assert result.exit_code == 0
    assert "not present" not in result.output


def test_compare_no_common_sections(pe_factory):
    left = pe_factory("left.exe", [(".text", b"\x90")])
    right = pe_factory("right.exe", [(".data", b"\x90")])

    result = CliRunner().invoke(cli, [str(left), str(right)])

    assert result.exit_code == 0
    lines = _lines(result.output)
    assert "Error: No common sections present in both files" in lines
    assert "Error: Section .text not present in file2" in lines
    assert "Error: Section .data not present in file1" in lines


def test_compare_missing_file(elf_factory, tmp_path):
    left = elf_factory("left", [(".text", b"\x90")])
    missing = tmp_path / "missing"

    result = CliRunner().invoke(cli, [str(left), str(missing)])

    assert result.exit_code == 1
    assert f"Error opening file2 ({missing}): no such file" in result.output


def test_compare_corrupt_section_header(elf_factory, elf_section_patcher):
    left = elf_factory("left", [(".text", b"\x90\x90")])
    right = elf_factory("right", [(".text", b"\x90\x90")])
    elf_section_patcher(right, 1, size=1 << 40)

    result = CliRunner().invoke(cli, [str(left), str(right)])

    assert result.exit_code == 1
    assert "Error reading section .text" in result.output
    assert "exceeds file size" in result.output


def test_skip_nobits_help_names_compare_elf_output():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "compareELF" in result.output


def test_compare_table(elf_factory):
    left = elf_factory("left", [(".text", b"\x90\x90")])
    right = elf_factory("right", [(".text", b"\x90\x00")])

    result = CliRunner().invoke(cli, ["--table", "--quiet", str(left), str(right)])

    assert result.exit_code == 0
    assert "50.00%" in result.output


def test_compare_command_directly(pe_factory):
    left = pe_factory("left.exe", [(".text", b"\x01\x02")])
    right = pe_factory("right.exe", [(".text", b"\x01\xff")])
    command = CompareCommand(CommandContext.create(quiet=True))

    assert command.execute({"file1": str(left), "file2": str(right)}) == 0


def test_batch_writes_json_and_csv(tmp_path, elf_factory):
    batch = tmp_path / "bins"
    out = tmp_path / "csv"
    elf_factory("x", [(".text", b"\x90\x90")], batch)
    elf_factory("y", [(".text", b"\x90\x00")], batch)

    result = CliRunner().invoke(cli, ["--batch", str(batch), "-o", str(out), "--quiet"])

    assert result.exit_code == 0
    csv_text = (out / ".text.csv").read_text()
    assert csv_text.splitlines()[0] in (",x,y", ",y,x")
    assert "50.0" in csv_text
    assert '"x": 50.0' in result.output


def test_batch_no_csv(tmp_path, elf_factory):
    batch = tmp_path / "bins"
    out = tmp_path / "csv"
    elf_factory("x", [(".text", b"\x90")], batch)
    elf_factory("y", [(".text", b"\x90")], batch)

    result = CliRunner().invoke(cli, ["--batch", str(batch), "-o", str(out), "--no-csv", "--quiet"])

    assert result.exit_code == 0
    assert not out.exists()


def test_batch_missing_directory(tmp_path):
    result = CliRunner().invoke(cli, ["--batch", str(tmp_path / "nope")])

    assert result.exit_code == 1
    assert "Batch directory does not exist" in result.output


def test_batch_with_file_operands(tmp_path):
    result = CliRunner().invoke(cli, ["--batch", str(tmp_path), "a"])

    assert result.exit_code == 1
    assert "--batch takes no file operands" in result.output


def test_matrix_command_keep_going(tmp_path, elf_factory):
    batch = tmp_path / "bins"
    out = tmp_path / "csv"
    elf_factory("x", [(".text", b"\x90")], batch)
    elf_factory("y", [(".text", b"\x90")], batch)
    (batch / "notes.txt").write_text("plain text")
    command = MatrixCommand(CommandContext.create(quiet=True, batch=True))

    exit_code = command.execute(
        {"batch": str(batch), "output": str(out), "keep_going": True, "no_json": True}
    )

    assert exit_code == 1
    assert (out / ".text.csv").exists()


def test_matrix_command_fail_fast(tmp_path, elf_factory):
    batch = tmp_path / "bins"
    elf_factory("x", [(".text", b"\x90")], batch)
    (batch / "notes.txt").write_text("plain text")
    command = MatrixCommand(CommandContext.create(quiet=True, batch=True))

    assert command.execute({"batch": str(batch), "no_csv": True, "no_json": True}) == 1


def test_config_file_is_used(tmp_path, elf_factory):
    left = elf_factory("left", [(".text", b"\x90"), (".extra", b"\x00")])
    right = elf_factory("right", [(".text", b"\x90")])
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"comparison": {"missing_sections": "drop"}}))

    result = CliRunner().invoke(cli, ["--config", str(config), str(left), str(right)])

    assert result.exit_code == 0
    assert "not present" not in result.output


def test_thread_cap_from_environment(monkeypatch):
    assert cap_threads_for_execution(8) == 8
    monkeypatch.setenv("SECTIONDIFF_MAX_THREADS", "2")
    assert cap_threads_for_execution(8) == 2
    monkeypatch.setenv("SECTIONDIFF_MAX_THREADS", "junk")
    assert cap_threads_for_execution(8) == 8


def test_main_module_entry(monkeypatch):
    monkeypatch.setattr("sys.argv", ["sectiondiff", "--version"])
    assert package_main.main() == 0
