#!/usr/bin/env python3
"""Filesystem adapter for controlled IO access."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from ..interfaces import SectionHeader


class FileSystemAdapter:
    """Provide a minimal filesystem access abstraction."""

    def read_bytes(self, path: str | Path, size: int | None = None, offset: int = 0) -> bytes:
        file_path = Path(path)
        with file_path.open("rb") as handle:
            if offset:
                handle.seek(offset)
            return handle.read() if size is None else handle.read(size)

    def write_text(
        self,
        path: str | Path,
        data: str,
        *,
        encoding: str = "utf-8",
        newline: str | None = None,
    ) -> None:
        file_path = Path(path)
        with file_path.open("w", encoding=encoding, newline=newline) as handle:
            handle.write(data)


default_file_system = FileSystemAdapter()


class FileBackedImage:
    """
    Shared plumbing for container adapters that read from an open file.

    Subclasses parse the section table in ``__init__`` and implement
    ``list_sections``; byte reads, closing and context management live here.
    """

    format_name = "unknown"

    def __init__(self, path: str | Path):
        self.path = str(path)
        self._handle: BinaryIO | None = open(self.path, "rb")

    def list_sections(self) -> list[SectionHeader]:
        raise NotImplementedError

    def read_range(self, offset: int, size: int) -> bytes:
        if self._handle is None:
            raise OSError(f"{self.path} is closed")
        if offset < 0 or size < 0:
            raise OSError(f"invalid range offset={offset} size={size}")
        file_size = os.fstat(self._handle.fileno()).st_size
        if offset > file_size or size > file_size - offset:
            raise OSError(
                f"range offset={offset} size={size} exceeds file size {file_size}"
            )
        self._handle.seek(offset)
        return self._handle.read(size)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"
