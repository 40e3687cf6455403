#!/usr/bin/env python3
"""Factory helpers for opening binary images."""

from __future__ import annotations

from pathlib import Path

from .adapters import ElfImage, PeImage
from .adapters.file_system import FileBackedImage
from .core.exceptions import OpenError
from .utils.file_type import FORMAT_AUTO, FORMAT_ELF, FORMAT_PE, detect_format
from .utils.logger import get_logger

logger = get_logger(__name__)

IMAGE_BACKENDS: dict[str, type[FileBackedImage]] = {
    FORMAT_ELF: ElfImage,
    FORMAT_PE: PeImage,
}


def open_image(path: str | Path, container_format: str = FORMAT_AUTO) -> FileBackedImage:
    """
    Open ``path`` with the backend for ``container_format``.

    With ``"auto"`` the container is picked from the file's magic bytes.
    The returned image must be closed by the caller, normally through a
    ``with`` block.

    Raises:
        OpenError: If the file cannot be opened or parsed
    """
    filename = str(path)
    fmt = container_format
    if fmt == FORMAT_AUTO:
        fmt = detect_format(filename)
        if fmt is None:
            if not Path(filename).is_file():
                raise OpenError(filename, "no such file")
            raise OpenError(filename, "unsupported container format (expected ELF or PE)")

    backend = IMAGE_BACKENDS.get(fmt)
    if backend is None:
        raise OpenError(filename, f"unknown container format '{container_format}'")

    try:
        image = backend(filename)
    except OSError as e:
        raise OpenError(filename, e.strerror or str(e)) from e
    logger.debug(f"Opened {filename} as {image.format_name}")
    return image
