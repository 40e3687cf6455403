#!/usr/bin/env python3
"""
Logging utilities for sectiondiff
"""

import logging
import sys
from pathlib import Path

import colorlog

LOGGER_NAME = "sectiondiff"

_CONSOLE_FORMAT = "%(log_color)s%(levelname)s%(reset)s - %(name)s - %(message)s"
_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = LOGGER_NAME,
    level: int = logging.WARNING,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Setup logger with a colored stderr handler and an optional file handler"""

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # stdout carries the JSON matrix, keep diagnostics on stderr
    console_handler = colorlog.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        colorlog.ColoredFormatter(
            _CONSOLE_FORMAT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
    )
    logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            logger.addHandler(file_handler)
        except OSError as exc:
            logger.warning(f"Could not open log file {log_file}: {exc}")

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def configure_verbosity(verbose: bool, quiet: bool) -> None:
    """Map CLI verbosity flags onto the package logger level"""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.getLogger(LOGGER_NAME).setLevel(level)


def configure_batch_logging() -> None:
    """Silence per-pair chatter during all-pairs sweeps"""
    logging.getLogger(f"{LOGGER_NAME}.core.pair_comparator").setLevel(logging.WARNING)
    logging.getLogger(f"{LOGGER_NAME}.core.section_reader").setLevel(logging.WARNING)
