"""Logger hierarchy and handler setup for the tsdecgen CLI and service."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "tsdecgen"
_CONSOLE_FORMAT = "[tsdecgen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``tsdecgen.<name>``, or the package logger when no name is given."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def level_for(*, verbose: bool = False, debug_level: int = 2) -> int:
    """Translate the CLI flags into a logging level.

    ``--verbose`` exposes the pipeline's stage logs. A summary level of 0 keeps
    the console to diagnostics errors only.
    """
    if verbose:
        return logging.DEBUG
    if debug_level <= 0:
        return logging.ERROR
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, debug_level: int = 2, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler, and a file handler when ``log_file`` is set."""
    level = level_for(verbose=verbose, debug_level=debug_level)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # The CLI may run several times in one process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        # The file always records the full stage trace.
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger", "level_for"]
