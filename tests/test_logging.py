"""Tests for tsdecgen.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tsdecgen.logging import configure_logging, get_logger, level_for


def test_get_logger_uses_package_hierarchy() -> None:
    assert get_logger().name == "tsdecgen"
    assert get_logger("merge.classes").name == "tsdecgen.merge.classes"


@pytest.mark.parametrize(
    ("verbose", "debug_level", "expected"),
    [
        (True, 0, logging.DEBUG),
        (False, 0, logging.ERROR),
        (False, 2, logging.INFO),
        (False, 3, logging.INFO),
    ],
)
def test_level_for(verbose: bool, debug_level: int, expected: int) -> None:
    assert level_for(verbose=verbose, debug_level=debug_level) == expected


def test_configure_logging_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(debug_level=0)

    assert len(logger.handlers) == 1
    assert logger.level == logging.ERROR
    assert logger.propagate is False


def test_configure_logging_writes_debug_trace_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "tsdecgen.log"
    logger = configure_logging(log_file=log_file)

    get_logger("generator").debug("stage trace")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert "DEBUG tsdecgen.generator: stage trace" in log_file.read_text(encoding="utf-8")
