from __future__ import annotations

import logging
import textwrap
from typing import Any, Callable, Iterator

import pytest

from tsdecgen.diagnostics import Diagnostics
from tsdecgen.models import CommentArea


@pytest.fixture
def diagnostics() -> Diagnostics:
    """Provide a fresh report collector per test."""
    return Diagnostics()


@pytest.fixture
def source_builder() -> Callable[[str], str]:
    """Dedent an inline JavaScript snippet."""

    def _build(text: str) -> str:
        return textwrap.dedent(text).lstrip("\n")

    return _build


@pytest.fixture
def area_factory() -> Callable[..., CommentArea]:
    """Build comment areas with sensible offsets."""

    def _build(comment: str = "/**\n */", value: str = "", **kwargs: Any) -> CommentArea:
        return CommentArea(start=0, end=len(comment), comment=comment, value=value, **kwargs)

    return _build


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo handlers the CLI installs so later tests log through pytest."""
    yield
    logger = logging.getLogger("tsdecgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
