"""Comment extraction and entity classification."""

from __future__ import annotations

from .classifier import check_mutually_exclusive_tags, collect_noted_objects
from .comments import get_comment_areas, get_definition

__all__ = [
    "check_mutually_exclusive_tags",
    "collect_noted_objects",
    "get_comment_areas",
    "get_definition",
]
