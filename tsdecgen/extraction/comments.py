"""Locate documentation blocks and the code fragments they describe."""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import CommentArea, Role
from .scanning import DefinitionMatch, collapse_whitespace, scan_definition

_OVERRIDE_PATTERN = re.compile(r"(?<=@tsdeclaration\n) \* ((?:(?!\*/)[^@])*)")
_OVERRIDE_BLOCK_PATTERN = re.compile(r" \* @tsdeclaration\n \* ([\s\S]*?)(?= \*/| \* @)")
_PROPERTY_ASSIGNMENT = re.compile(r"^\s*([\w$.]+\s*[:=]\s*[^\n;,]+)")


def get_definition(content: str) -> DefinitionMatch:
    """Return the head of the code fragment at the start of ``content``."""
    match = scan_definition(content)
    if match.text:
        return match
    fallback = _PROPERTY_ASSIGNMENT.match(content)
    if fallback:
        return DefinitionMatch(text=collapse_whitespace(fallback.group(1)), is_function=False, literal="")
    return match


def get_declaration_override(comment: str) -> str:
    """Return the verbatim declaration that follows ``@tsdeclaration``."""
    match = _OVERRIDE_PATTERN.search(comment)
    if not match:
        return ""
    return re.sub(r" \*\s*", "", match.group(1)).strip()


def clear_declaration_override(comment: str) -> str:
    """Remove the ``@tsdeclaration`` block from a comment."""
    return _OVERRIDE_BLOCK_PATTERN.sub("", comment, count=1)


def get_comment_areas(
    source: str,
    tag: str,
    *,
    role: Optional[Role] = None,
    definition_required: bool = True,
) -> List[CommentArea]:
    """Return one area per occurrence of ``tag``, in source order.

    The search resumes after the end of the block that held the previous hit,
    so a block yields at most one area per tag. A tag that is not enclosed by
    ``/**`` and ``*/`` yields an area flagged ``malformed`` with no comment or
    definition.
    """
    areas: List[CommentArea] = []
    position = source.find(tag)
    while position > -1:
        value = _tag_value(source, position + len(tag))
        start = source.rfind("/**", 0, position + 1)
        close = source.find("*/", position)
        if start == -1 or close == -1 or source.find("*/", start + 2, position) != -1:
            areas.append(
                CommentArea(
                    start=position,
                    end=position + len(tag),
                    comment="",
                    value=value,
                    role=role,
                    malformed=True,
                )
            )
            position = source.find(tag, position + 1)
            continue

        end = close + 2
        raw_comment = source[start:end]
        definition = DefinitionMatch(text="", is_function=False, literal="")
        if definition_required:
            definition = get_definition(source[end:])

        areas.append(
            CommentArea(
                start=start,
                end=end,
                comment=clear_declaration_override(raw_comment),
                value=value,
                definition=definition.text,
                role=role,
                declaration_override=get_declaration_override(raw_comment),
                literal=definition.literal,
            )
        )
        position = source.find(tag, end)
    return areas


def _tag_value(source: str, offset: int) -> str:
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    value = source[offset:line_end]
    return value.split("*/", 1)[0].strip()


__all__ = [
    "clear_declaration_override",
    "get_comment_areas",
    "get_declaration_override",
    "get_definition",
]
