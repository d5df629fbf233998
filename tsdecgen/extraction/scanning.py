"""Counter-based delimiter scanning over JavaScript-ish source text."""

from __future__ import annotations

from typing import List, NamedTuple

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}
_QUOTES = {'"', "'", "`"}


class DefinitionMatch(NamedTuple):
    """Code fragment found after a documentation block."""

    text: str
    is_function: bool
    literal: str


def skip_string(text: str, index: int) -> int:
    """Return the index just past the string literal opening at ``index``."""
    quote = text[index]
    position = index + 1
    while position < len(text):
        char = text[position]
        if char == "\\":
            position += 2
            continue
        if char == quote:
            return position + 1
        position += 1
    return len(text)


def skip_block_comment(text: str, index: int) -> int:
    end = text.find("*/", index + 2)
    return len(text) if end == -1 else end + 2


def extract_balanced(text: str, start: int) -> int:
    """Return the index just past the delimiter group opening at ``start``.

    Strings and comments are skipped. Returns -1 when ``text[start]`` is not an
    opening delimiter or the group never closes.
    """
    if start >= len(text) or text[start] not in _OPENERS:
        return -1
    stack = [_OPENERS[text[start]]]
    position = start + 1
    while position < len(text):
        char = text[position]
        if char in _QUOTES:
            position = skip_string(text, position)
            continue
        if text.startswith("/*", position):
            position = skip_block_comment(text, position)
            continue
        if text.startswith("//", position):
            newline = text.find("\n", position)
            position = len(text) if newline == -1 else newline
            continue
        if char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if char != stack[-1]:
                return -1
            stack.pop()
            if not stack:
                return position + 1
        position += 1
    return -1


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split ``text`` on ``separator`` occurrences outside brackets and strings."""
    parts: List[str] = []
    depth = 0
    current_start = 0
    position = 0
    while position < len(text):
        char = text[position]
        if char in _QUOTES:
            position = skip_string(text, position)
            continue
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[current_start:position])
            current_start = position + 1
        position += 1
    parts.append(text[current_start:])
    return [part.strip() for part in parts if part.strip()]


def collapse_whitespace(text: str) -> str:
    """Fold a multi-line fragment onto one line."""
    folded = " ".join(text.split())
    return folded.replace("( ", "(").replace(" )", ")")


def scan_definition(content: str) -> DefinitionMatch:
    """Scan the code following a comment up to the end of its head.

    The scan stops at a top-level ``;``, ``{``, ``}``, ``,``, ``=>``, line
    comment or the next documentation block. An object literal that follows an
    assignment (``x = {`` or ``key: {``) is returned separately as ``literal``.
    """
    depth = 0
    position = 0
    stop = len(content)
    arrow = False
    brace = False
    while position < len(content):
        char = content[position]
        if char in _QUOTES:
            position = skip_string(content, position)
            continue
        if content.startswith("/**", position) or content.startswith("//", position):
            stop = position
            break
        if content.startswith("/*", position):
            position = skip_block_comment(content, position)
            continue
        if char in "([":
            depth += 1
        elif char in ")]":
            if depth == 0:
                stop = position
                break
            depth -= 1
        elif depth == 0:
            if char in ";},":
                stop = position
                break
            if char == "{":
                stop = position
                brace = True
                break
            if content.startswith("=>", position):
                stop = position
                arrow = True
                break
        position += 1

    head = content[:stop].strip()
    literal = ""
    if brace and head.endswith(("=", ":")):
        end = extract_balanced(content, stop)
        if end != -1:
            literal = content[stop:end]

    text = collapse_whitespace(head)
    is_function = arrow or "function" in text.split("(")[0].split() or (
        brace and text.endswith(")")
    )
    return DefinitionMatch(text=text, is_function=bool(is_function), literal=literal)


__all__ = [
    "DefinitionMatch",
    "collapse_whitespace",
    "extract_balanced",
    "scan_definition",
    "skip_string",
    "split_top_level",
]
