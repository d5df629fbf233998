"""Parse JavaScript object literals and infer their declaration types."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER = re.compile(
    r"[-+]?(?:0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+|(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
)
# Deeper literals are reported as unparsable instead of exhausting the stack.
_MAX_DEPTH = 100


class UnparsableLiteral(ValueError):
    """Raised when a literal uses syntax outside the supported subset."""


class LiteralKind(Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass
class LiteralValue:
    """Parsed literal. Objects hold a dict and arrays a list of nested values."""

    kind: LiteralKind
    value: Any = None


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.position = 0
        self.depth = 0

    def parse(self) -> LiteralValue:
        value = self._value()
        self._skip_space()
        if self.position != len(self.text):
            raise self._error("trailing content")
        return value

    def _value(self) -> LiteralValue:
        self._skip_space()
        char = self._peek()
        if char in {"{", "["}:
            return self._nested(char)
        if char in {'"', "'", "`"}:
            return LiteralValue(LiteralKind.STRING, self._string())
        number = _NUMBER.match(self.text, self.position)
        if number:
            self.position = number.end()
            return LiteralValue(LiteralKind.NUMBER, number.group(0))
        identifier = _IDENTIFIER.match(self.text, self.position)
        if identifier:
            word = identifier.group(0)
            if word in {"true", "false"}:
                self.position = identifier.end()
                return LiteralValue(LiteralKind.BOOLEAN, word == "true")
            if word == "null":
                self.position = identifier.end()
                return LiteralValue(LiteralKind.NULL)
        raise self._error("unsupported value")

    def _nested(self, opener: str) -> LiteralValue:
        if self.depth >= _MAX_DEPTH:
            raise self._error("nesting too deep")
        self.depth += 1
        value = self._object() if opener == "{" else self._array()
        self.depth -= 1
        return value

    def _object(self) -> LiteralValue:
        self.position += 1
        members: Dict[str, LiteralValue] = {}
        while True:
            self._skip_space()
            if self._peek() == "}":
                self.position += 1
                return LiteralValue(LiteralKind.OBJECT, members)
            key = self._key()
            self._skip_space()
            if self._peek() != ":":
                raise self._error("expected ':'")
            self.position += 1
            members[key] = self._value()
            if not self._separator("}"):
                self.position += 1
                return LiteralValue(LiteralKind.OBJECT, members)

    def _array(self) -> LiteralValue:
        self.position += 1
        items: List[LiteralValue] = []
        while True:
            self._skip_space()
            if self._peek() == "]":
                self.position += 1
                return LiteralValue(LiteralKind.ARRAY, items)
            items.append(self._value())
            if not self._separator("]"):
                self.position += 1
                return LiteralValue(LiteralKind.ARRAY, items)

    def _separator(self, closer: str) -> bool:
        """Consume a comma and return True, or return False at ``closer``."""
        self._skip_space()
        char = self._peek()
        if char == ",":
            self.position += 1
            return True
        if char == closer:
            return False
        raise self._error(f"expected ',' or '{closer}'")

    def _key(self) -> str:
        char = self._peek()
        if char in {'"', "'"}:
            return self._string()
        identifier = _IDENTIFIER.match(self.text, self.position)
        if identifier:
            self.position = identifier.end()
            return identifier.group(0)
        number = _NUMBER.match(self.text, self.position)
        if number:
            self.position = number.end()
            return number.group(0)
        raise self._error("unsupported key")

    def _string(self) -> str:
        quote = self.text[self.position]
        position = self.position + 1
        chars: List[str] = []
        while position < len(self.text):
            char = self.text[position]
            if char == "\\" and position + 1 < len(self.text):
                chars.append(self.text[position + 1])
                position += 2
                continue
            if quote == "`" and self.text.startswith("${", position):
                raise self._error("template substitution")
            if char == quote:
                self.position = position + 1
                return "".join(chars)
            chars.append(char)
            position += 1
        raise self._error("unterminated string")

    def _skip_space(self) -> None:
        while self.position < len(self.text):
            if self.text[self.position].isspace():
                self.position += 1
            elif self.text.startswith("//", self.position):
                newline = self.text.find("\n", self.position)
                self.position = len(self.text) if newline == -1 else newline
            elif self.text.startswith("/*", self.position):
                end = self.text.find("*/", self.position + 2)
                if end == -1:
                    raise self._error("unterminated comment")
                self.position = end + 2
            else:
                return

    def _peek(self) -> str:
        return self.text[self.position] if self.position < len(self.text) else ""

    def _error(self, reason: str) -> UnparsableLiteral:
        return UnparsableLiteral(f"{reason} at offset {self.position}")


def parse_literal(text: str) -> LiteralValue:
    """Parse an object, array, string, number, boolean or null literal."""
    return _Parser(text).parse()


def try_parse_literal(text: str) -> Optional[LiteralValue]:
    try:
        return parse_literal(text)
    except UnparsableLiteral:
        return None


def infer_type(value: LiteralValue, indent: str = "  ") -> str:
    """Return the declaration type describing ``value``."""
    if value.kind is LiteralKind.STRING:
        return "string"
    if value.kind is LiteralKind.NUMBER:
        return "number"
    if value.kind is LiteralKind.BOOLEAN:
        return "boolean"
    if value.kind is LiteralKind.NULL:
        return "any"
    if value.kind is LiteralKind.ARRAY:
        element_types: List[str] = []
        for item in value.value:
            inferred = infer_type(item, indent)
            if inferred not in element_types:
                element_types.append(inferred)
        if not element_types:
            return "any[]"
        if len(element_types) == 1:
            return f"{element_types[0]}[]"
        return f"({'|'.join(element_types)})[]"

    if not value.value:
        return "{}"
    lines = ["{"]
    for key, member in value.value.items():
        member_type = infer_type(member, indent).replace("\n", "\n" + indent)
        lines.append(f"{indent}{_property_key(key)}: {member_type}")
    lines.append("}")
    return "\n".join(lines)


def _property_key(key: str) -> str:
    if _IDENTIFIER.fullmatch(key):
        return key
    return "'" + key.replace("'", "\\'") + "'"


__all__ = [
    "LiteralKind",
    "LiteralValue",
    "UnparsableLiteral",
    "infer_type",
    "parse_literal",
    "try_parse_literal",
]
