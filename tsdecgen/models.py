"""Core data models shared across tsdecgen components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Role(Enum):
    """Closed set of roles a documented entity can play."""

    NAMESPACE = "namespace"
    CLASS = "class"
    FUNCTION = "function"
    TYPEDEF = "typedef"
    CALLBACK = "callback"
    FIELD = "field"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    MODULE = "module"


@dataclass
class CommentArea:
    """One documentation block plus the code fragment that follows it."""

    start: int
    end: int
    comment: str
    value: str
    definition: str = ""
    modifiers: List[str] = field(default_factory=list)
    role: Optional[Role] = None
    declaration_override: str = ""
    literal: str = ""
    malformed: bool = False

    def has_tag(self, tag: str) -> bool:
        """Return True when the comment carries ``@tag`` as a whole word."""
        return re.search(rf"@{re.escape(tag)}(?![\w$])", self.comment) is not None

    @property
    def is_deprecated(self) -> bool:
        return self.has_tag("deprecated")

    @property
    def is_private(self) -> bool:
        return self.has_tag("private")

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers


@dataclass
class Field:
    """A parameter or object property."""

    type: str
    name: str
    value: Optional[str] = None
    description: str = ""
    optional: bool = False
    rest: bool = False


@dataclass
class Declaration:
    """A resolved entity ready for code emission."""

    area: Optional[CommentArea]
    path: List[str]
    name: str
    heads: List[str]
    comment: str = ""
    fields: List[Field] = field(default_factory=list)
    returns: str = "void"
    is_interface: bool = False
    role: Optional[Role] = None
    signature: str = ""
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def override(self) -> str:
        return self.area.declaration_override if self.area is not None else ""


@dataclass
class EmittedCode:
    """Rendered text fragment and the path that owns it."""

    area: Optional[CommentArea]
    code: str
    path: List[str] = field(default_factory=list)


@dataclass
class NotedObjects:
    """Comment areas grouped by the classifier."""

    names: List[CommentArea] = field(default_factory=list)
    types: List[CommentArea] = field(default_factory=list)
    members: List[CommentArea] = field(default_factory=list)
    modules: List[CommentArea] = field(default_factory=list)
    unclassified: List[CommentArea] = field(default_factory=list)
