"""Analyzers for class members and constructors."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..extraction.classifier import apply_member_roles
from ..extraction.comments import get_comment_areas
from ..logging import get_logger
from ..models import CommentArea, Declaration, Role
from .base import Analyzer
from .common import (
    CLASS_TAG_SKIPS,
    align_parameters,
    clean_comment_data,
    get_field_type,
    get_params,
    parse_arguments,
    render_parameters,
    resolve_return_type,
    tab_lines,
)
from .literals import infer_type, try_parse_literal

_PROPERTY_NAME = re.compile(r"^\s*['\"]?([\w$]+)['\"]?\s*:")
_ASSIGNMENT_NAME = re.compile(
    r"^\s*(?:(?:var|let|const)\s+)?(?:[\w$]+\s*\.\s*)*([\w$]+)\s*=(?![=>])"
)
_METHOD_NAME = re.compile(r"^\s*(?:static\s+)?(?:async\s+)?(?:get\s+|set\s+)?\*?\s*([\w$]+)\s*\(")

logger = get_logger("analyzers.members")


def resolve_member_name(definition: str) -> str:
    """Return the member name from an assignment, property or method head."""
    for pattern in (_PROPERTY_NAME, _ASSIGNMENT_NAME, _METHOD_NAME):
        match = pattern.match(definition)
        if match:
            return match.group(1)
    return ""


def member_path(value: str) -> List[str]:
    """Split a ``@memberof`` target into its owner path."""
    path = [segment for segment in re.split(r"[.#~]", value) if segment]
    if path and path[-1] == "prototype":
        path.pop()
    return path


class MemberAnalyzer(Analyzer):
    """Resolves method and field members into class body declarations."""

    def supports(self, area: CommentArea) -> bool:
        return area.role in (Role.METHOD, Role.FIELD)

    def analyze(self, areas: Iterable[CommentArea]) -> List[Declaration]:
        declarations = super().analyze(areas)
        # Members documented inside an expanded object literal already live in
        # their owner's type.
        owners = {
            f"{declaration.dotted_path}.{declaration.name}"
            for declaration in declarations
            if self._documents_members(declaration.area)
        }
        return [declaration for declaration in declarations if declaration.dotted_path not in owners]

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        name = resolve_member_name(area.definition)
        if not name:
            self.diagnostics.error(
                area,
                "Class Member",
                f"cannot resolve a member name from {area.definition!r}",
            )
            return None

        if area.has_tag("type"):
            role = Role.FIELD
            signature = _field_signature(name, get_field_type(area.comment))
        else:
            arguments = parse_arguments(area.definition) if area.role is Role.METHOD else None
            if arguments is not None:
                role = Role.METHOD
                signature = self._method_signature(area, name, arguments)
            else:
                role = Role.FIELD
                signature = _field_signature(name, self._expand(area, name))

        head = f"{' '.join(area.modifiers)} {signature}".strip()
        return Declaration(
            area=area,
            path=member_path(area.value),
            name=name,
            heads=[head],
            comment=clean_comment_data(area.comment),
            role=role,
            signature=signature,
        )

    def _method_signature(self, area: CommentArea, name: str, arguments: List[str]) -> str:
        fields = align_parameters(
            arguments,
            get_params(area.comment),
            area=area,
            subject=f"{area.value}#{name}",
            diagnostics=self.diagnostics,
        )
        returns = resolve_return_type(area, name, self.diagnostics)
        return f"{name}{render_parameters(fields)}: {returns}"

    def _expand(self, area: CommentArea, name: str) -> str:
        if not self.config.expand_property_declaration_based_on_default or not area.literal:
            return ""
        if self._documents_members(area):
            return self._expand_documented(area.literal)

        value = try_parse_literal(area.literal)
        if value is None:
            self.diagnostics.info(
                f"{area.value}#{name}",
                "Unparsable Literal",
                "default value is not a plain literal, the type is left undeclared",
            )
            return ""
        return infer_type(value)

    def _expand_documented(self, literal: str) -> str:
        nested = apply_member_roles(
            [
                *get_comment_areas(literal, "* @memberof "),
                *get_comment_areas(literal, "* @memberOf "),
            ]
        )
        declarations = MemberAnalyzer(self.diagnostics, self.config).analyze(nested)
        logger.debug("Expanded %d documented members of an object literal", len(declarations))
        if not declarations:
            return "{}"
        parts = []
        for declaration in declarations:
            text = declaration.signature
            if declaration.comment:
                text = f"{declaration.comment}\n{text}"
            parts.append(tab_lines(text))
        return "{\n" + "\n".join(parts) + "\n}"

    def _documents_members(self, area: Optional[CommentArea]) -> bool:
        if area is None or not self.config.expand_property_declaration_based_on_default:
            return False
        return "@memberof" in area.literal or "@memberOf" in area.literal


class ConstructorAnalyzer(Analyzer):
    """Builds ``constructor(...)`` declarations for class areas."""

    def supports(self, area: CommentArea) -> bool:
        return area.role is Role.CLASS and area.has_tag("constructor")

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        arguments = parse_arguments(area.definition) if area.definition else None
        fields = align_parameters(
            arguments,
            get_params(area.comment),
            area=area,
            subject=f"{area.value}#constructor",
            diagnostics=self.diagnostics,
        )
        head = f"constructor{render_parameters(fields)}"
        return Declaration(
            area=area,
            path=area.value.split("."),
            name="constructor",
            heads=[head],
            comment=clean_comment_data(area.comment, CLASS_TAG_SKIPS),
            role=Role.CONSTRUCTOR,
            signature=head,
        )


def _field_signature(name: str, type_: str) -> str:
    return f"{name}: {type_}" if type_ else name


__all__ = ["ConstructorAnalyzer", "MemberAnalyzer", "member_path", "resolve_member_name"]
