"""Classify comment areas into namespace, class, function, type and member roles."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable, List, Set

from ..diagnostics import Diagnostics
from ..logging import get_logger
from ..models import CommentArea, NotedObjects, Role
from .comments import get_comment_areas

CLASS_TAGS = ("class", "constructor", "namespace")
NON_CLASS_TAGS = (
    "callback",
    "memberof",
    "memberOf",
    "static",
    "type",
    "typedef",
    "function",
    "instance",
)

# Markers whose presence means a block is handled by one of the collectors.
_CLASSIFIED_MARKERS = (
    "* @name ",
    "* @alias ",
    "* @typedef ",
    "* @callback ",
    "* @memberof ",
    "* @memberOf ",
    "* @external ",
    "* @property ",
    "* @function ",
    "* @module",
)

CLASS_METHOD_PATTERN = re.compile(
    r"^\s*(?:static\s+)?(?:async\s+)?(?:get\s+|set\s+)?\*?\s*[\w$]+\s*\(.*\)\s*$"
)
_STATIC_KEYWORD = re.compile(r"^\s*static\s")
_PARAMETER_LIST = re.compile(r"\(.*\)")

logger = get_logger("classifier")


def collect_noted_objects(source: str, diagnostics: Diagnostics) -> NotedObjects:
    """Build the grouped collection of every documented object in ``source``."""
    names = classify_named_objects(
        _well_formed(
            [
                *get_comment_areas(source, "* @name "),
                *get_comment_areas(source, "* @function "),
                *get_comment_areas(source, "* @alias "),
            ],
            diagnostics,
        )
    )

    types = _well_formed(
        [
            *get_comment_areas(source, "* @typedef ", role=Role.TYPEDEF, definition_required=False),
            *get_comment_areas(source, "* @callback ", role=Role.CALLBACK, definition_required=False),
        ],
        diagnostics,
    )

    members = apply_member_roles(
        _well_formed(
            [
                *get_comment_areas(source, "* @memberof "),
                *get_comment_areas(source, "* @memberOf "),
            ],
            diagnostics,
        )
    )

    modules = _well_formed(
        get_comment_areas(source, "* @module", role=Role.MODULE), diagnostics
    )

    unclassified = collect_unclassified(
        area for area in get_comment_areas(source, "* @") if not area.malformed
    )
    for area in unclassified:
        diagnostics.error(
            area,
            "Unclassified",
            f"comment at offset {area.start} carries no recognised classification tag",
        )

    logger.debug(
        "Collected %d names, %d types, %d members, %d modules, %d unclassified",
        len(names),
        len(types),
        len(members),
        len(modules),
        len(unclassified),
    )
    return NotedObjects(
        names=names,
        types=types,
        members=members,
        modules=modules,
        unclassified=unclassified,
    )


def classify_named_objects(areas: Iterable[CommentArea]) -> List[CommentArea]:
    """Assign function, or namespace plus class, roles to name-like areas."""
    result: List[CommentArea] = []
    seen: Set[int] = set()

    for area in areas:
        # @name and @function in one block are the same entity.
        if area.start in seen:
            continue
        seen.add(area.start)

        if area.has_tag("alias") and not area.has_tag("class"):
            continue

        if area.has_tag("function") or (
            area.has_tag("name") and not any(area.has_tag(tag) for tag in CLASS_TAGS)
        ):
            result.append(replace(area, role=Role.FUNCTION, modifiers=[]))
            continue

        # Without a restricting tag the block documents both a namespace of
        # statics and an instantiable class.
        result.append(replace(area, role=Role.NAMESPACE, modifiers=[]))
        result.append(replace(area, role=Role.CLASS, modifiers=[]))

    return result


def apply_member_roles(areas: Iterable[CommentArea]) -> List[CommentArea]:
    """Compute visibility, static scope and method/field role for member areas."""
    result: List[CommentArea] = []

    for area in areas:
        modifiers: List[str] = []
        if area.has_tag("private"):
            modifiers.append("private")
        elif area.has_tag("protected"):
            modifiers.append("protected")
        else:
            modifiers.append("public")

        if is_static_member(area):
            modifiers.append("static")

        if not area.has_tag("type") and _PARAMETER_LIST.search(area.definition):
            role = Role.METHOD
        else:
            role = Role.FIELD

        result.append(replace(area, modifiers=modifiers, role=role))

    return result


def is_static_member(area: CommentArea) -> bool:
    """Return True when a member belongs to the namespace-level surface."""
    if _STATIC_KEYWORD.match(area.definition):
        return True
    return (
        ".prototype." not in area.definition
        and ".prototype" not in area.value
        and "#" not in area.value
        and not area.has_tag("instance")
        and not CLASS_METHOD_PATTERN.match(area.definition)
    )


def check_mutually_exclusive_tags(
    area: CommentArea, is_class: bool, diagnostics: Diagnostics
) -> bool:
    """Report tags that contradict the role an area was given.

    Returns True when the area is consistent.
    """
    candidates = NON_CLASS_TAGS if is_class else CLASS_TAGS
    conflicting = [f"@{tag}" for tag in candidates if area.has_tag(tag)]
    if not conflicting:
        return True
    role = "a class" if is_class else "a non-class entity"
    diagnostics.error(
        area,
        "Mutually Exclusive Tags",
        f"{area.value} is documented as {role} but carries {', '.join(conflicting)}",
    )
    return False


def collect_unclassified(areas: Iterable[CommentArea]) -> List[CommentArea]:
    """Return documented blocks that no collector will pick up."""
    result: List[CommentArea] = []
    for area in areas:
        if area.has_tag("private"):
            continue
        if any(marker in area.comment for marker in _CLASSIFIED_MARKERS):
            continue
        result.append(area)
    return result


def _well_formed(areas: List[CommentArea], diagnostics: Diagnostics) -> List[CommentArea]:
    result: List[CommentArea] = []
    for area in areas:
        if area.malformed:
            diagnostics.error(
                area,
                "Malformed Comment",
                f"tag at offset {area.start} is not enclosed in a /** */ block",
            )
            continue
        result.append(area)
    return result


__all__ = [
    "CLASS_METHOD_PATTERN",
    "apply_member_roles",
    "check_mutually_exclusive_tags",
    "classify_named_objects",
    "collect_noted_objects",
    "collect_unclassified",
    "is_static_member",
]
