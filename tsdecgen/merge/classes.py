"""Attach members to their classes and emit class, interface and function text."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from ..diagnostics import Diagnostics
from ..emit import render_container, render_declaration
from ..extraction.classifier import check_mutually_exclusive_tags
from ..logging import get_logger
from ..models import Declaration, EmittedCode, Role

logger = get_logger("merge.classes")

_MEMBER_ROLES = (Role.CONSTRUCTOR, Role.METHOD, Role.FIELD)


@dataclass
class _Container:
    declaration: Declaration
    members: List[Declaration] = field(default_factory=list)


def is_class_like(segment: str) -> bool:
    """Capitalised path segments name classes."""
    return bool(segment) and segment[0] == segment[0].upper()


def is_promoted_static(member: Declaration) -> bool:
    """Return True for public static members that belong to the namespace."""
    if member.role not in (Role.METHOD, Role.FIELD) or member.area is None:
        return False
    return member.area.modifiers[:2] == ["public", "static"]


def into_classes(
    classes: Sequence[Declaration],
    members: Sequence[Declaration],
    diagnostics: Diagnostics,
    include_private: bool = False,
) -> List[EmittedCode]:
    """Group members under their owning class and render every container.

    Members whose owner was never declared get an interface synthesised when
    the owner's last path segment is capitalised. Function declarations are
    rendered as standalone statements and never receive members.
    """
    containers: List[_Container] = []
    lookup: Dict[str, _Container] = {}
    for declaration in classes:
        container = _Container(declaration)
        containers.append(container)
        if declaration.role is not Role.FUNCTION:
            lookup[_full_path(declaration)] = container

    for member in members:
        if is_promoted_static(member):
            continue
        path = member.dotted_path
        if member.area is not None and member.area.is_private and not include_private:
            diagnostics.info(
                member.area, "Class Member", f"{path}.{member.name} is private and will not be documented"
            )
            continue

        container = lookup.get(path)
        if container is None:
            if not member.path or not is_class_like(member.path[-1]):
                diagnostics.error(
                    member.area,
                    "Class Member",
                    f'name {member.name} @memberof parameter has undefined object path of "{path}"',
                )
                continue
            interface = Declaration(
                area=None,
                path=member.path[:-1],
                name=member.path[-1],
                heads=[f"interface {member.path[-1]}"],
                is_interface=True,
                role=Role.CLASS,
            )
            container = _Container(interface)
            containers.append(container)
            lookup[path] = container
            logger.debug("Synthesised interface %s", path)

        if container.declaration.is_interface:
            member = replace(member, heads=[member.signature])
        container.members.append(member)

    results: List[EmittedCode] = []
    for container in containers:
        code = _render(container, diagnostics, include_private)
        if code is not None:
            declaration = container.declaration
            results.append(EmittedCode(area=declaration.area, code=code, path=list(declaration.path)))
    return results


def _render(
    container: _Container, diagnostics: Diagnostics, include_private: bool
) -> Optional[str]:
    declaration = container.declaration
    area = declaration.area
    path = _full_path(declaration)

    if declaration.role is Role.FUNCTION:
        return render_declaration(declaration.comment, declaration.override or declaration.heads[0])

    if area is not None:
        check_mutually_exclusive_tags(area, True, diagnostics)
        if area.is_private:
            if not include_private:
                diagnostics.error(area, "Class", f"{path} is marked @private and is dropped")
                return None
            diagnostics.info(area, "Class", f"{path} is marked @private and is included")

    if not container.members:
        if declaration.override:
            return render_declaration(declaration.comment, declaration.override)
        diagnostics.info(
            area if area is not None else path,
            "Class",
            f"path {path} has no defined members, nothing will be documented.",
        )
        return None

    head = declaration.override or declaration.heads[0]
    return render_container(declaration.comment, head, [_render_member(member) for member in container.members])


def _render_member(member: Declaration) -> str:
    if member.role not in _MEMBER_ROLES:
        raise ValueError(f"Unhandled member role {member.role!r} for {member.name}")
    heads = [member.override] if member.override else member.heads
    text = "\n".join(heads)
    if member.comment:
        return f"{member.comment}\n{text}"
    return text


def _full_path(declaration: Declaration) -> str:
    return ".".join([*declaration.path, declaration.name])


__all__ = ["into_classes", "is_class_like", "is_promoted_static"]
