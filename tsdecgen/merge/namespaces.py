"""Promote statics and group emitted code into namespace blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..diagnostics import Diagnostics
from ..emit import render_declaration, render_namespace
from ..logging import get_logger
from ..models import Declaration, EmittedCode, Role
from .classes import is_promoted_static

logger = get_logger("merge.namespaces")


@dataclass
class _Group:
    namespace: Optional[Declaration] = None
    members: List[EmittedCode] = field(default_factory=list)


def promote_static_members(members: Sequence[Declaration]) -> List[EmittedCode]:
    """Render public static members as namespace-level functions and variables."""
    results: List[EmittedCode] = []
    for member in members:
        if not is_promoted_static(member):
            continue
        if member.role is Role.METHOD:
            head = f"function {member.signature}"
        elif member.role is Role.FIELD:
            keyword = "const" if member.area.has_tag("readonly") else "let"
            head = f"{keyword} {member.signature}"
        else:
            raise ValueError(f"Unhandled static role {member.role!r} for {member.name}")
        results.append(
            EmittedCode(
                area=member.area,
                code=render_declaration(member.comment, member.override or head),
                path=list(member.path),
            )
        )
    return results


def into_namespaces(
    namespaces: Sequence[Declaration],
    codes: Sequence[EmittedCode],
    diagnostics: Diagnostics,
) -> List[EmittedCode]:
    """Wrap emitted code in the namespace named by its path.

    Code with an empty path stays at the top level. A path without a declared
    namespace gets one synthesised, unless everything under it is promoted
    statics, in which case it is dropped. Declared namespaces with nothing in
    them are dropped.
    """
    groups: Dict[str, _Group] = {}
    for namespace in namespaces:
        group = groups.setdefault(namespace.name, _Group())
        if group.namespace is None:
            group.namespace = namespace
    for code in codes:
        groups.setdefault(".".join(code.path), _Group()).members.append(code)

    results: List[EmittedCode] = []
    for path, group in groups.items():
        texts = [member.code for member in group.members]
        namespace = group.namespace

        if not path:
            if texts:
                results.append(EmittedCode(area=None, code="\n\n".join(texts)))
            continue

        if namespace is None:
            if all(_is_plain_static(member) for member in group.members):
                logger.debug("Dropping %s, it only holds static members", path)
                continue
            diagnostics.info(path, "Namespace", f"path {path} has no definition for members, created automatically")
            results.append(EmittedCode(area=None, code=render_namespace("", f"export namespace {path}", texts)))
            continue

        if not texts:
            logger.debug("Dropping empty namespace %s", path)
            continue
        head = namespace.override or namespace.heads[0]
        results.append(
            EmittedCode(area=namespace.area, code=render_namespace(namespace.comment, head, texts))
        )
    return results


def _is_plain_static(code: EmittedCode) -> bool:
    return code.area is not None and code.area.is_static and not code.area.declaration_override


__all__ = ["into_namespaces", "promote_static_members"]
