"""Render typedef interfaces and callback function declarations."""

from __future__ import annotations

from typing import List, Sequence

from ..analyzers.common import render_parameters
from ..emit import render_container, render_declaration, render_property
from ..models import Declaration, EmittedCode, Role


def into_typedefs(typedefs: Sequence[Declaration]) -> List[EmittedCode]:
    results: List[EmittedCode] = []
    for declaration in typedefs:
        if declaration.role is not Role.TYPEDEF:
            raise ValueError(f"Unhandled typedef role {declaration.role!r} for {declaration.name}")
        if declaration.override:
            code = render_declaration(declaration.comment, declaration.override)
        elif declaration.is_interface:
            code = render_container(
                declaration.comment,
                declaration.heads[0],
                [render_property(item) for item in declaration.fields],
            )
        else:
            code = render_declaration(declaration.comment, declaration.heads[0])
        results.append(EmittedCode(area=declaration.area, code=code, path=list(declaration.path)))
    return results


def into_callbacks(callbacks: Sequence[Declaration]) -> List[EmittedCode]:
    results: List[EmittedCode] = []
    for declaration in callbacks:
        if declaration.role is not Role.CALLBACK:
            raise ValueError(f"Unhandled callback role {declaration.role!r} for {declaration.name}")
        head = declaration.override or (
            f"{declaration.heads[0]}{render_parameters(declaration.fields)}: {declaration.returns}"
        )
        results.append(
            EmittedCode(
                area=declaration.area,
                code=render_declaration(declaration.comment, head),
                path=list(declaration.path),
            )
        )
    return results


__all__ = ["into_callbacks", "into_typedefs"]
