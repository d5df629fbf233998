"""Jinja2 rendering of declaration containers and statements."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..analyzers.common import tab_lines
from ..models import Field

_TEMPLATES_DIR = Path(__file__).with_name("templates")


def _create_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["tab"] = tab_lines
    return env


_ENV = _create_env()


def render(template: str, **context: Any) -> str:
    """Render ``<template>.ts.j2`` without its trailing newline."""
    return _ENV.get_template(f"{template}.ts.j2").render(**context).rstrip("\n")


def render_declaration(comment: str, head: str) -> str:
    return render("declaration", comment=comment, head=head)


def render_container(comment: str, head: str, members: Sequence[str]) -> str:
    """Render a class or interface body, one member per line."""
    return render("container", comment=comment, head=head, members=list(members))


def render_namespace(comment: str, head: str, members: Sequence[str]) -> str:
    """Render a namespace body with a blank line between members."""
    return render("namespace", comment=comment, head=head, members=list(members))


def render_property(item: Field) -> str:
    return render(
        "property",
        description=item.description,
        value=item.value,
        name=item.name,
        optional=item.optional,
        type=item.type,
    )


def render_module(
    comment: str,
    head: str,
    blocks: Sequence[str],
    imports: Sequence[str] = (),
    exports: Sequence[str] = (),
) -> str:
    return render(
        "module",
        comment=comment,
        head=head,
        blocks=list(blocks),
        imports=list(imports),
        exports=list(exports),
    )


__all__ = [
    "render",
    "render_container",
    "render_declaration",
    "render_module",
    "render_namespace",
    "render_property",
    "tab_lines",
]
