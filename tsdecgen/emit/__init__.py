"""Rendering of declaration text."""

from .templates import (
    render_container,
    render_declaration,
    render_module,
    render_namespace,
    render_property,
)

__all__ = [
    "render_container",
    "render_declaration",
    "render_module",
    "render_namespace",
    "render_property",
]
