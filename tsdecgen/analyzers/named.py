"""Analyzers for named namespaces, classes and free functions."""

from __future__ import annotations

from typing import Optional

from ..models import CommentArea, Declaration, Role
from .base import Analyzer
from .common import (
    CLASS_TAG_SKIPS,
    align_parameters,
    clean_comment_data,
    get_params,
    parse_arguments,
    render_parameters,
    resolve_return_type,
)

# Parameter and return tags describe the constructor, not the container.
_CONTAINER_SKIPS = ("* @param", "* @return", *CLASS_TAG_SKIPS)


class NamespaceAnalyzer(Analyzer):
    def supports(self, area: CommentArea) -> bool:
        return area.role is Role.NAMESPACE

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        return Declaration(
            area=area,
            path=[],
            name=area.value,
            heads=[f"export namespace {area.value}"],
            comment=clean_comment_data(area.comment, _CONTAINER_SKIPS),
            role=Role.NAMESPACE,
        )


class ClassAnalyzer(Analyzer):
    def supports(self, area: CommentArea) -> bool:
        return area.role is Role.CLASS

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        *path, name = area.value.split(".")
        head = f"class {name}" if path else f"export class {name}"
        return Declaration(
            area=area,
            path=path,
            name=name,
            heads=[head],
            comment=clean_comment_data(area.comment, _CONTAINER_SKIPS),
            role=Role.CLASS,
        )


class FunctionAnalyzer(Analyzer):
    """Declares free functions, ambient at the top level."""

    def supports(self, area: CommentArea) -> bool:
        return area.role is Role.FUNCTION

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        *path, name = area.value.split(".")
        fields = align_parameters(
            parse_arguments(area.definition),
            get_params(area.comment),
            area=area,
            subject=area.value,
            diagnostics=self.diagnostics,
        )
        returns = resolve_return_type(area, name, self.diagnostics)
        signature = f"function {name}{render_parameters(fields)}: {returns}"
        return Declaration(
            area=area,
            path=path,
            name=name,
            heads=[signature if path else f"declare {signature}"],
            comment=clean_comment_data(area.comment, ("* @function",)),
            fields=fields,
            returns=returns,
            role=Role.FUNCTION,
            signature=signature,
        )


__all__ = ["ClassAnalyzer", "FunctionAnalyzer", "NamespaceAnalyzer"]
