"""Analyzer for the ``@module`` block, its imports and exports."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..models import CommentArea, Declaration, Role
from .base import Analyzer
from .common import clean_comment_data, fix_type, tag_blocks

_EXPORT_PATTERN = re.compile(r"^\{(?P<type>[^}]*)\}\s*(?P<name>[\w$]+)\s*$")


def export_statement(text: str) -> str:
    """Render one export tag value as a declaration statement."""
    match = _EXPORT_PATTERN.match(text)
    if not match:
        return f"export {text}"
    type_ = fix_type(match.group("type"))
    name = match.group("name")
    if type_ == "Function":
        return f"export function {name}(): void"
    return f"export const {name}: {type_}"


class ModuleAnalyzer(Analyzer):
    """Declares the module wrapper. Only the first module block is used."""

    def supports(self, area: CommentArea) -> bool:
        return area.role is Role.MODULE

    def analyze(self, areas: Iterable[CommentArea]) -> List[Declaration]:
        modules = [area for area in areas if self.supports(area)]
        for extra in modules[1:]:
            self.diagnostics.error(
                extra,
                "Module",
                f"module {extra.value!r} ignored, {modules[0].value!r} is already declared",
            )
        return super().analyze(modules[:1])

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        import_tag = self.config.import_tag_name
        export_tag = self.config.export_tag_name
        return Declaration(
            area=area,
            path=[],
            name=area.value,
            heads=[f"declare module '{area.value}'"],
            comment=clean_comment_data(
                area.comment, ("* @module", f"* @{import_tag}", f"* @{export_tag}")
            ),
            role=Role.MODULE,
            imports=[f"import {text}" for text in _tag_texts(area.comment, import_tag)],
            exports=[export_statement(text) for text in _tag_texts(area.comment, export_tag)],
        )


def _tag_texts(comment: str, tag: str) -> List[str]:
    texts = []
    for block in tag_blocks(comment, tag):
        text = block.split("\n", 1)[0][len(tag) + 1 :].strip()
        if text:
            texts.append(text)
    return texts


__all__ = ["ModuleAnalyzer", "export_statement"]
