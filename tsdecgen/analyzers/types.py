"""Analyzers for ``@typedef`` and ``@callback`` blocks."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..extraction.classifier import check_mutually_exclusive_tags
from ..extraction.scanning import extract_balanced
from ..models import CommentArea, Declaration, Role
from .base import Analyzer
from .common import clean_comment_data, fix_type, get_params, get_properties, get_returns


def split_type_path(value: str) -> Tuple[List[str], str, str]:
    """Split a typedef/callback tag value into ``(path, name, declared type)``.

    ``Owner~Name`` places ``Name`` inside ``Owner``; a dotted value without a
    tilde uses its last segment as the name.
    """
    declared = ""
    text = value.strip()
    if text.startswith("{"):
        end = extract_balanced(text, 0)
        if end != -1:
            declared = text[1 : end - 1].strip()
            text = text[end:].strip()
    text = text.split()[0] if text.split() else ""

    if "~" in text:
        owner, _, name = text.rpartition("~")
        return owner.replace("~", ".").split("."), name, declared
    *path, name = text.split(".")
    return path, name, declared


class TypedefAnalyzer(Analyzer):
    """Turns typedefs into interfaces, or aliases when no object is described."""

    def supports(self, area: CommentArea) -> bool:
        return area.role is Role.TYPEDEF

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        check_mutually_exclusive_tags(area, False, self.diagnostics)
        path, name, declared = split_type_path(area.value)
        if not name:
            self.diagnostics.error(area, "Typedef", "typedef carries no name")
            return None

        fields = get_properties(area.comment)
        if not fields and declared and not declared.lower().startswith("object"):
            head = f"type {name} = {fix_type(declared)}"
        else:
            head = f"interface {name}"
        return Declaration(
            area=area,
            path=path,
            name=name,
            heads=[head],
            comment=clean_comment_data(area.comment),
            fields=fields,
            is_interface=head.startswith("interface"),
            role=Role.TYPEDEF,
        )


class CallbackAnalyzer(Analyzer):
    """Turns callbacks into function declarations."""

    def supports(self, area: CommentArea) -> bool:
        return area.role is Role.CALLBACK

    def declare(self, area: CommentArea) -> Optional[Declaration]:
        check_mutually_exclusive_tags(area, False, self.diagnostics)
        path, name, _ = split_type_path(area.value)
        if not name:
            self.diagnostics.error(area, "Callback", "callback carries no name")
            return None

        head = f"function {name}" if path else f"declare function {name}"
        return Declaration(
            area=area,
            path=path,
            name=name,
            heads=[head],
            comment=clean_comment_data(area.comment, ("* @callback",)),
            fields=get_params(area.comment),
            returns=get_returns(area.comment),
            role=Role.CALLBACK,
        )


__all__ = ["CallbackAnalyzer", "TypedefAnalyzer", "split_type_path"]
