"""Wrap namespace blocks in the module declaration."""

from __future__ import annotations

import re
from typing import List, Sequence

from ..emit import render_module
from ..models import Declaration, EmittedCode

# Top-level functions are ambient on their own but must not repeat
# ``declare`` inside an ambient module.
_AMBIENT_FUNCTION = re.compile(r"^declare (?=function\b)", re.MULTILINE)


def into_modules(modules: Sequence[Declaration], codes: Sequence[EmittedCode]) -> List[EmittedCode]:
    """Return the final blocks, wrapped in the first module when one exists."""
    blocks = [code.code for code in codes]
    if not modules:
        return [EmittedCode(area=None, code="\n\n".join(blocks))]

    module = modules[0]
    code = render_module(
        module.comment,
        module.override or module.heads[0],
        [_AMBIENT_FUNCTION.sub("export ", block) for block in blocks],
        imports=module.imports,
        exports=module.exports,
    )
    return [EmittedCode(area=module.area, code=code, path=list(module.path))]


__all__ = ["into_modules"]
