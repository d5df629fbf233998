"""Pipeline that turns documented JavaScript into declaration text."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .analyzers import build_analyzers
from .config import GeneratorConfig
from .diagnostics import Diagnostics
from .extraction import collect_noted_objects
from .logging import get_logger
from .merge import (
    into_callbacks,
    into_classes,
    into_modules,
    into_namespaces,
    into_typedefs,
    promote_static_members,
)
from .models import Declaration
from .postproc import DeclarationLinter


class Generator:
    """Runs extraction, analysis, merging and cleanup for one source text."""

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        diagnostics: Diagnostics | None = None,
        linter: DeclarationLinter | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.linter = linter or DeclarationLinter()
        self.logger = get_logger("generator")

    def generate(self, source: str) -> str:
        """Return the declaration text for ``source``."""
        config = self.config
        diagnostics = self.diagnostics
        prepared = config.preprocess(source)

        noted = collect_noted_objects(prepared, diagnostics)
        analyzers = build_analyzers(diagnostics, config)

        members = analyzers["members"].analyze(noted.members)
        constructors = analyzers["constructors"].analyze(noted.names)
        namespaces = analyzers["namespaces"].analyze(noted.names)
        named = _in_source_order(
            [*analyzers["classes"].analyze(noted.names), *analyzers["functions"].analyze(noted.names)]
        )
        typedefs = analyzers["typedefs"].analyze(noted.types)
        callbacks = analyzers["callbacks"].analyze(noted.types)
        modules = analyzers["modules"].analyze(noted.modules)
        self.logger.debug(
            "Resolved %d members, %d constructors, %d namespaces, %d classes/functions, "
            "%d typedefs, %d callbacks, %d modules",
            len(members),
            len(constructors),
            len(namespaces),
            len(named),
            len(typedefs),
            len(callbacks),
            len(modules),
        )

        class_codes = into_classes(
            named, [*constructors, *members], diagnostics, include_private=config.include_private
        )
        namespace_codes = into_namespaces(
            namespaces,
            [
                *into_typedefs(typedefs),
                *into_callbacks(callbacks),
                *class_codes,
                *promote_static_members(members),
            ],
            diagnostics,
        )
        module_codes = into_modules(modules, namespace_codes)

        output = self.linter.lint("\n".join(code.code for code in module_codes))
        self.logger.debug(
            "Generated %d characters with %d reports", len(output), len(diagnostics)
        )
        return config.postprocess(output, source)

    def generate_file(self, source_path: Path, target_path: Optional[Path] = None) -> str:
        """Generate from a file, writing to ``target_path`` when given."""
        source = source_path.read_text(encoding="utf-8")
        self.logger.info("Generating declarations for %s", source_path)
        output = self.generate(source)
        if target_path is not None:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(output, encoding="utf-8")
        return output


def generate(
    source: str,
    config: GeneratorConfig | None = None,
    diagnostics: Diagnostics | None = None,
) -> str:
    """Generate declaration text for ``source`` with a one-off :class:`Generator`."""
    return Generator(config=config, diagnostics=diagnostics).generate(source)


def _in_source_order(declarations: List[Declaration]) -> List[Declaration]:
    return sorted(declarations, key=lambda item: item.area.start if item.area is not None else 0)


__all__ = ["Generator", "generate"]
