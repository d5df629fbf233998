"""Definition analyzers and their registry."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from ..config import GeneratorConfig
from ..diagnostics import Diagnostics
from .base import Analyzer
from .members import ConstructorAnalyzer, MemberAnalyzer
from .module import ModuleAnalyzer
from .named import ClassAnalyzer, FunctionAnalyzer, NamespaceAnalyzer
from .types import CallbackAnalyzer, TypedefAnalyzer

_BUILTIN_FACTORIES: Dict[str, Callable[[Diagnostics, Optional[GeneratorConfig]], Analyzer]] = {
    "members": MemberAnalyzer,
    "constructors": ConstructorAnalyzer,
    "namespaces": NamespaceAnalyzer,
    "classes": ClassAnalyzer,
    "functions": FunctionAnalyzer,
    "typedefs": TypedefAnalyzer,
    "callbacks": CallbackAnalyzer,
    "modules": ModuleAnalyzer,
}


def build_analyzers(
    diagnostics: Diagnostics, config: Optional[GeneratorConfig] = None
) -> Dict[str, Analyzer]:
    """Instantiate every built-in analyzer against shared diagnostics."""
    analyzers: Dict[str, Analyzer] = {}
    for name, factory in _BUILTIN_FACTORIES.items():
        instance = factory(diagnostics, config)
        if not isinstance(instance, Analyzer):
            raise TypeError(f"Analyzer factory for '{name}' did not return an Analyzer instance")
        analyzers[name] = instance
    return analyzers


__all__ = [
    "Analyzer",
    "CallbackAnalyzer",
    "ClassAnalyzer",
    "ConstructorAnalyzer",
    "FunctionAnalyzer",
    "MemberAnalyzer",
    "ModuleAnalyzer",
    "NamespaceAnalyzer",
    "TypedefAnalyzer",
    "build_analyzers",
]
