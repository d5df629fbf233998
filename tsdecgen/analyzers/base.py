"""Base classes for definition analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..config import GeneratorConfig
from ..diagnostics import Diagnostics
from ..models import CommentArea, Declaration


class Analyzer(ABC):
    """Contract for analyzers that turn classified areas into declarations."""

    def __init__(self, diagnostics: Diagnostics, config: Optional[GeneratorConfig] = None) -> None:
        self.diagnostics = diagnostics
        self.config = config or GeneratorConfig()

    @abstractmethod
    def supports(self, area: CommentArea) -> bool:
        """Return True when this analyzer handles the area's role."""

    @abstractmethod
    def declare(self, area: CommentArea) -> Optional[Declaration]:
        """Resolve one area, or return None when it cannot be declared."""

    def analyze(self, areas: Iterable[CommentArea]) -> List[Declaration]:
        declarations: List[Declaration] = []
        for area in areas:
            if not self.supports(area):
                continue
            declaration = self.declare(area)
            if declaration is not None:
                declarations.append(declaration)
        return declarations
