"""Generate TypeScript declarations from JSDoc-annotated JavaScript."""

from .config import GeneratorConfig, load_config
from .diagnostics import Diagnostics
from .generator import Generator, generate

__all__ = ["Diagnostics", "Generator", "GeneratorConfig", "generate", "load_config"]
