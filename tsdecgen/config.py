"""Configuration loading for tsdecgen (.tsdecgen.yml)."""

from __future__ import annotations

import importlib
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".tsdecgen.yml"

PreprocessHook = Callable[[str], str]
PostprocessHook = Callable[[str, str], str]


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class Replacement:
    """Regex substitution applied to the raw source before parsing."""

    pattern: str
    replacement: str

    def apply(self, text: str) -> str:
        return re.sub(self.pattern, self.replacement, text, flags=re.MULTILINE)


@dataclass
class GeneratorConfig:
    """Every recognised generation option, with defaults filled in."""

    import_tag_name: str = "timport"
    export_tag_name: str = "texport"
    preprocessing: Optional[PreprocessHook] = None
    postprocessing: Optional[PostprocessHook] = None
    include_private: bool = False
    expand_property_declaration_based_on_default: bool = True
    replacements: List[Replacement] = field(default_factory=list)
    root: Optional[Path] = None

    def preprocess(self, source: str) -> str:
        """Apply replacement rules then the preprocessing hook."""
        for rule in self.replacements:
            source = rule.apply(source)
        if self.preprocessing is not None:
            source = self.preprocessing(source)
        return source

    def postprocess(self, output: str, source: str) -> str:
        if self.postprocessing is not None:
            return self.postprocessing(output, source)
        return output


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GeneratorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = GeneratorConfig(root=root)

    import_tag = _as_str(data.get("import_tag"))
    if import_tag:
        config.import_tag_name = import_tag.lstrip("@")
    export_tag = _as_str(data.get("export_tag"))
    if export_tag:
        config.export_tag_name = export_tag.lstrip("@")

    include_private = _as_bool(data.get("include_private"))
    if include_private is not None:
        config.include_private = include_private
    expand = _as_bool(data.get("expand_property_declaration_based_on_default"))
    if expand is not None:
        config.expand_property_declaration_based_on_default = expand

    config.replacements = _parse_replacements(data.get("replacements"))

    preprocessing = _as_str(data.get("preprocessing"))
    if preprocessing:
        config.preprocessing = _resolve_hook(preprocessing)
    postprocessing = _as_str(data.get("postprocessing"))
    if postprocessing:
        config.postprocessing = _resolve_hook(postprocessing)

    return config


def merge_config(base: GeneratorConfig, overrides: Mapping[str, Any]) -> GeneratorConfig:
    """Return a copy of ``base`` with the non-``None`` overrides applied."""
    known = {item.name for item in fields(GeneratorConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration options: {', '.join(unknown)}")
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(base, **changes)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_replacements(value: Any) -> List[Replacement]:
    if value is None:
        return []
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigError("replacements must be a list of {pattern, replacement} mappings")
    rules: List[Replacement] = []
    for item in value:
        if not isinstance(item, dict) or "pattern" not in item:
            raise ConfigError("Each replacement needs at least a pattern")
        pattern = str(item["pattern"])
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"Invalid replacement pattern {pattern!r}: {exc}") from exc
        rules.append(Replacement(pattern=pattern, replacement=str(item.get("replacement") or "")))
    return rules


def _resolve_hook(reference: str) -> Callable[..., str]:
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise ConfigError(f"Hook {reference!r} must look like 'package.module:function'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import hook module {module_name!r}: {exc}") from exc
    hook = getattr(module, attribute, None)
    if not callable(hook):
        raise ConfigError(f"Hook {reference!r} is not callable")
    return hook


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
