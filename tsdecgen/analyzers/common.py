"""Parameter, return and type extraction shared by every definition analyzer."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..diagnostics import Diagnostics
from ..extraction.scanning import extract_balanced, split_top_level
from ..models import CommentArea, Field

DESTRUCTURED = "{}"

_SKIP_DEFAULTS = (
    "* @memberof",
    "* @memberOf",
    "* @name",
    "* @namespace",
    "* @constructor",
    "* @typedef",
    "* @type",
    "* @property",
)

# A trailing space keeps the tag from matching longer ones such as @classdesc.
CLASS_TAG_SKIPS = ("* @class ", "* @alias ")

_NAME_PATTERN = re.compile(
    r"""\s*(?:
        \[\s*(?P<optional_name>(?:\.\.\.)?[\w$.]+)\s*(?:=\s*(?P<default>[^\]]*?))?\s*\]
        |(?P<name>(?:\.\.\.)?[\w$.]+)(?:=(?P<inline_default>\S+))?
    )\s*(?:-\s+)?(?P<description>.*)""",
    re.VERBOSE | re.DOTALL,
)
_RETURN_TAG = re.compile(r"@returns?(?![\w$])")
_TYPED_TAG = re.compile(r"\* @(?:param|returns?)(?![\w$])\s*")
_ASYNC_KEYWORD = re.compile(r"(?:^|[\s=:(])async\b")
_FUNCTION_KEYWORD = re.compile(r"\bfunction\b\s*\*?\s*[\w$]*\s*\(")
_ARROW_START = re.compile(r"[=:]\s*(?:async\s*)?\(")
_METHOD_START = re.compile(r"^\s*(?:static\s+)?(?:async\s+)?(?:get\s+|set\s+)?\*?\s*[\w$]+\s*\(")


@dataclass
class ParamParts:
    """Tokens of a single ``@param`` or ``@property`` line."""

    type: Optional[str]
    name: Optional[str]
    is_optional: bool = False
    default_value: str = ""
    description: str = ""


def tab_lines(text: str, tab: str = "  ") -> str:
    """Indent every non-blank line of ``text`` with ``tab``."""
    return "\n".join(tab + line if line.strip() else "" for line in text.strip().split("\n"))


def _strip_tag_type(line: str) -> str:
    """Remove the balanced type group that directly follows the tag."""
    tag = _TYPED_TAG.search(line)
    if tag is None or line[tag.end() : tag.end() + 1] != "{":
        return line
    end = extract_balanced(line, tag.end())
    if end == -1:
        return line
    return line[: tag.end()].rstrip() + line[end:]


def clean_comment_data(comment: str, skip_additional: Sequence[str] = ()) -> str:
    """Normalise a documentation block for emission.

    Structural tags are dropped, types are removed from ``@param`` and
    ``@return`` lines and ``@desc`` is unwrapped. Returns an empty string when
    nothing but the block frame would remain.
    """
    result: List[str] = []
    to_skip = (*_SKIP_DEFAULTS, *skip_additional)

    for line in comment.split("\n"):
        stripped = line.strip()
        if stripped[:3] == "/**":
            result.append("/**")
        elif stripped[-2:] == "*/":
            result.append(" */")
        elif any(skip in f"{line.rstrip()} " for skip in to_skip):
            continue
        elif "* @param" in line or "* @return" in line:
            result.append(" " + _strip_tag_type(line).strip())
        elif "* @desc" in line:
            result.append(" " + line.replace(" @desc", "", 1).strip())
        else:
            result.append(" " + stripped)

    if len(result) < 3:
        return ""
    return "\n".join(result)


def fix_type(type_: str) -> str:
    """Normalise a documented type expression into declaration syntax."""
    text = type_.strip()

    if "|" in text:
        wrapped = text.startswith("(") and extract_balanced(text, 0) == len(text)
        inner = text[1:-1] if wrapped else text
        alternatives = split_top_level(inner, "|")
        if len(alternatives) > 1:
            fixed = "|".join(fix_type(alternative) for alternative in alternatives)
            return f"({fixed})" if wrapped else fixed

    if text.startswith("..."):
        element = fix_type(text[3:])
        if "|" in element and not element.startswith("("):
            element = f"({element})"
        return f"{element}[]"

    text = text.replace("external:", "").replace("module:", "").replace("~", ".")
    if "#" in text:
        owner, _, member = text.partition("#")
        if member:
            return f"typeof {owner}.prototype.{member}"
        return owner

    lower = text.lower()
    if lower == "function":
        return "Function"
    if lower == "date":
        return "Date"
    if lower == "node":
        return "Node"
    for canonical in ("WeakSet", "WeakMap", "Set", "Map"):
        key = canonical.lower()
        if lower == key:
            return canonical
        if lower.startswith(f"{key}<"):
            return canonical + text[len(key):]
    if lower == "array":
        return "any[]"
    if lower.startswith("array<"):
        return "Array" + text[5:]
    if text == "*":
        return "any"
    return text


def get_param_parts(content: str) -> ParamParts:
    """Split a tag line into type, optional flag, name, default and description."""
    brace = content.find("{")
    if brace == -1:
        return ParamParts(type=None, name=None)
    end = extract_balanced(content, brace)
    if end == -1:
        return ParamParts(type=None, name=None)

    type_ = content[brace + 1 : end - 1].strip()
    match = _NAME_PATTERN.match(content[end:])
    if not match or not (match.group("optional_name") or match.group("name")):
        return ParamParts(type=type_, name=None)

    if match.group("optional_name"):
        return ParamParts(
            type=type_,
            name=match.group("optional_name"),
            is_optional=True,
            default_value=(match.group("default") or "").strip(),
            description=match.group("description").strip(),
        )
    return ParamParts(
        type=type_,
        name=match.group("name"),
        default_value=match.group("inline_default") or "",
        description=match.group("description").strip(),
    )


def tag_blocks(comment: str, tag: str) -> List[str]:
    """Return the text of every ``@tag`` in order, continuation lines included.

    Continuation lines are joined with ``\\n * `` so descriptions keep their
    layout when they are emitted again inside a documentation block.
    """
    pattern = re.compile(rf"@{re.escape(tag)}(?![\w$])")
    blocks: List[List[str]] = []
    current: Optional[List[str]] = None

    for line in comment.split("\n"):
        body = _line_body(line)
        if body.startswith("@"):
            current = None
            if pattern.match(body):
                current = [body]
                blocks.append(current)
        elif current is not None and body:
            current.append(body)

    return ["\n * ".join(block) for block in blocks]


def get_params(comment: str) -> List[Field]:
    """Return the documented top-level parameters in order."""
    return _collect_fields(comment, "param")


def get_properties(comment: str) -> List[Field]:
    """Return the documented ``@property`` fields in order."""
    return _collect_fields(comment, "property")


def get_returns(comment: str) -> str:
    """Return the type of the first ``@return``/``@returns`` tag, or ``void``."""
    match = _RETURN_TAG.search(comment)
    if not match:
        return "void"
    line_end = comment.find("\n", match.end())
    line = comment[match.end() : line_end if line_end != -1 else len(comment)]
    type_ = _braced_type(line)
    if not type_:
        return "void"
    if "#" in type_:
        type_ = type_[: type_.index("#")]
    return fix_type(type_)


def has_return_tag(comment: str) -> bool:
    return _RETURN_TAG.search(comment) is not None


def get_field_type(comment: str) -> str:
    """Return the type declared by the first ``@type`` tag, or ``''``."""
    blocks = tag_blocks(comment, "type")
    if not blocks:
        return ""
    text = blocks[0][len("@type") :].strip()
    type_ = _braced_type(text)
    if type_ is None:
        type_ = text.split()[0] if text.split() else ""
    return fix_type(type_) if type_ else ""


def is_async(definition: str) -> bool:
    return _ASYNC_KEYWORD.search(definition) is not None


def parse_arguments(definition: str) -> Optional[List[str]]:
    """Return argument names from the definition's parameter list.

    Destructured groups collapse to :data:`DESTRUCTURED`, default expressions
    are removed and rest markers are kept. Returns None when the definition
    has no parameter list.
    """
    opening = _parameter_list_start(definition)
    if opening is None:
        return None
    end = extract_balanced(definition, opening)
    if end == -1:
        return None

    names: List[str] = []
    for argument in split_top_level(definition[opening + 1 : end - 1]):
        if argument.lstrip(".").startswith(("{", "[")):
            names.append(DESTRUCTURED)
            continue
        names.append(re.split(r"\s*=", argument, maxsplit=1)[0].strip())
    return names


def align_parameters(
    arguments: Optional[List[str]],
    documented: List[Field],
    *,
    area: CommentArea,
    subject: str,
    diagnostics: Diagnostics,
) -> List[Field]:
    """Pair the definition's arguments with the documented parameters.

    Falls back to the documented list when the definition has no parameter
    list. Mismatching names are reported unless the area is deprecated.
    """
    if arguments is None:
        return list(documented)

    by_name: Dict[str, Field] = {item.name: item for item in documented}
    aligned: List[Field] = []
    for index, argument in enumerate(arguments):
        if argument == DESTRUCTURED:
            if index < len(documented):
                aligned.append(documented[index])
            else:
                aligned.append(Field(type="object", name=f"arg{index}"))
            continue
        rest = argument.startswith("...")
        name = argument[3:] if rest else argument
        documented_field = by_name.get(name)
        if documented_field is None:
            aligned.append(Field(type="any[]" if rest else "any", name=name, rest=rest))
        elif rest and not documented_field.rest:
            aligned.append(replace(documented_field, type=f"{documented_field.type}[]", rest=True))
        else:
            aligned.append(documented_field)

    if not area.is_deprecated:
        _cross_check(arguments, documented, subject, diagnostics)
    return aligned


def render_parameters(fields: Sequence[Field]) -> str:
    """Render a parameter list, promoting misplaced optionals to unions.

    A parameter list cannot hold a required parameter after an optional one,
    so an optional field followed by a required field is typed
    ``T | undefined`` instead of being marked optional.
    """
    rendered: List[str] = []
    for index, item in enumerate(fields):
        later_required = any(not other.optional and not other.rest for other in fields[index + 1 :])
        if item.rest:
            rendered.append(f"...{item.name}: {item.type}")
        elif item.optional and later_required:
            rendered.append(f"{item.name}: {item.type} | undefined")
        elif item.optional:
            rendered.append(f"{item.name}?: {item.type}")
        else:
            rendered.append(f"{item.name}: {item.type}")

    if any("{" in item.type for item in fields):
        return "(\n" + ",\n".join(f"  {line}" for line in rendered) + "\n)"
    return f"({', '.join(rendered)})"


def resolve_return_type(
    area: CommentArea, name: str, diagnostics: Diagnostics
) -> str:
    """Return the declared return type, enforcing promises for async code."""
    returns = get_returns(area.comment)
    if not is_async(area.definition) and not area.has_tag("async"):
        return returns
    if not has_return_tag(area.comment):
        return "Promise<void>"
    if not returns.startswith("Promise") and not area.is_deprecated:
        diagnostics.info(
            f"{area.value}#{name}",
            "Invalid Return",
            f"Async functions should always return a Promise. Instead returned {returns}",
        )
    return returns


@dataclass
class _TypeNode:
    type: str = "any"
    optional: bool = False
    children: Dict[str, "_TypeNode"] = field(default_factory=dict)

    def render(self) -> str:
        if not self.children:
            return self.type
        members = ",".join(
            f"{key}{'?' if child.optional else ''}:{child.render()}"
            for key, child in self.children.items()
        )
        return "{" + members + "}"


def _collect_fields(comment: str, tag: str) -> List[Field]:
    top: Dict[str, Field] = {}
    nested: Dict[str, List[Tuple[List[str], Field]]] = defaultdict(list)

    for block in tag_blocks(comment, tag):
        parts = get_param_parts(block)
        if not parts.type or not parts.name:
            continue
        rest = parts.type.startswith("...") or parts.name.startswith("...")
        name = parts.name[3:] if parts.name.startswith("...") else parts.name
        type_ = fix_type(parts.type)
        if rest and not parts.type.startswith("..."):
            type_ = f"{type_}[]"
        item = Field(
            type=type_,
            name=name,
            value=parts.default_value or None,
            description=parts.description,
            optional=parts.is_optional,
            rest=rest,
        )
        if "." in name:
            parent, *segments = name.split(".")
            nested[parent].append((segments, item))
        else:
            top[name] = item

    for parent, entries in nested.items():
        owner = top.get(parent)
        if owner is None:
            continue
        root = _TypeNode()
        for segments, item in entries:
            node = root
            for segment in segments:
                node = node.children.setdefault(segment, _TypeNode())
            node.type = item.type
            node.optional = item.optional
        owner.type = root.render()

    return list(top.values())


def _cross_check(
    arguments: List[str], documented: List[Field], subject: str, diagnostics: Diagnostics
) -> None:
    declared = [item.name for item in documented]
    actual = [argument[3:] if argument.startswith("...") else argument for argument in arguments]
    for index in range(max(len(declared), len(actual))):
        expected = declared[index] if index < len(declared) else None
        found = actual[index] if index < len(actual) else None
        if found == DESTRUCTURED and expected is not None:
            continue
        if expected != found:
            diagnostics.info(
                subject,
                "Parameter Mismatch",
                f"documented parameters ({', '.join(declared)}) do not match "
                f"the definition ({', '.join(actual)})",
            )
            return


def _parameter_list_start(definition: str) -> Optional[int]:
    for pattern in (_FUNCTION_KEYWORD, _ARROW_START):
        match = pattern.search(definition)
        if match:
            return match.end() - 1
    match = _METHOD_START.match(definition)
    if match:
        return match.end() - 1
    return None


def _braced_type(text: str) -> Optional[str]:
    brace = text.find("{")
    if brace == -1:
        return None
    end = extract_balanced(text, brace)
    if end == -1:
        return None
    return text[brace + 1 : end - 1].strip()


def _line_body(line: str) -> str:
    body = line.strip()
    if body.startswith("/**"):
        body = body[3:]
    elif body.startswith("*") and not body.startswith("*/"):
        body = body[1:]
    if body.endswith("*/"):
        body = body[:-2]
    return body.strip()


__all__ = [
    "CLASS_TAG_SKIPS",
    "DESTRUCTURED",
    "ParamParts",
    "align_parameters",
    "clean_comment_data",
    "fix_type",
    "get_field_type",
    "get_param_parts",
    "get_params",
    "get_properties",
    "get_returns",
    "has_return_tag",
    "is_async",
    "parse_arguments",
    "render_parameters",
    "resolve_return_type",
    "tab_lines",
    "tag_blocks",
]
