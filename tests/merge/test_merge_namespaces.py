"""Tests for static promotion and namespace grouping."""

from __future__ import annotations

from tsdecgen.merge import into_namespaces, promote_static_members
from tsdecgen.models import Declaration, EmittedCode, Role


def _static(area_factory, name, signature, role=Role.METHOD, tags="", modifiers=("public", "static")):
    area = area_factory(
        comment=f"/**\n * @memberof Lib\n{tags} */",
        value="Lib",
        modifiers=list(modifiers),
        role=role,
    )
    return Declaration(
        area=area,
        path=["Lib"],
        name=name,
        heads=[f"{' '.join(modifiers)} {signature}"],
        role=role,
        signature=signature,
    )


def _namespace(area_factory, name, comment=""):
    area = area_factory(comment=f"/**\n * @name {name}\n */", value=name, role=Role.NAMESPACE)
    return Declaration(
        area=area,
        path=[],
        name=name,
        heads=[f"export namespace {name}"],
        comment=comment,
        role=Role.NAMESPACE,
    )


def test_promote_static_members(area_factory) -> None:
    members = [
        _static(area_factory, "load", "load(path: string): void"),
        _static(area_factory, "LIMIT", "LIMIT: number", role=Role.FIELD, tags=" * @readonly\n"),
        _static(area_factory, "count", "count: number", role=Role.FIELD),
        _static(area_factory, "hidden", "hidden(): void", modifiers=("private", "static")),
        _static(area_factory, "method", "method(): void", modifiers=("public",)),
    ]

    codes = promote_static_members(members)

    assert [code.code for code in codes] == [
        "function load(path: string): void",
        "const LIMIT: number",
        "let count: number",
    ]
    assert all(code.path == ["Lib"] for code in codes)


def test_promoted_member_keeps_comment_and_override(area_factory) -> None:
    member = _static(area_factory, "load", "load(path: string): void")
    member.comment = "/**\n * Loads.\n */"
    member.area.declaration_override = "function load(path: string | Buffer): void"

    [code] = promote_static_members([member])

    assert code.code == "/**\n * Loads.\n */\nfunction load(path: string | Buffer): void"


def test_codes_are_wrapped_in_their_namespace(diagnostics, area_factory) -> None:
    namespace = _namespace(area_factory, "Lib", comment="/**\n * Library.\n */")
    codes = [
        EmittedCode(area=None, code="let x: number", path=["Lib"]),
        EmittedCode(area=None, code="interface Opt {\n  a: string\n}", path=["Lib"]),
    ]

    [result] = into_namespaces([namespace], codes, diagnostics)

    assert result.code == (
        "/**\n"
        " * Library.\n"
        " */\n"
        "export namespace Lib {\n"
        "  let x: number\n"
        "\n"
        "  interface Opt {\n"
        "    a: string\n"
        "  }\n"
        "}"
    )
    assert diagnostics.reports == []


def test_top_level_code_is_not_wrapped(diagnostics) -> None:
    codes = [
        EmittedCode(area=None, code="declare function a(): void"),
        EmittedCode(area=None, code="export class B {\n  b: string\n}"),
    ]

    [result] = into_namespaces([], codes, diagnostics)

    assert result.code == "declare function a(): void\n\nexport class B {\n  b: string\n}"


def test_undeclared_namespace_is_synthesised(diagnostics) -> None:
    codes = [EmittedCode(area=None, code="interface Options {\n  verbose: boolean\n}", path=["Lib", "util"])]

    [result] = into_namespaces([], codes, diagnostics)

    assert result.code == "export namespace Lib.util {\n  interface Options {\n    verbose: boolean\n  }\n}"
    [report] = diagnostics.infos
    assert report.category == "Namespace"
    assert report.message == "path Lib.util has no definition for members, created automatically"


def test_undeclared_namespace_of_statics_is_dropped(diagnostics, area_factory) -> None:
    codes = promote_static_members([_static(area_factory, "load", "load(): void")])

    assert into_namespaces([], codes, diagnostics) == []
    assert diagnostics.reports == []


def test_empty_declared_namespace_is_dropped(diagnostics, area_factory) -> None:
    lib = _namespace(area_factory, "Lib")
    other = _namespace(area_factory, "Other")
    codes = [EmittedCode(area=None, code="let x: number", path=["Other"])]

    [result] = into_namespaces([lib, other], codes, diagnostics)

    assert result.code == "export namespace Other {\n  let x: number\n}"
