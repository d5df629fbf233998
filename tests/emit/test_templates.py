"""Tests for declaration templates."""

from __future__ import annotations

from tsdecgen.emit import (
    render_container,
    render_declaration,
    render_module,
    render_namespace,
    render_property,
)
from tsdecgen.models import Field


def test_render_declaration_with_and_without_comment() -> None:
    assert render_declaration("", "type A = string") == "type A = string"
    assert render_declaration("/**\n * Doc.\n */", "type A = string") == "/**\n * Doc.\n */\ntype A = string"


def test_render_container_indents_members() -> None:
    code = render_container("", "export class Foo", ["public a: string", "/**\n * B.\n */\npublic b(): void"])

    assert code == "export class Foo {\n  public a: string\n  /**\n   * B.\n   */\n  public b(): void\n}"


def test_render_namespace_separates_members() -> None:
    code = render_namespace("/**\n * Lib.\n */", "export namespace Lib", ["let a: number", "let b: string"])

    assert code == "/**\n * Lib.\n */\nexport namespace Lib {\n  let a: number\n\n  let b: string\n}"


def test_render_property() -> None:
    plain = render_property(Field(type="string", name="name", description="The name"))
    defaulted = render_property(Field(type="string", name="greeting", value='"hi"', description="Greeting", optional=True))

    assert plain == "/**\n * The name\n */\nname: string"
    assert defaulted == '/**\n * Greeting\n * @default "hi"\n */\ngreeting?: string'


def test_render_module_without_imports_or_exports() -> None:
    code = render_module("", "declare module 'lib'", ["type A = number"])

    assert code == "declare module 'lib' {\n  type A = number\n}"


def test_render_module_places_exports_last() -> None:
    code = render_module(
        "",
        "declare module 'lib'",
        ["type A = number"],
        imports=["import * as fs from 'fs'"],
        exports=["export function start(): void"],
    )

    assert code == (
        "import * as fs from 'fs'\n"
        "\n"
        "declare module 'lib' {\n"
        "  type A = number\n"
        "  export function start(): void\n"
        "}"
    )
