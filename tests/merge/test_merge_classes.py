"""Tests for class assembly."""

from __future__ import annotations

import pytest

from tsdecgen.merge import into_classes
from tsdecgen.merge.classes import is_class_like, is_promoted_static
from tsdecgen.models import Declaration, Role


@pytest.fixture
def build_member(area_factory):
    def _build(name, path, signature, modifiers=("public",), role=Role.METHOD, comment="", area_comment=None, **area_kwargs):
        area = area_factory(
            comment=area_comment or f"/**\n * @memberof {'.'.join(path)}\n */",
            value=".".join(path),
            modifiers=list(modifiers),
            role=role,
            **area_kwargs,
        )
        return Declaration(
            area=area,
            path=list(path),
            name=name,
            heads=[f"{' '.join(modifiers)} {signature}".strip()],
            comment=comment,
            role=role,
            signature=signature,
        )

    return _build


@pytest.fixture
def widget(area_factory):
    area = area_factory(comment="/**\n * A widget.\n * @name Widget\n */", value="Widget", role=Role.CLASS)
    return Declaration(
        area=area,
        path=[],
        name="Widget",
        heads=["export class Widget"],
        comment="/**\n * A widget.\n */",
        role=Role.CLASS,
    )


def test_members_are_rendered_inside_their_class(diagnostics, widget, build_member) -> None:
    constructor = build_member("constructor", ["Widget"], "constructor(id: string)", modifiers=(), role=Role.CONSTRUCTOR)
    render = build_member("render", ["Widget"], "render(): void", comment="/**\n * Draws.\n */")
    create = build_member("create", ["Widget"], "create(): Widget", modifiers=("public", "static"))

    [code] = into_classes([widget], [constructor, render, create], diagnostics)

    assert code.code == (
        "/**\n"
        " * A widget.\n"
        " */\n"
        "export class Widget {\n"
        "  constructor(id: string)\n"
        "  /**\n"
        "   * Draws.\n"
        "   */\n"
        "  public render(): void\n"
        "}"
    )
    assert code.path == []
    assert diagnostics.reports == []


def test_private_members_are_dropped_unless_included(diagnostics, widget, build_member) -> None:
    hidden = build_member(
        "secret",
        ["Widget"],
        "secret: string",
        modifiers=("private",),
        role=Role.FIELD,
        area_comment="/**\n * @memberof Widget\n * @private\n */",
    )
    shown = build_member("id", ["Widget"], "id: string", role=Role.FIELD)

    [dropped] = into_classes([widget], [hidden, shown], diagnostics)
    [kept] = into_classes([widget], [hidden, shown], diagnostics, include_private=True)

    assert "secret" not in dropped.code
    assert "  private secret: string" in kept.code
    assert [report.category for report in diagnostics.infos] == ["Class Member"]


def test_missing_capitalised_owner_gets_interface(diagnostics, build_member) -> None:
    member = build_member("verbose", ["Lib", "Options"], "verbose: boolean", role=Role.FIELD)

    [code] = into_classes([], [member], diagnostics)

    assert code.code == "interface Options {\n  verbose: boolean\n}"
    assert code.path == ["Lib"]
    assert code.area is None


def test_missing_lowercase_owner_is_an_error(diagnostics, build_member) -> None:
    member = build_member("run", ["lib", "util"], "run(): void")

    assert into_classes([], [member], diagnostics) == []
    [report] = diagnostics.errors
    assert report.category == "Class Member"
    assert report.message == 'name run @memberof parameter has undefined object path of "lib.util"'


def test_functions_never_receive_members(diagnostics, area_factory, build_member) -> None:
    function = Declaration(
        area=area_factory(comment="/**\n * @function helper\n */", value="helper", role=Role.FUNCTION),
        path=[],
        name="helper",
        heads=["declare function helper(): void"],
        role=Role.FUNCTION,
    )
    member = build_member("extra", ["helper"], "extra: number", role=Role.FIELD)

    codes = into_classes([function], [member], diagnostics)

    assert [code.code for code in codes] == ["declare function helper(): void"]
    assert [report.category for report in diagnostics.errors] == ["Class Member"]


def test_private_class_is_dropped_with_error(diagnostics, area_factory, build_member) -> None:
    area = area_factory(comment="/**\n * @name Hidden\n * @private\n */", value="Hidden", role=Role.CLASS)
    hidden = Declaration(area=area, path=[], name="Hidden", heads=["export class Hidden"], role=Role.CLASS)
    member = build_member("run", ["Hidden"], "run(): void")

    assert into_classes([hidden], [member], diagnostics) == []
    assert [report.category for report in diagnostics.errors] == ["Class"]

    [code] = into_classes([hidden], [member], diagnostics, include_private=True)
    assert code.code == "export class Hidden {\n  public run(): void\n}"


def test_class_without_members(diagnostics, widget, area_factory) -> None:
    assert into_classes([widget], [], diagnostics) == []
    [report] = diagnostics.infos
    assert report.message == "path Widget has no defined members, nothing will be documented."

    area = area_factory(
        comment="/**\n * @name Widget\n */",
        value="Widget",
        role=Role.CLASS,
        declaration_override="export class Widget extends Base {}",
    )
    overridden = Declaration(area=area, path=[], name="Widget", heads=["export class Widget"], role=Role.CLASS)

    [code] = into_classes([overridden], [], diagnostics)
    assert code.code == "export class Widget extends Base {}"


def test_override_replaces_class_head(diagnostics, area_factory, build_member) -> None:
    area = area_factory(
        comment="/**\n * @name Widget\n */",
        value="Widget",
        role=Role.CLASS,
        declaration_override="export class Widget<T>",
    )
    klass = Declaration(area=area, path=[], name="Widget", heads=["export class Widget"], role=Role.CLASS)
    member = build_member("value", ["Widget"], "value: T", role=Role.FIELD)

    [code] = into_classes([klass], [member], diagnostics)

    assert code.code == "export class Widget<T> {\n  public value: T\n}"


def test_unknown_member_role_raises(diagnostics, widget, build_member) -> None:
    member = build_member("odd", ["Widget"], "odd", role=Role.TYPEDEF)

    with pytest.raises(ValueError):
        into_classes([widget], [member], diagnostics)


def test_class_helpers(build_member) -> None:
    assert is_class_like("Widget") is True
    assert is_class_like("widget") is False
    assert is_class_like("") is False
    assert is_promoted_static(build_member("a", ["Foo"], "a(): void", modifiers=("public", "static"))) is True
    assert is_promoted_static(build_member("b", ["Foo"], "b(): void", modifiers=("private", "static"))) is False
    assert is_promoted_static(build_member("c", ["Foo"], "c(): void")) is False
