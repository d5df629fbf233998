"""Tests for typedef and callback rendering."""

from __future__ import annotations

import pytest

from tsdecgen.merge import into_callbacks, into_typedefs
from tsdecgen.models import Declaration, Field, Role


def test_interface_typedef_renders_properties() -> None:
    declaration = Declaration(
        area=None,
        path=["Lib"],
        name="Person",
        heads=["interface Person"],
        comment="/**\n * A person.\n */",
        fields=[
            Field(type="string", name="name", description="The name"),
            Field(type="number", name="age", value="3", description="The age", optional=True),
        ],
        is_interface=True,
        role=Role.TYPEDEF,
    )

    [code] = into_typedefs([declaration])

    assert code.code == (
        "/**\n"
        " * A person.\n"
        " */\n"
        "interface Person {\n"
        "  /**\n"
        "   * The name\n"
        "   */\n"
        "  name: string\n"
        "  /**\n"
        "   * The age\n"
        "   * @default 3\n"
        "   */\n"
        "  age?: number\n"
        "}"
    )
    assert code.path == ["Lib"]


def test_alias_typedef_renders_statement() -> None:
    declaration = Declaration(area=None, path=[], name="Id", heads=["type Id = string|number"], role=Role.TYPEDEF)

    [code] = into_typedefs([declaration])

    assert code.code == "type Id = string|number"


def test_typedef_override(area_factory) -> None:
    area = area_factory(value="Id", role=Role.TYPEDEF, declaration_override="type Id = `id-${number}`")
    declaration = Declaration(area=area, path=[], name="Id", heads=["interface Id"], is_interface=True, role=Role.TYPEDEF)

    [code] = into_typedefs([declaration])

    assert code.code == "type Id = `id-${number}`"


def test_callback_renders_signature() -> None:
    declaration = Declaration(
        area=None,
        path=["Lib"],
        name="onDone",
        heads=["function onDone"],
        comment="/**\n * Called when done.\n */",
        fields=[Field(type="Error", name="err"), Field(type="object", name="result", optional=True)],
        returns="boolean",
        role=Role.CALLBACK,
    )

    [code] = into_callbacks([declaration])

    assert code.code == "/**\n * Called when done.\n */\nfunction onDone(err: Error, result?: object): boolean"


def test_wrong_roles_raise() -> None:
    callback = Declaration(area=None, path=[], name="cb", heads=["declare function cb"], role=Role.CALLBACK)
    typedef = Declaration(area=None, path=[], name="T", heads=["interface T"], role=Role.TYPEDEF)

    with pytest.raises(ValueError):
        into_typedefs([callback])
    with pytest.raises(ValueError):
        into_callbacks([typedef])
