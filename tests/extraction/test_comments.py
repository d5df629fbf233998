"""Tests for documentation block discovery."""

from __future__ import annotations

from tsdecgen.extraction.comments import (
    clear_declaration_override,
    get_comment_areas,
    get_declaration_override,
    get_definition,
)
from tsdecgen.models import Role


def test_get_comment_areas_returns_block_value_and_definition(source_builder) -> None:
    source = source_builder(
        """
        /**
         * Does things.
         * @name Foo
         * @function
         */
        function Foo(a, b) {
          return a;
        }
        """
    )

    areas = get_comment_areas(source, "* @name ", role=Role.FUNCTION)

    assert len(areas) == 1
    area = areas[0]
    assert area.value == "Foo"
    assert area.definition == "function Foo(a, b)"
    assert area.comment.startswith("/**") and area.comment.endswith("*/")
    assert area.start == 0
    assert area.start < area.end
    assert area.role is Role.FUNCTION
    assert area.malformed is False


def test_get_comment_areas_yields_one_area_per_block(source_builder) -> None:
    source = source_builder(
        """
        /**
         * @memberof Foo
         * @memberof Bar
         */
        Foo.a = 1;
        /**
         * @memberof Baz
         */
        Baz.b = 2;
        """
    )

    areas = get_comment_areas(source, "* @memberof ")

    assert [area.value for area in areas] == ["Foo", "Baz"]
    assert [area.definition for area in areas] == ["Foo.a = 1", "Baz.b = 2"]


def test_tag_outside_block_is_malformed() -> None:
    source = "/** ok */\n * @name Loose\nfunction x() {}\n"

    areas = get_comment_areas(source, "* @name ")

    assert len(areas) == 1
    assert areas[0].malformed is True
    assert areas[0].comment == ""
    assert areas[0].definition == ""


def test_types_skip_definition_capture(source_builder) -> None:
    source = source_builder(
        """
        /**
         * @typedef {Object} Options
         */
        const unrelated = 1;
        """
    )

    areas = get_comment_areas(source, "* @typedef ", definition_required=False)

    assert areas[0].value == "{Object} Options"
    assert areas[0].definition == ""


def test_declaration_override_is_extracted_and_cleared(source_builder) -> None:
    source = source_builder(
        """
        /**
         * @memberof Foo
         * @tsdeclaration
         * bar(a: string): void
         * bar(a: number): void
         */
        Foo.bar = function(a) {};
        """
    )

    area = get_comment_areas(source, "* @memberof ")[0]

    assert area.declaration_override == "bar(a: string): void\nbar(a: number): void"
    assert "@tsdeclaration" not in area.comment
    assert area.comment == "/**\n * @memberof Foo\n */"


def test_override_helpers_without_tag() -> None:
    comment = "/**\n * @memberof Foo\n */"
    assert get_declaration_override(comment) == ""
    assert clear_declaration_override(comment) == comment


def test_get_definition_falls_back_to_empty_match() -> None:
    match = get_definition("")
    assert match.text == ""
    assert match.is_function is False
