import pytest

from authaudit.validation.selection_set import (
    FieldSelection,
    InlineFragment,
    SelectionSetParseError,
    parse_selection_set,
)


def test_flat_field_set():
    assert parse_selection_set("id weight") == [FieldSelection("id"), FieldSelection("weight")]


def test_nested_and_braced_selection():
    parsed = parse_selection_set("{ address { zip country { code } } }")
    assert parsed == [
        FieldSelection("address", [
            FieldSelection("zip"),
            FieldSelection("country", [FieldSelection("code")]),
        ]),
    ]


def test_inline_fragments():
    parsed = parse_selection_set("... on Book { isbn } ... { id }")
    assert parsed == [
        InlineFragment("Book", [FieldSelection("isbn")]),
        InlineFragment(None, [FieldSelection("id")]),
    ]


def test_aliases_arguments_and_directives_are_skipped():
    parsed = parse_selection_set('size: dimensions(unit: "cm", round: [1, 2]) @include(if: true) { width }')
    assert parsed == [FieldSelection("dimensions", [FieldSelection("width")])]


@pytest.mark.parametrize("source", ["", "{ }", "a {", "a }", "... on T", "a % b"])
def test_malformed_selections_raise(source):
    with pytest.raises(SelectionSetParseError):
        parse_selection_set(source)
