"""
Tests for AttributeValue conversion and text rendering.
"""

from axlocator.tools.accessibility.attribute_value import (
    AttributeValue,
    ValueKind,
    parse_bool,
)


class TestFromNative:
    """Provider values are tagged before anything looks at them."""

    def test_bool_is_not_an_int(self):
        """bool is checked before int."""
        assert AttributeValue.from_native(True).kind is ValueKind.BOOL
        assert AttributeValue.from_native(1).kind is ValueKind.INT

    def test_none_is_null(self):
        value = AttributeValue.from_native(None)
        assert value.is_null
        assert value.as_text() is None

    def test_sequences_are_converted_recursively(self):
        value = AttributeValue.from_native(["primary", 2, None])
        assert value.kind is ValueKind.SEQUENCE
        kinds = [item.kind for item in value.sequence_value]
        assert kinds == [ValueKind.STRING, ValueKind.INT, ValueKind.NULL]

    def test_mapping_keys_become_strings(self):
        value = AttributeValue.from_native({1: "a", "b": True})
        assert value.mapping_value == {
            "1": AttributeValue.string("a"),
            "b": AttributeValue.boolean(True),
        }

    def test_unknown_objects_use_their_string_form(self):
        class Point:
            def __str__(self):
                return "x=1 y=2"

        value = AttributeValue.from_native(Point())
        assert value.kind is ValueKind.STRING
        assert value.string_value == "x=1 y=2"

    def test_typed_accessors_only_answer_for_their_kind(self):
        assert AttributeValue.from_native(7).int_value == 7
        assert AttributeValue.from_native(7).float_value is None
        assert AttributeValue.from_native(2.5).float_value == 2.5
        assert AttributeValue.from_native(False).bool_value is False
        assert AttributeValue.from_native("7").int_value is None

    def test_existing_value_is_returned_unchanged(self):
        original = AttributeValue.string("Save")
        assert AttributeValue.from_native(original) is original


class TestTextRendering:
    """as_text() is the comparison form used by the matcher."""

    def test_bools_render_lowercase(self):
        assert AttributeValue.boolean(True).as_text() == "true"
        assert AttributeValue.boolean(False).as_text() == "false"

    def test_integral_floats_drop_the_fraction(self):
        assert AttributeValue.floating(3.0).as_text() == "3"
        assert AttributeValue.floating(2.5).as_text() == "2.5"

    def test_sequence_text_list_skips_nulls(self):
        value = AttributeValue.from_native(["a", None, "b"])
        assert value.as_text_list() == ["a", "b"]

    def test_describe_quotes_strings(self):
        assert AttributeValue.string("Save").describe() == '"Save"'
        assert AttributeValue.null().describe() == "null"

    def test_to_native_round_trips_plain_structures(self):
        raw = {"classes": ["btn", "primary"], "enabled": True}
        assert AttributeValue.from_native(raw).to_native() == raw


class TestBooleanReading:
    def test_parse_bool_accepts_common_spellings(self):
        assert parse_bool(" Yes ") is True
        assert parse_bool("0") is False
        assert parse_bool("maybe") is None

    def test_as_bool_on_numbers_and_strings(self):
        assert AttributeValue.integer(0).as_bool() is False
        assert AttributeValue.string("true").as_bool() is True
        assert AttributeValue.null().as_bool() is None

    def test_as_int_parses_digit_strings(self):
        assert AttributeValue.string(" 42 ").as_int() == 42
        assert AttributeValue.string("4x").as_int() is None
