"""
Tests for record flattening.

Validates:
- Nested mappings collapse into underscore-joined keys
- None → "", lists → compact JSON text
- Right-biased collision policy in traversal order
- Idempotency (flatten(flatten(x)) == flatten(x))
"""
from collections.abc import Mapping

import pytest
from trialsink.export.flatten import flatten_record, to_json_text


class TestFlattenRecord:
    """Tests for flatten_record."""

    def test_flat_record_unchanged(self):
        """Test a record with only scalars is returned as-is."""
        record = {"rt": 512, "response": "f", "correct": True, "score": 0.5}
        assert flatten_record(record) == record

    def test_nested_mapping_prefixed(self):
        """Test nested keys are joined with underscores."""
        record = {"stimulus": {"color": "red", "pos": {"x": 1, "y": 2}}}
        assert flatten_record(record) == {
            "stimulus_color": "red",
            "stimulus_pos_x": 1,
            "stimulus_pos_y": 2,
        }

    def test_explicit_prefix(self):
        """Test an explicit prefix is applied to top-level keys."""
        assert flatten_record({"a": 1, "b": {"c": 2}}, prefix="p") == {"p_a": 1, "p_b_c": 2}

    def test_none_becomes_empty_string(self):
        """Test None values become empty cells."""
        assert flatten_record({"a": None, "b": {"c": None}}) == {"a": "", "b_c": ""}

    def test_list_becomes_json_text(self):
        """Test lists are encoded, never expanded into columns."""
        result = flatten_record({"responses": [1, 2, {"k": "v"}], "empty": []})
        assert result == {"responses": '[1,2,{"k":"v"}]', "empty": "[]"}

    def test_tuple_treated_as_list(self):
        """Test tuples are encoded like lists."""
        assert flatten_record({"t": (1, "a")}) == {"t": '[1,"a"]'}

    def test_non_ascii_kept_in_json_text(self):
        """Test JSON text keeps non-ASCII characters."""
        assert to_json_text(["é", "日本"]) == '["é","日本"]'

    def test_integral_floats_in_json_text(self):
        """Test floats inside lists are written the way JSON.stringify writes them."""
        assert to_json_text([1.0, 2.5, {"k": 3.0}]) == '[1,2.5,{"k":3}]'
        assert to_json_text([float("nan"), float("inf")]) == "[null,null]"

    def test_scalar_floats_kept(self):
        """Test top-level floats are left for the CSV encoder to render."""
        assert flatten_record({"rt": 512.0}) == {"rt": 512.0}

    def test_empty_nested_mapping_contributes_nothing(self):
        """Test an empty nested mapping produces no columns."""
        assert flatten_record({"a": {}, "b": 1}) == {"b": 1}

    def test_non_mapping_flattens_to_empty(self):
        """Test scalars and None have no keys."""
        assert flatten_record(5) == {}
        assert flatten_record(None) == {}
        assert flatten_record("abc") == {}

    def test_key_order_follows_traversal(self):
        """Test output keys follow the record's insertion order."""
        result = flatten_record({"z": 1, "a": {"m": 2}, "b": 3})
        assert list(result.keys()) == ["z", "a_m", "b"]

    def test_non_string_keys_converted(self):
        """Test integer keys become strings."""
        assert flatten_record({1: "a", "n": {2: "b"}}) == {"1": "a", "n_2": "b"}


class TestFlattenCollisions:
    """Collision policy: the value assigned last in traversal order wins."""

    def test_later_scalar_wins_over_nested(self):
        """Test {a:{b:1}, a_b:2} resolves to a_b=2 (a_b visited after a)."""
        assert flatten_record({"a": {"b": 1}, "a_b": 2}) == {"a_b": 2}

    def test_later_nested_wins_over_scalar(self):
        """Test {a_b:2, a:{b:1}} resolves to a_b=1 (nested a visited last)."""
        assert flatten_record({"a_b": 2, "a": {"b": 1}}) == {"a_b": 1}

    def test_collision_keeps_first_position(self):
        """Test an overwritten key keeps its original position."""
        result = flatten_record({"a_b": 2, "c": 3, "a": {"b": 1}})
        assert list(result.items()) == [("a_b", 1), ("c", 3)]


class TestFlattenIdempotency:
    """Flattened output has no nested mappings and is a fixed point."""

    @pytest.mark.parametrize(
        "record",
        [
            {"a": 1},
            {"a": {"b": {"c": [1, 2]}}, "d": None},
            {"trial": {"stim": {"img": "x.png"}, "rt": 300}, "tags": ["a", "b"], "ok": False},
            {"a": {"b": 1}, "a_b": 2},
        ],
    )
    def test_idempotent(self, record):
        """Test flattening twice gives the same result."""
        once = flatten_record(record)
        assert flatten_record(once) == once

    def test_no_nested_values_remain(self):
        """Test no value in the output is a mapping or list."""
        record = {"a": {"b": {"c": {"d": 1}}}, "e": [{"f": 1}], "g": {"h": None}}
        for value in flatten_record(record).values():
            assert not isinstance(value, (Mapping, list, tuple))
