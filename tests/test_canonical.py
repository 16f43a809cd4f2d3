"""Tests for canonical serialization."""

import pytest

from ffprint.errors import UnsupportedValue
from ffprint.hashing import MISSING, canonicalize


class TestCanonicalize:
    """Test canonicalize()."""

    def test_mapping_order_independent(self):
        """Test that insertion order of mapping keys does not matter."""
        assert canonicalize({"a": 1, "b": 2}) == canonicalize({"b": 2, "a": 1})
        assert canonicalize({"a": 1, "b": 2}) == "{a:1,b:2}"

    def test_nested_mappings_sorted(self):
        """Test that nested mappings are sorted too."""
        first = {"tags": {"title": "x", "artist": "y"}, "id": 3}
        second = {"id": 3, "tags": {"artist": "y", "title": "x"}}
        assert canonicalize(first) == canonicalize(second) == "{id:3,tags:{artist:y,title:x}}"

    def test_keys_sorted_by_code_point(self):
        """Test that uppercase keys sort before lowercase ones."""
        assert canonicalize({"b": 1, "B": 2, "a": 3}) == "{B:2,a:3,b:1}"

    def test_primitives(self):
        """Test primitive rendering."""
        assert canonicalize(None) == "null"
        assert canonicalize(True) == "true"
        assert canonicalize(False) == "false"
        assert canonicalize(42) == "42"
        assert canonicalize(-7) == "-7"
        assert canonicalize("stereo") == "stereo"
        assert canonicalize("") == ""

    def test_floats(self):
        """Test that integral floats drop their fraction."""
        assert canonicalize(1.0) == "1"
        assert canonicalize(23.976) == "23.976"
        assert canonicalize(0.5) == "0.5"

    def test_non_finite_float_rejected(self):
        """Test that NaN and infinity have no canonical form."""
        with pytest.raises(UnsupportedValue):
            canonicalize(float("nan"))
        with pytest.raises(UnsupportedValue):
            canonicalize(float("inf"))

    def test_sequence_keeps_order(self):
        """Test that sequences are not sorted."""
        assert canonicalize([3, 1, 2]) == "3,1,2"
        assert canonicalize([1, 2]) != canonicalize([2, 1])
        assert canonicalize((1, "a")) == "1,a"
        assert canonicalize([]) == ""

    def test_sequence_in_mapping(self):
        """Test that sequence values are joined without brackets."""
        assert canonicalize({"k": [1, "a"]}) == "{k:1,a}"

    def test_sequence_elements_recursed(self):
        """Test that mappings inside sequences keep their structure."""
        value = [{"b": 1, "a": 2}, [None, True]]
        assert canonicalize(value) == "{a:2,b:1},null,true"
        assert canonicalize([{"a": 1}]) != canonicalize([{"a": 2}])

    def test_missing_rejected(self):
        """Test that absent values are rejected, also when nested."""
        with pytest.raises(UnsupportedValue):
            canonicalize(MISSING)
        with pytest.raises(UnsupportedValue):
            canonicalize({"profile": MISSING})
        with pytest.raises(UnsupportedValue):
            canonicalize([1, MISSING])

    def test_unsupported_kinds_rejected(self):
        """Test that other value kinds are rejected."""
        with pytest.raises(UnsupportedValue):
            canonicalize(object())
        with pytest.raises(UnsupportedValue):
            canonicalize({"raw": b"\x00"})
        with pytest.raises(UnsupportedValue):
            canonicalize({1, 2})

    def test_non_string_keys_rejected(self):
        """Test that mapping keys must be strings."""
        with pytest.raises(UnsupportedValue):
            canonicalize({1: "a"})
