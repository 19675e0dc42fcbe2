"""
Unit tests for the pass-through codecs (tabular_codec.codecs.passthrough).
"""

from __future__ import annotations

import pytest

from tabular_codec.codecs.passthrough import ArrayCodec, HashCodec, JsonCodec
from tabular_codec.exceptions import MalformedInputError, TypeMismatchError
from tabular_codec.header import Header
from tabular_codec.rows import Keyed, Positional


class TestArrayCodec:

    def test_parse(self):
        assert ArrayCodec().parse([1, "a"]) == Positional((1, "a"))

    def test_parse_rejects_text(self):
        with pytest.raises(TypeMismatchError):
            ArrayCodec().parse("1,a")

    def test_render_orders_by_header(self):
        header = Header(columns=["a", "b"])
        assert ArrayCodec().render({"b": 2, "a": 1}, header) == [1, 2]


class TestHashCodec:

    def test_parse(self):
        assert HashCodec().parse({"a": 1}) == Keyed({"a": 1})

    def test_parse_rejects_list(self):
        with pytest.raises(TypeMismatchError):
            HashCodec().parse([1])

    def test_render_narrows(self):
        header = Header(columns=["a"])
        assert HashCodec().render({"A": 1, "b": 2}, header) == {"a": 1}

    def test_flags(self):
        assert HashCodec.carries_field_names
        assert not HashCodec.header_in_stream


class TestJsonCodec:

    def test_parse(self):
        assert JsonCodec().parse('{"a": 1, "b": "x"}') == Keyed({"a": 1, "b": "x"})

    def test_parse_invalid_json(self):
        with pytest.raises(MalformedInputError, match="Invalid JSON"):
            JsonCodec().parse("{not json")

    def test_parse_non_object(self):
        with pytest.raises(MalformedInputError, match="object"):
            JsonCodec().parse("[1, 2]")

    def test_parse_non_string(self):
        with pytest.raises(TypeMismatchError):
            JsonCodec().parse({"a": 1})

    def test_render(self):
        header = Header(columns=["name", "city"])
        rendered = JsonCodec().render(["Paul", "Montréal"], header)
        assert rendered == '{"name":"Paul","city":"Montréal"}'

    def test_render_without_columns(self):
        assert JsonCodec().render({"x": 1}, Header()) == '{"x":1}'
