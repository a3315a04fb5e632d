"""
Tests for value encoding and the empty-result rule.

Run with: python -m pytest tests/test_serialization.py -v
"""

from decimal import Decimal

import pytest
from pydantic import BaseModel

from methodcache.cache.serialization import decode_value, encode_value, is_empty


class Author(BaseModel):
    name: str
    books: int


class TestRoundTrip:
    """Test JSON-representable values survive encode/decode."""

    @pytest.mark.parametrize(
        "value",
        [
            42,
            3.5,
            "text",
            True,
            None,
            [1, "two", None],
            {"nested": {"list": [1, 2], "flag": False}},
        ],
    )
    def test_json_values(self, value):
        assert decode_value(encode_value(value)) == value

    def test_unicode_is_kept(self):
        assert decode_value(encode_value("déjà vu")) == "déjà vu"

    def test_tuple_comes_back_as_list(self):
        assert decode_value(encode_value((1, 2))) == [1, 2]

    def test_pydantic_model_comes_back_as_dict(self):
        assert decode_value(encode_value(Author(name="Le Guin", books=23))) == {
            "name": "Le Guin",
            "books": 23,
        }

    def test_unserializable_value_raises(self):
        with pytest.raises(TypeError):
            encode_value(object())


class TestDecodeFallback:
    """Test that non-JSON values are returned raw."""

    def test_plain_string_returned_raw(self):
        assert decode_value("hello world") == "hello world"

    def test_bytes_are_decoded(self):
        assert decode_value(b'{"a": 1}') == {"a": 1}


class TestIsEmpty:
    @pytest.mark.parametrize(
        "value",
        [None, False, 0, 0.0, Decimal("0"), "", b"", [], (), {}, set()],
    )
    def test_empty_values(self, value):
        assert is_empty(value) is True

    @pytest.mark.parametrize(
        "value",
        [True, 1, -1, 0.1, "0", " ", [0], {"a": None}, Author(name="x", books=0)],
    )
    def test_non_empty_values(self, value):
        assert is_empty(value) is False
