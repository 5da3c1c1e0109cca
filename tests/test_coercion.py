"""Unit tests for rpc/coercion.py."""

from __future__ import annotations

import pytest

from qtumscan_rpc.errors import InvalidArgumentError
from qtumscan_rpc.rpc.coercion import coerce, coercer_for, to_string


class TestNumeric:
    @pytest.mark.parametrize("tag", ["integer", "float"])
    @pytest.mark.parametrize(
        "text, literal",
        [("5", 5), ("0", 0), ("-12", -12), (" 42 ", 42), ("1.5", 1.5), ("5.0", 5.0), ("1e3", 1000)],
    )
    def test_numeric_string_matches_literal(self, tag: str, text: str, literal: float) -> None:
        assert coerce(tag, text) == coerce(tag, literal)

    def test_integral_values_become_int(self) -> None:
        assert coerce("integer", "5") == 5
        assert isinstance(coerce("integer", "5"), int)
        assert isinstance(coerce("integer", 5.0), int)

    def test_fraction_is_kept(self) -> None:
        assert coerce("float", "0.1") == pytest.approx(0.1)
        assert coerce("integer", 2.5) == 2.5

    @pytest.mark.parametrize("tag", ["integer", "float"])
    @pytest.mark.parametrize("raw", ["abc", "", "12abc", "nan", "NaN", "inf", float("nan"), True, None, {}])
    def test_unparsable_raises(self, tag: str, raw: object) -> None:
        with pytest.raises(InvalidArgumentError):
            coerce(tag, raw)

    def test_error_message_is_prefixed(self) -> None:
        with pytest.raises(InvalidArgumentError, match=r"^Qtum JSON-RPC: Cannot coerce 'abc' to integer"):
            coerce("integer", "abc")


class TestBoolean:
    @pytest.mark.parametrize("raw", [True, 1, "1", "true", "TRUE", "True", 1.0])
    def test_truthy(self, raw: object) -> None:
        assert coerce("boolean", raw) is True

    @pytest.mark.parametrize("raw", [False, 0, "0", "false", "no", "", None, 2, "yes"])
    def test_falsy(self, raw: object) -> None:
        assert coerce("boolean", raw) is False


class TestObject:
    def test_json_text_is_parsed(self) -> None:
        assert coerce("object", '{"addresses": ["qAddr"]}') == {"addresses": ["qAddr"]}
        assert coerce("object", "[1, 2]") == [1, 2]

    def test_structured_input_passes_through(self) -> None:
        value = {"addresses": ["qAddr"], "start": 1}
        assert coerce("object", value) is value

    def test_malformed_json_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            coerce("object", "{not json")


class TestString:
    @pytest.mark.parametrize(
        "raw, expected",
        [("abc", "abc"), (5, "5"), (True, "true"), (False, "false"), (None, "null"), ({"a": 1}, '{"a":1}')],
    )
    def test_stringify(self, raw: object, expected: str) -> None:
        assert coerce("string", raw) == expected

    def test_unknown_tag_falls_back_to_string(self) -> None:
        assert coercer_for("str") is to_string
        assert coerce("", 7) == "7"


class TestBytes:
    def test_utf8_bytes_are_decoded(self) -> None:
        assert coerce("string", "héllo".encode("utf-8")) == "héllo"
        assert coerce("integer", b" 12 ") == 12
        assert coerce("object", b'{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("tag", ["string", "integer", "float", "object"])
    def test_invalid_utf8_is_an_argument_error(self, tag: str) -> None:
        with pytest.raises(InvalidArgumentError, match=f"to {tag}"):
            coerce(tag, b"\xff\xfe")

    def test_invalid_utf8_boolean_is_false(self) -> None:
        assert coerce("boolean", b"\xff") is False
