"""Tests for structured parameter encoding (core/parameter_encoder.py).

Coverage:
* Blank / ``{}`` input — empty result, no warning.
* Scalar stringification (str, int, float, bool) and null skipping.
* Key order follows the JSON document, not alphabetical order.
* Malformed JSON and non-object JSON — empty result, one warning.
"""

from __future__ import annotations

import json
import logging

import pytest

from apm_action.core.parameter_encoder import (
    PARAM_FLAG,
    decode_parameters,
    encode_parameter_map,
    encode_parameters,
    format_scalar,
)

ENCODER_LOGGER = "apm_action.core.parameter_encoder"


def _warnings(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]


# ---------------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------------

class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", "   ", "{}", "  {}  ", None])
    def test_returns_empty_without_warning(
        self, text: str | None, caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.WARNING, logger=ENCODER_LOGGER)
        assert encode_parameters(text) == []
        assert _warnings(caplog) == []

    def test_whitespace_inside_empty_object(self) -> None:
        assert encode_parameters("{ }") == []


# ---------------------------------------------------------------------------
# Valid objects
# ---------------------------------------------------------------------------

class TestValidObject:
    def test_mixed_scalars(self) -> None:
        assert encode_parameters('{"a":1,"b":true,"c":"x"}') == [
            "--param", "a=1",
            "--param", "b=true",
            "--param", "c=x",
        ]

    def test_order_follows_document_not_alphabet(self) -> None:
        result = encode_parameters('{"zeta": "1", "alpha": "2", "mid": "3"}')
        assert result[1::2] == ["zeta=1", "alpha=2", "mid=3"]

    def test_null_values_are_skipped(self) -> None:
        result = encode_parameters('{"a": null, "b": "keep", "c": null}')
        assert result == ["--param", "b=keep"]

    def test_strings_pass_through_verbatim(self) -> None:
        params = {"query": 'x=1 and "quoted" text', "path": "a b/c.txt"}
        assert encode_parameters(json.dumps(params)) == [
            "--param", 'query=x=1 and "quoted" text',
            "--param", "path=a b/c.txt",
        ]

    def test_false_and_zero_are_kept(self) -> None:
        assert encode_parameters('{"flag": false, "count": 0, "name": ""}') == [
            "--param", "flag=false",
            "--param", "count=0",
            "--param", "name=",
        ]

    def test_length_is_twice_non_null_entries(self) -> None:
        params = {"a": 1, "b": None, "c": "x", "d": None, "e": 2.5}
        result = encode_parameters(json.dumps(params))
        assert len(result) == 2 * 3
        assert result[0::2] == [PARAM_FLAG] * 3

    def test_duplicate_key_keeps_first_position_last_value(self) -> None:
        result = encode_parameters('{"a": "1", "b": "2", "a": "3"}')
        assert result == ["--param", "a=3", "--param", "b=2"]

    def test_typical_model_parameters(self) -> None:
        params = {"model": "gpt-4", "temperature": "0.8", "max_tokens": "1000"}
        assert encode_parameters(json.dumps(params)) == [
            "--param", "model=gpt-4",
            "--param", "temperature=0.8",
            "--param", "max_tokens=1000",
        ]


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------

class TestMalformedInput:
    def test_invalid_json_warns_once(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger=ENCODER_LOGGER)
        assert encode_parameters("not json") == []
        warnings = _warnings(caplog)
        assert len(warnings) == 1
        assert "Failed to parse parameters JSON" in warnings[0]
        assert '{"key": "value"' in warnings[0]

    def test_truncated_object_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger=ENCODER_LOGGER)
        assert encode_parameters("{invalid json") == []
        assert len(_warnings(caplog)) == 1

    @pytest.mark.parametrize(
        "text",
        ['{"a": NaN}', '{"b": Infinity}', '{"c": -Infinity, "d": "ok"}'],
    )
    def test_non_standard_constants_are_rejected(
        self, text: str, caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.WARNING, logger=ENCODER_LOGGER)
        assert encode_parameters(text) == []
        warnings = _warnings(caplog)
        assert len(warnings) == 1
        assert "Failed to parse parameters JSON" in warnings[0]

    @pytest.mark.parametrize("text", ['["a", "b"]', '"text"', "42", "null", "true"])
    def test_non_object_warns(
        self, text: str, caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.WARNING, logger=ENCODER_LOGGER)
        assert encode_parameters(text) == []
        warnings = _warnings(caplog)
        assert len(warnings) == 1
        assert "must be a JSON object" in warnings[0]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestFormatScalar:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (-7, "-7"),
            (0.8, "0.8"),
            (1.0, "1"),
            (1e21, "1e+21"),
            (1e20, "100000000000000000000"),
            (1.5e300, "1.5e+300"),
            (123.456, "123.456"),
            (-0.5, "-0.5"),
            (0.00001, "0.00001"),
            (0.000001, "0.000001"),
            (1e-7, "1e-7"),
            (-2.5e-8, "-2.5e-8"),
            (0.0, "0"),
            ([1, "a"], '[1,"a"]'),
            ({"k": "v"}, '{"k":"v"}'),
        ],
    )
    def test_rendering(self, value: object, expected: str) -> None:
        assert format_scalar(value) == expected


class TestDecodeAndEncodeMap:
    def test_decode_returns_ordered_dict(self) -> None:
        assert list(decode_parameters('{"b": 1, "a": 2}')) == ["b", "a"]

    def test_encode_map_directly(self) -> None:
        assert encode_parameter_map({"x": "y", "skip": None}) == ["--param", "x=y"]
