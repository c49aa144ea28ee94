"""Encoding of the structured ``parameters`` input as ``--param`` pairs.

``{"model": "gpt-4", "debug": true}`` becomes
``["--param", "model=gpt-4", "--param", "debug=true"]``.

Malformed input never raises: it is reported through the module logger
as a warning and treated as "no structured parameters".
"""

from __future__ import annotations

import json
import logging
import math
from decimal import Decimal
from typing import Any

from apm_action.core.models import ArgumentVector, ParameterMap

logger = logging.getLogger(__name__)

PARAM_FLAG: str = "--param"
"""Flag emitted before every ``key=value`` token."""

EXPECTED_FORMAT: str = '{"key": "value", "key2": "value2"}'

_EMPTY_OBJECT: str = "{}"


def format_scalar(value: Any) -> str:
    """Render a decoded JSON value in its canonical text form.

    * ``str`` — verbatim, no escaping.
    * ``bool`` — ``true`` / ``false``.
    * ``int`` — decimal.
    * ``float`` — JavaScript number formatting, see :func:`format_number`.
    * arrays / objects — compact JSON.
    """
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def format_number(value: float) -> str:
    """Render *value* the way JavaScript's ``String(number)`` does.

    Plain decimal for ``1e-6 <= |x| < 1e21``, otherwise exponent form
    with an explicit sign and no zero padding (``1e-7``, ``1.5e+300``).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    # position of the decimal point relative to the first digit
    n = exponent + k
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return f"{prefix}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{prefix}0.{'0' * -n}{digits}"

    e = n - 1
    mantissa = digits[0] if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{prefix}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_parameters(parameters_json: str | None) -> ParameterMap:
    """Decode *parameters_json* into an ordered parameter map.

    Returns an empty map (after logging one warning) when the text is
    not valid JSON or not a JSON object.  Blank text and ``{}`` return
    an empty map silently.
    """
    if parameters_json is None:
        return {}
    text = parameters_json.strip()
    if text == "" or text == _EMPTY_OBJECT:
        return {}

    try:
        decoded = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        logger.warning(
            "Failed to parse parameters JSON: %s. Expected format: %s",
            exc,
            EXPECTED_FORMAT,
        )
        return {}

    if not isinstance(decoded, dict):
        logger.warning(
            "Parameters input must be a JSON object, ignoring invalid format",
        )
        return {}

    return decoded


def encode_parameter_map(parameters: ParameterMap) -> ArgumentVector:
    """Encode an already-decoded map, skipping ``None`` values."""
    encoded: ArgumentVector = []
    for key, value in parameters.items():
        if value is None:
            continue
        encoded.append(PARAM_FLAG)
        encoded.append(f"{key}={format_scalar(value)}")
    return encoded


def encode_parameters(parameters_json: str | None) -> ArgumentVector:
    """Convert the structured ``parameters`` input into ``--param`` pairs.

    Entries are emitted in the JSON document's key order.  The result
    always has an even length: two tokens per non-null entry.
    """
    return encode_parameter_map(decode_parameters(parameters_json))
