"""Numeric parsing helpers shared across services."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from ..errors import MalformedInput

_DECIMAL_RE = re.compile(r"^-?\d+$")
_HEX_RE = re.compile(r"^0x[0-9a-f]+$")

# On-chain integers are at most 256 bits wide (78 decimal digits, 64 hex digits).
_MAX_BITS = 256
_MAX_DECIMAL_DIGITS = 78
_MAX_HEX_DIGITS = 64

# Timestamps at or beyond this value are treated as "never".
MAX_SAFE_TIMESTAMP = 9999999999

# Max values of the unsigned integer widths contracts use to mean "no limit".
_UNBOUNDED_SUPPLY_VALUES = frozenset(
    {
        "0",
        str(2**31 - 1),
        str(2**32 - 1),
        str(2**64 - 1),
        str(2**128 - 1),
        str(2**256 - 1),
    }
)


def _not_an_integer(raw: Any) -> MalformedInput:
    return MalformedInput(f"Not an integer value: {str(raw)[:100]!r}")


def _check_width(value: int, raw: Any) -> int:
    if abs(value).bit_length() > _MAX_BITS:
        raise MalformedInput(f"Integer wider than {_MAX_BITS} bits: {str(raw)[:100]!r}")
    return value


def _decimal_to_int(value: Decimal, raw: Any) -> int:
    if not value.is_finite() or value != value.to_integral_value():
        raise _not_an_integer(raw)
    if value.adjusted() >= _MAX_DECIMAL_DIGITS:
        raise MalformedInput(f"Integer wider than {_MAX_BITS} bits: {str(raw)[:100]!r}")
    return _check_width(int(value), raw)


def to_big_int(value: Any) -> int:
    """Parse an integer-like value without losing precision.

    Accepts ints, integral Decimals/floats, decimal strings and ``0x`` hex
    strings, up to 256 bits wide.

    :param value: Raw numeric value.
    :type value: Any
    :return: Arbitrary precision integer.
    :rtype: int
    :raises MalformedInput: If the value is not integer-like or too wide.
    """
    if value is None or isinstance(value, bool):
        raise _not_an_integer(value)
    if isinstance(value, int):
        return _check_width(value, value)
    if isinstance(value, Decimal):
        return _decimal_to_int(value, value)
    if isinstance(value, float):
        return _decimal_to_int(Decimal(str(value)), value)
    text = str(value).strip().lower()
    if _HEX_RE.match(text):
        if len(text[2:].lstrip("0")) > _MAX_HEX_DIGITS:
            raise _not_an_integer(value)
        return int(text, 16)
    if _DECIMAL_RE.match(text):
        digits = text.lstrip("-").lstrip("0") or "0"
        if len(digits) > _MAX_DECIMAL_DIGITS:
            raise _not_an_integer(value)
        parsed = int(digits)
        return _check_width(-parsed if text.startswith("-") else parsed, value)
    try:
        return _decimal_to_int(Decimal(text), value)
    except InvalidOperation as exc:
        raise _not_an_integer(value) from exc


def to_safe_timestamp(raw: Any, *, strict: bool = False) -> int | None:
    """Normalize a raw timestamp, mapping "forever" sentinels to None.

    Missing values (None, False, empty string) map to None. A zero
    timestamp is kept unless ``strict`` is set.
    """
    if raw is None or raw is False or raw == "":
        return None
    value = to_big_int(raw)
    if value >= MAX_SAFE_TIMESTAMP:
        return None
    if strict and value == 0:
        return None
    return value


def to_safe_number(raw: Any) -> str | None:
    """Normalize a raw supply-like value into a decimal string.

    Zero and the max value of any common unsigned integer width mean
    "unlimited" and collapse to None.
    """
    if not raw:
        return None
    text = str(to_big_int(raw))
    if text in _UNBOUNDED_SUPPLY_VALUES:
        return None
    return text


def is_unsigned_integer_string(value: Any) -> bool:
    """Return True for a plain non-negative decimal integer string."""
    return isinstance(value, str) and value.isdigit() and value.isascii()
