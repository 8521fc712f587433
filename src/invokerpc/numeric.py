"""
invokerpc — Integer literal interpretation

Integers arrive as text.  Most fit a signed 64-bit word and are
returned as plain ``int``; anything else is retried as a hex big
integer after dropping the first two characters (the ``0x`` prefix
slot).  The two characters are dropped whatever they are.
"""

import math
import re

from .errors import IntegerParseError
from .types import BigInteger

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_DECIMAL_RE = re.compile(r"\s*[+-]?[0-9]+\s*")
_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]+")


def try_parse_int64(text: str):
    """Return the 64-bit value of a decimal literal, or None."""
    if not _DECIMAL_RE.fullmatch(text):
        return None
    value = int(text.strip())
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def try_parse_hex_big(text: str):
    """Return the big integer after dropping two characters, or None."""
    digits = text[2:]
    if not _HEX_DIGITS_RE.fullmatch(digits):
        return None
    return BigInteger(int(digits, 16))


def parse_integer(text: str) -> int:
    """Interpret an integer literal.

    Returns an ``int`` for 64-bit decimal literals and a ``BigInteger``
    for the hex fallback.  Raises ``IntegerParseError`` otherwise.
    """
    if not isinstance(text, str):
        raise IntegerParseError(text)
    value = try_parse_int64(text)
    if value is not None:
        return value
    value = try_parse_hex_big(text)
    if value is not None:
        return value
    raise IntegerParseError(text)


def interpret_number(raw) -> int:
    """Interpret an already-parsed JSON number as an integer.

    Exact integers above the 64-bit range become a ``BigInteger``.
    Negative integers below it, fractional or non-finite floats, and
    integral floats outside 64 bits (whose precision is already lost)
    raise ``IntegerParseError``.
    """
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise IntegerParseError(raw)
    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            raise IntegerParseError(raw)
        value = int(raw)
        if value < INT64_MIN or value > INT64_MAX:
            raise IntegerParseError(raw)
        return value
    if raw > INT64_MAX:
        return BigInteger(raw)
    if raw < INT64_MIN:
        raise IntegerParseError(raw)
    return raw
