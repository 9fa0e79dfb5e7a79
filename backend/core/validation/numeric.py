"""Numeric string parsing for request-body coercion.

Request bodies frequently carry numbers as strings ("30", "42.5"). The
parser below reads an integer prefix, optionally followed by a single
separator and a fractional integer. Exponents and surrounding whitespace
are not understood and the sign applies to the integer part only, so
"-1.5" reads as -1 + 0.5 and "7e3" as 7.3.
"""
from __future__ import annotations

_DIGITS = frozenset("0123456789")


class NumberParseError(ValueError):
    """Raised when a string has no integer prefix."""


def scan_int(text: str, start: int = 0) -> tuple[int, int]:
    """Scan the longest integer prefix of ``text`` beginning at ``start``.

    Accepts an optional sign followed by digits; underscores directly after
    a digit are skipped. Returns ``(value, end)`` where ``end`` is the index
    just past the prefix, or ``end == start`` when nothing was consumed.
    """
    i = start
    n = len(text)
    sign = 1
    if i < n and text[i] in "+-":
        if text[i] == "-":
            sign = -1
        i += 1
    if i >= n or text[i] not in _DIGITS:
        return 0, start

    value = 0
    while i < n and text[i] in _DIGITS:
        value = value * 10 + (ord(text[i]) - 48)
        i += 1
        while i < n and text[i] == "_":
            i += 1
    return sign * value, i


def parse_number(text: str) -> int | float:
    """Parse ``text`` as an int, or as a float when a fraction follows.

    Raises:
        NumberParseError: ``text`` does not start with an integer, or the
            result does not fit in a float.
    """
    int_value, int_end = scan_int(text)
    if int_end == 0:
        raise NumberParseError(f"'{text}' is not a number")

    # No room for separator plus fraction digit
    if int_end >= len(text) - 1:
        return int_value

    frac_value, frac_end = scan_int(text, int_end + 1)
    if frac_end == int_end + 1:
        frac_value = 0
    try:
        return int_value + frac_value / 10 ** (frac_end - int_end - 1)
    except OverflowError:
        raise NumberParseError(f"'{text[:32]}' is out of range") from None
