"""Utility functions for coercing SVG attribute text into numbers.

SVG documents are frequently produced by browsers and JavaScript tooling, so
attribute values are read the way a browser script would read them. This
module provides the two coercions used throughout the svgextract package:

- to_number(): whole-string coercion, as done by ``Number(value)``.
- parse_float(): leading-prefix parsing, as done by ``parseFloat(value)``.

Both return ``nan`` instead of raising when the text is not a number.
"""

import math
import re
from typing import List

NAN = float("nan")

# A decimal literal, including the special Infinity spelling.
_decimal = r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
_decimal_re = re.compile(_decimal)
_radix_re = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_radix_bases = {"x": 16, "o": 8, "b": 2}

split_whitespace = re.compile(r"\S+").findall


def to_number(text: str) -> float:
    """Convert a whole string to a number.

    Surrounding whitespace is ignored and a blank string counts as zero.
    Besides decimal literals, unsigned hexadecimal, octal and binary integer
    literals are accepted.

    Args:
        text: The string to convert.

    Returns:
        The number as a float, or ``nan`` if the string is not numeric.

    Examples:
        >>> to_number(" 2.5 ")
        2.5
        >>> to_number("")
        0.0
        >>> to_number("0x10")
        16.0
        >>> to_number("10px")
        nan
    """
    text = text.strip()
    if not text:
        return 0.0
    if _decimal_re.fullmatch(text):
        return float(text)
    m = _radix_re.fullmatch(text)
    if m:
        prefix, digits = m.groups()
        try:
            return float(int(digits, _radix_bases[prefix.lower()]))
        except ValueError:
            return NAN
    return NAN


def parse_float(text: str) -> float:
    """Parse the longest decimal literal at the start of a string.

    Leading whitespace is skipped and anything after the literal is ignored.

    Examples:
        >>> parse_float("12.5px")
        12.5
        >>> parse_float("0x10")
        0.0
        >>> parse_float("")
        nan
    """
    m = _decimal_re.match(text.lstrip())
    if m is None:
        return NAN
    return float(m.group())


def is_numeric(text: str) -> bool:
    """Return True if `text` converts to a number other than ``nan``."""
    return not math.isnan(to_number(text))


def split_coordinates(token: str) -> List[float]:
    """Convert a comma separated token such as ``"10,20"`` into numbers."""
    return [to_number(piece) for piece in token.split(",")]
