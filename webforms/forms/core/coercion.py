"""
Where: webforms/forms/core/coercion.py
What: Locale-independent lexical parsers for int, float and bool field values.
Why: Typed getters and type checks must accept exactly the same literals.
"""

import re

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_BOOL_LITERALS = {
    "1": True,
    "t": True,
    "T": True,
    "TRUE": True,
    "true": True,
    "True": True,
    "0": False,
    "f": False,
    "F": False,
    "FALSE": False,
    "false": False,
    "False": False,
}


def parse_int(value: str) -> int:
    """Parse an optionally signed run of ASCII digits. Raises ValueError otherwise."""
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid integer literal: {value!r}")
    return int(value)


def parse_float(value: str) -> float:
    """
    Parse a float literal.

    Python's float() also accepts surrounding whitespace and digit-group
    underscores; both are rejected here.
    """
    if not value or value != value.strip() or "_" in value:
        raise ValueError(f"invalid float literal: {value!r}")
    return float(value)


def parse_bool(value: str) -> bool:
    """Parse 1/t/T/TRUE/true/True and 0/f/F/FALSE/false/False."""
    try:
        return _BOOL_LITERALS[value]
    except KeyError:
        raise ValueError(f"invalid boolean literal: {value!r}") from None
