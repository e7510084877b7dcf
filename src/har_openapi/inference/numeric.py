"""Strict numeral checks for captured string values.

Python's ``int()``/``float()`` accept surrounding whitespace and digit
separators, which would turn ``" 1_000 "`` into a number. These helpers only
accept plain numerals.
"""

import re

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


def is_int32(value: str) -> bool:
    if not _INTEGER.fullmatch(value):
        return False
    return INT32_MIN <= int(value) <= INT32_MAX


def is_float(value: str) -> bool:
    """True when the whole text is a floating-point numeral (``1``, ``-0.5``, ``2e3``)."""
    return _FLOAT.fullmatch(value) is not None
