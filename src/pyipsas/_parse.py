"""Lenient numeric parsing for form input.

Form fields arrive as whatever the user typed.  Amounts are read from
their leading numeric prefix (``"12abc"`` -> ``12.0``); anything without
one parses as ``None``.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INFINITY = re.compile(r"^\s*([+-]?)Infinity")


def parse_float(value: Any) -> float | None:
    """Parse *value* like a form amount; ``None`` when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        result = float(value)
        return None if math.isnan(result) else result
    if not isinstance(value, str):
        return None

    match = _LEADING_NUMBER.match(value)
    if match is not None:
        return float(match.group(1))
    match = _INFINITY.match(value)
    if match is not None:
        return -math.inf if match.group(1) == "-" else math.inf
    return None


def parse_amount(value: Any) -> float:
    """Like :func:`parse_float` but missing/invalid amounts count as zero."""
    result = parse_float(value)
    return 0.0 if result is None else result
