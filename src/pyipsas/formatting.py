"""Display formatting for amounts and dates (en-KE conventions).

Empty values render as ``"-"`` so blank cells in a note schedule stay
visually distinct from a real zero typed by the user.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from pyipsas._parse import parse_float

EMPTY = "-"
DEFAULT_CURRENCY = "KES"

# Enough digits for any finite double plus the fraction places.
_DECIMAL_PRECISION = 400


def _is_blank(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _group(number: float, places: int, *, trim: bool) -> str:
    if math.isinf(number):
        return "-∞" if number < 0 else "∞"
    # Round the exact binary value half away from zero.
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        rounded = Decimal(number).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{places}f}"
    if trim and "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_currency(value: Any, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount as ``"KES 1,234.50"``."""
    if _is_blank(value):
        return EMPTY
    number = parse_float(value)
    if number is None:
        return EMPTY
    return f"{currency} {_group(number, 2, trim=False)}"


def format_number(value: Any) -> str:
    """Format a number with grouping and at most three decimals."""
    if _is_blank(value):
        return EMPTY
    number = parse_float(value)
    if number is None:
        return EMPTY
    return _group(number, 3, trim=True)


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Epoch milliseconds.
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=UTC).date()
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"Unrecognized date: {value!r}") from exc
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise ValueError(f"Unrecognized date: {value!r}") from exc
    raise ValueError(f"Unrecognized date: {value!r}")


def format_date(value: Any) -> str:
    """Format a date as ``dd/mm/yyyy``.

    Accepts ``date``/``datetime`` objects, ISO 8601 strings and epoch
    timestamps in milliseconds.

    Raises
    ------
    ValueError
        If *value* cannot be read as a date.
    """
    if _is_blank(value):
        return EMPTY
    return _to_date(value).strftime("%d/%m/%Y")
