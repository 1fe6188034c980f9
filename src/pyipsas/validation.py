"""Field validation for note forms."""

from __future__ import annotations

import math
import re
from typing import Any

from pyipsas._parse import parse_float

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_number(value: Any) -> bool:
    """Return ``True`` for a finite number or a string that is entirely one."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str):
        stripped = value.strip()
        # float() also accepts "1_000"; form input must not.
        if not stripped or "_" in stripped:
            return False
        try:
            number = float(stripped)
        except ValueError:
            return False
        # float() also accepts "nan"/"inf" spellings.
        return math.isfinite(number)
    number_or_none = parse_float(value)
    return number_or_none is not None and math.isfinite(number_or_none)


def validate_required(value: Any) -> bool:
    return value is not None and value != ""


def validate_email(email: Any) -> bool:
    if not isinstance(email, str):
        return False
    return _EMAIL_RE.fullmatch(email) is not None
