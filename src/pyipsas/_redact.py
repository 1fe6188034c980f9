"""Helpers for safe debug logging.

Login calls carry passwords, the backend may hand back session tokens,
and note saves carry the full contents of a note form.  This module
redacts secrets and collapses form payloads to a field count before
emitting DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "sessiontoken",
        "accesstoken",
        "refreshtoken",
        "authorization",
        "cookie",
        "secret",
    }
)

# Form contents: logged as a field count only.
_BULKY_VALUE_KEYS: frozenset[str] = frozenset({"notedata"})


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            elif key.lower() in _BULKY_VALUE_KEYS and isinstance(v, Mapping):
                redacted[key] = f"<{len(v)} fields>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, bytearray):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
