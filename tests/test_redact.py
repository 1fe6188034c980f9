from __future__ import annotations

from pyipsas._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "email": "preparer@treasury.go.ke",
        "password": "pw",
        "nested": {"sessionToken": "abc", "noteId": "N1"},
        "items": [{"Authorization": "Bearer x"}],
    }

    redacted = redact_for_log(payload)
    assert redacted["email"] == "preparer@treasury.go.ke"
    assert redacted["password"] == "<redacted>"
    assert redacted["nested"]["sessionToken"] == "<redacted>"
    assert redacted["nested"]["noteId"] == "N1"
    assert redacted["items"][0]["Authorization"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_collapses_note_data() -> None:
    payload = {"noteId": "N1", "noteData": {"opening": "1000", "additions": "250"}}

    redacted = redact_for_log(payload)
    assert redacted["noteId"] == "N1"
    assert redacted["noteData"] == "<2 fields>"
