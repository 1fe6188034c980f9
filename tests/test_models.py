from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyipsas.models import LoginResponse, NoteSaveRequest, SyncTarget


def test_sync_target_equality_is_by_value() -> None:
    a = SyncTarget(entity_id="E1", period_id="P1", note_id="N1")
    b = SyncTarget.model_validate({"entityId": "E1", "periodId": "P1", "noteId": "N1"})

    assert a == b
    assert hash(a) == hash(b)
    assert a != SyncTarget(entity_id="E1", period_id="P1", note_id="N2")


def test_sync_target_is_immutable() -> None:
    target = SyncTarget(entity_id="E1", period_id=2026, note_id=7)
    with pytest.raises(ValidationError):
        target.note_id = 8  # type: ignore[misc]


def test_sync_target_rejects_blank_identifier() -> None:
    with pytest.raises(ValidationError):
        SyncTarget(entity_id="  ", period_id="P1", note_id="N1")


def test_note_save_request_wire_format() -> None:
    target = SyncTarget(entity_id="E1", period_id=2026, note_id="PPE")
    request = NoteSaveRequest.for_target(target, {"opening": "100"})

    assert request.to_wire() == {
        "entityId": "E1",
        "periodId": 2026,
        "noteId": "PPE",
        "noteData": {"opening": "100"},
    }


def test_login_response_keeps_unknown_fields_in_raw() -> None:
    response = LoginResponse.model_validate({"success": True, "sessionToken": "abc", "user": {"role": "preparer"}})

    assert response.success is True
    assert response.user == {"role": "preparer"}
    assert response.raw["sessionToken"] == "abc"
