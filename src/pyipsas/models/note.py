"""Note data payloads exchanged with the backend."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from pyipsas.models._base import IpsasBaseModel
from pyipsas.models.sync import SyncTarget, Token


class NoteSaveRequest(IpsasBaseModel):
    """Argument of the backend ``saveNoteData`` function."""

    entity_id: Token
    period_id: Token
    note_id: Token
    note_data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_target(cls, target: SyncTarget, snapshot: Mapping[str, Any]) -> NoteSaveRequest:
        return cls(
            entity_id=target.entity_id,
            period_id=target.period_id,
            note_id=target.note_id,
            note_data=dict(snapshot),
        )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as the backend expects."""
        return self.model_dump(by_alias=True, exclude={"raw"})
