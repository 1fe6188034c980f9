"""Identifiers for the note currently being edited."""

from __future__ import annotations

from pydantic import field_validator

from pyipsas.models._base import IpsasBaseModel

#: Opaque token type for entity/period/note identifiers.
Token = str | int


class SyncTarget(IpsasBaseModel):
    """The entity/period/note triple an auto-save writes to.

    Immutable; compared by value.  Switching notes means building a new
    target, not mutating this one.
    """

    entity_id: Token
    period_id: Token
    note_id: Token

    @field_validator("entity_id", "period_id", "note_id")
    @classmethod
    def _non_empty(cls, value: Token) -> Token:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("identifier must be non-empty")
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyncTarget):
            return NotImplemented
        return (self.entity_id, self.period_id, self.note_id) == (
            other.entity_id,
            other.period_id,
            other.note_id,
        )

    def __hash__(self) -> int:
        return hash((self.entity_id, self.period_id, self.note_id))
