"""Pydantic models for pyipsas payloads."""

from pyipsas.models.auth import LoginResponse
from pyipsas.models.note import NoteSaveRequest
from pyipsas.models.sync import SyncTarget

__all__ = [
    "LoginResponse",
    "NoteSaveRequest",
    "SyncTarget",
]
