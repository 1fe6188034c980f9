"""Login/logout response models."""

from __future__ import annotations

from typing import Any

from pyipsas.models._base import IpsasBaseModel


class LoginResponse(IpsasBaseModel):
    """Backend reply to ``handleLogin``.

    Only ``success`` is interpreted by the client; everything else the
    backend sends stays available on ``raw``.
    """

    success: bool = True
    message: str | None = None
    user: dict[str, Any] | None = None
