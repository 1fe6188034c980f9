"""Custom exception hierarchy for pyipsas."""

from __future__ import annotations

from typing import Any


class IpsasError(Exception):
    """Base exception for all pyipsas errors."""


class IpsasConfigError(IpsasError):
    """Invalid or missing configuration."""


class IpsasTransportError(IpsasError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class IpsasApiError(IpsasError):
    """Backend function reported a failure (``ok: false``)."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)


class IpsasAuthenticationError(IpsasApiError):
    """Login or logout rejected by the backend."""


class SyncFailure(IpsasError):
    """A single auto-save tick failed.

    Transient by nature: the coordinator keeps ticking and the next
    scheduled tick is the retry.  The underlying error is chained as
    ``__cause__``.
    """

    def __init__(self, message: str, *, target: Any = None) -> None:
        self.target = target
        super().__init__(message)
