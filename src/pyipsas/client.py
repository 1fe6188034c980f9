"""High-level async client for the IPSAS notes backend."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

import aiohttp

from pyipsas._constants import FN_LOGIN, FN_LOGOUT, FN_SAVE_NOTE_DATA
from pyipsas._transport import RpcTransport, Transport
from pyipsas.config import IpsasConfig
from pyipsas.exceptions import IpsasApiError, IpsasAuthenticationError, IpsasError, SyncFailure
from pyipsas.models.auth import LoginResponse
from pyipsas.models.note import NoteSaveRequest
from pyipsas.models.sync import SyncTarget
from pyipsas.sync import CaptureFn, PeriodicSyncCoordinator, SyncHandle, TargetSource

_logger = logging.getLogger(__name__)


class IpsasClient:
    """Async client for the IPSAS notes backend.

    Usage::

        async with IpsasClient(config) as client:
            await client.login("user@example.org", "secret")
            coordinator, handle = client.auto_save(collect_form_data, target)
    """

    def __init__(
        self,
        config: IpsasConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config if config is not None else IpsasConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._coordinators: list[PeriodicSyncCoordinator] = []

    @property
    def config(self) -> IpsasConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> IpsasClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = RpcTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        for coordinator in self._coordinators:
            await coordinator.aclose()
        self._coordinators.clear()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise IpsasError("Client not initialized. Use 'async with IpsasClient(...) as client:'")
        return self._transport

    async def run_function(self, function: str, *parameters: Any) -> Any:
        """Call an arbitrary backend function and return its result."""
        return await self._require_transport().call(function, *parameters)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> LoginResponse:
        """Hand the credentials to the backend's login handler.

        Raises
        ------
        IpsasAuthenticationError
            If the backend rejects the login.
        """
        try:
            result = await self.run_function(FN_LOGIN, {"email": email, "password": password})
        except IpsasApiError as exc:
            raise IpsasAuthenticationError(str(exc), code=exc.code, endpoint=exc.endpoint) from exc

        if not isinstance(result, dict):
            # Bare replies: only a literal true confirms the login.
            result = {"success": result is True}
        response = LoginResponse.model_validate(result)
        if not response.success:
            raise IpsasAuthenticationError(
                f"Login rejected: {response.message or 'no reason given'}",
                endpoint=FN_LOGIN,
            )
        _logger.info("Logged in as %s", email)
        return response

    async def logout(self) -> Any:
        """Ask the backend to end the current session."""
        try:
            result = await self.run_function(FN_LOGOUT)
        except IpsasApiError as exc:
            raise IpsasAuthenticationError(str(exc), code=exc.code, endpoint=exc.endpoint) from exc
        _logger.info("Logged out")
        return result

    # ------------------------------------------------------------------
    # Note data
    # ------------------------------------------------------------------

    async def save_note_data(self, target: SyncTarget, note_data: Mapping[str, Any]) -> Any:
        """Persist the form data of one note."""
        request = NoteSaveRequest.for_target(target, note_data)
        return await self.run_function(FN_SAVE_NOTE_DATA, request.to_wire())

    def auto_save(
        self,
        capture_fn: CaptureFn,
        target: TargetSource = None,
        *,
        interval_ms: int | None = None,
        on_success: Callable[[SyncTarget], None] | None = None,
        on_failure: Callable[[SyncFailure], None] | None = None,
    ) -> tuple[PeriodicSyncCoordinator, SyncHandle]:
        """Start saving ``capture_fn()`` to the current note on a timer.

        The coordinator is stopped, and its in-flight save awaited, when
        the client context exits.
        """
        self._require_transport()
        coordinator = PeriodicSyncCoordinator(on_success=on_success, on_failure=on_failure)
        handle = coordinator.start(
            interval_ms if interval_ms is not None else self._config.auto_save_interval_ms,
            capture_fn,
            self.save_note_data,
            target,
        )
        self._coordinators.append(coordinator)
        return coordinator, handle
