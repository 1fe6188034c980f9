"""HTTP transport for backend remote function calls."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pyipsas._constants import RPC_PATH_PREFIX, USER_AGENT
from pyipsas._redact import redact_for_log
from pyipsas.config import IpsasConfig
from pyipsas.exceptions import IpsasApiError, IpsasTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`RpcTransport`) concrete.
    """

    async def call(self, function: str, *parameters: Any) -> Any:
        ...


def unwrap_rpc_response(function: str, body: Any) -> Any:
    """Return ``result`` from an RPC reply or raise for ``ok: false``."""
    endpoint = f"{RPC_PATH_PREFIX}{function}"
    if not isinstance(body, dict) or "ok" not in body:
        raise IpsasTransportError(
            f"Malformed reply from {endpoint}: expected an object with 'ok'",
            endpoint=endpoint,
        )
    if body["ok"] is True:
        return body.get("result")

    error = body.get("error")
    if isinstance(error, dict):
        message = str(error.get("message") or "unknown error")
        code = str(error.get("code") or "")
    else:
        message = str(error or "unknown error")
        code = ""
    raise IpsasApiError(
        f"{function} failed: code={code} message={message}",
        code=code,
        endpoint=endpoint,
    )


class RpcTransport:
    """POST JSON function calls to ``{base_url}/rpc/{function}``."""

    def __init__(self, config: IpsasConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def call(self, function: str, *parameters: Any) -> Any:
        """Invoke a backend function and return its ``result``.

        Raises
        ------
        IpsasTransportError
            On network failure, a non-200 status, or an unparsable body.
        IpsasApiError
            When the backend answers ``ok: false``.
        """
        endpoint = f"{RPC_PATH_PREFIX}{function}"
        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        payload = {"parameters": list(parameters)}
        headers = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }

        _logger.debug("POST %s", url)
        if self._config.api_trace_enabled:
            _logger.debug("request %s: %s", function, redact_for_log(list(parameters)))

        try:
            async with self._http.post(
                url,
                data=json.dumps(payload, separators=(",", ":")),
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise IpsasTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except IpsasTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise IpsasTransportError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise IpsasTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("response %s: %s", function, redact_for_log(body))

        return unwrap_rpc_response(function, body)

