from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from pyipsas._transport import RpcTransport, unwrap_rpc_response
from pyipsas.config import IpsasConfig
from pyipsas.exceptions import IpsasApiError, IpsasTransportError


class _FakeResponse:
    def __init__(self, status: int, text: str) -> None:
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def post(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.requests.append((url, kwargs))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response


def _transport(session: _FakeSession, **config: Any) -> RpcTransport:
    return RpcTransport(IpsasConfig(base_url="https://notes.example/", **config), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_call_posts_parameters_and_returns_result() -> None:
    session = _FakeSession(_FakeResponse(200, json.dumps({"ok": True, "result": {"saved": 1}})))

    result = await _transport(session).call("saveNoteData", {"noteId": "N1"})

    assert result == {"saved": 1}
    url, kwargs = session.requests[0]
    assert url == "https://notes.example/rpc/saveNoteData"
    assert json.loads(kwargs["data"]) == {"parameters": [{"noteId": "N1"}]}


@pytest.mark.asyncio
async def test_call_raises_api_error_on_ok_false() -> None:
    body = {"ok": False, "error": {"message": "Note locked", "code": "NOTE_LOCKED"}}
    session = _FakeSession(_FakeResponse(200, json.dumps(body)))

    with pytest.raises(IpsasApiError) as exc_info:
        await _transport(session).call("saveNoteData", {})

    assert exc_info.value.code == "NOTE_LOCKED"
    assert exc_info.value.endpoint == "/rpc/saveNoteData"


@pytest.mark.asyncio
async def test_call_raises_transport_error_on_http_status() -> None:
    session = _FakeSession(_FakeResponse(502, "Bad Gateway"))

    with pytest.raises(IpsasTransportError) as exc_info:
        await _transport(session).call("handleLogout")

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_call_raises_transport_error_on_invalid_json() -> None:
    session = _FakeSession(_FakeResponse(200, "<html>"))

    with pytest.raises(IpsasTransportError, match="Invalid JSON"):
        await _transport(session).call("handleLogout")


@pytest.mark.asyncio
async def test_call_wraps_client_errors() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("refused"))

    with pytest.raises(IpsasTransportError) as exc_info:
        await _transport(session).call("handleLogout")

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_trace_logging_redacts_password(caplog: pytest.LogCaptureFixture) -> None:
    session = _FakeSession(_FakeResponse(200, json.dumps({"ok": True, "result": {"success": True}})))
    caplog.set_level("DEBUG", logger="pyipsas._transport")

    await _transport(session, api_trace_enabled=True).call("handleLogin", {"email": "a@b.co", "password": "pw"})

    assert "<redacted>" in caplog.text
    assert "'pw'" not in caplog.text


def test_unwrap_rejects_malformed_reply() -> None:
    with pytest.raises(IpsasTransportError):
        unwrap_rpc_response("saveNoteData", ["not", "an", "object"])


def test_unwrap_accepts_string_error() -> None:
    with pytest.raises(IpsasApiError, match="boom"):
        unwrap_rpc_response("saveNoteData", {"ok": False, "error": "boom"})
