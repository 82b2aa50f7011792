# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient."""

from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import InvalidResponseBodyError, ServerRequestFailedError


class _FakeResponse:
    def __init__(self, status: int, body: Any = None, headers: dict[str, str] | None = None) -> None:
        self.status = status
        self.reason = "Reason"
        self.headers = headers or {}
        self._text = body if isinstance(body, str) else ("" if body is None else json.dumps(body))

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *args: Any) -> None:
        return None


class _FakeSession:
    """aiohttp.ClientSession double: replays queued responses or raises queued errors."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


def _client(session: _FakeSession, max_retries: int = 3) -> AsyncHttpClient:
    settings = Settings.from_env(_env_file=None, http={"max_retries": max_retries})
    client = AsyncHttpClient(settings, session=session)  # type: ignore[arg-type]
    client._backoff_delay = lambda attempt: 0.0  # type: ignore[method-assign]
    return client


async def test_get_returns_decoded_json_and_passes_params() -> None:
    session = _FakeSession(_FakeResponse(200, {"ok": True}))
    client = _client(session)

    data = await client.get("https://a.example/info", params={"lang": "en"}, headers={"X": "1"})

    assert data == {"ok": True}
    assert session.requests[0]["method"] == "GET"
    assert session.requests[0]["params"] == {"lang": "en"}
    assert session.requests[0]["headers"] == {"X": "1"}


async def test_get_text_returns_raw_body() -> None:
    session = _FakeSession(_FakeResponse(200, 'SIGNING_KEY = "G..."'))

    assert await _client(session).get_text("https://a.example/.well-known/stellar.toml") == 'SIGNING_KEY = "G..."'


async def test_client_error_fails_without_retry() -> None:
    session = _FakeSession(_FakeResponse(403, {"type": "non_interactive_customer_info_needed"}))
    client = _client(session)

    with pytest.raises(ServerRequestFailedError) as exc_info:
        await client.get("https://a.example/deposit")

    assert exc_info.value.status_code == 403
    assert exc_info.value.response_data == {"type": "non_interactive_customer_info_needed"}
    assert len(session.requests) == 1


async def test_server_errors_are_retried() -> None:
    session = _FakeSession(_FakeResponse(503), _FakeResponse(200, {"token": "abc"}))

    data = await _client(session).post("https://a.example/auth", json={"transaction": "xdr"})

    assert data == {"token": "abc"}
    assert len(session.requests) == 2
    assert session.requests[1]["json"] == {"transaction": "xdr"}


async def test_network_errors_exhaust_retries() -> None:
    session = _FakeSession(
        aiohttp.ClientConnectionError("down"),
        aiohttp.ClientConnectionError("down"),
    )

    with pytest.raises(ServerRequestFailedError) as exc_info:
        await _client(session, max_retries=2).get("https://a.example/info")

    assert isinstance(exc_info.value.cause, aiohttp.ClientConnectionError)
    assert len(session.requests) == 2


async def test_non_json_success_body_is_rejected() -> None:
    session = _FakeSession(_FakeResponse(200, "<html>"))

    with pytest.raises(InvalidResponseBodyError) as exc_info:
        await _client(session).get("https://a.example/info")

    assert exc_info.value.response_data == "<html>"
    assert len(session.requests) == 1


async def test_empty_body_decodes_to_none() -> None:
    session = _FakeSession(_FakeResponse(204))

    assert await _client(session).delete("https://a.example/customer/G") is None


async def test_injected_session_is_not_closed() -> None:
    session = _FakeSession()

    async with _client(session):
        pass

    assert session.closed is False
