# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import json as jsonlib
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Literal, Optional
from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import InvalidResponseBodyError, ServerRequestFailedError

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
ResponseKind = Literal["json", "text"]


class _RetryableStatus(Exception):
    """Internal marker for 429/5xx responses that should be retried."""

    def __init__(self, status: int, data: Any, retry_after: Optional[float] = None) -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.data = data
        self.retry_after = retry_after


def _parse_body(text: str) -> Any:
    if not text.strip():
        return None
    try:
        return jsonlib.loads(text)
    except ValueError:
        return text


class AsyncHttpClient:
    """Async HTTP client for anchor servers with retries and 429 handling.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager.

    Retries cover network errors, timeouts, 429 and 5xx. Any other non-2xx
    response fails on the first attempt: anchors use 4xx bodies to say
    something the caller has to act on.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (uses settings.http).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.http.timeout_seconds)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"User-Agent": self._settings.http.user_agent},
            )
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform a GET request and return the decoded JSON body.

        Raises:
            ServerRequestFailedError: On a non-retryable status or once retries are exhausted.
        """
        return await self._request("GET", url, params=params, headers=headers)

    async def get_text(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """Perform a GET request and return the raw body (e.g. stellar.toml)."""
        return await self._request("GET", url, headers=headers, kind="text")

    async def post(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform a POST request (JSON body or form data) and return decoded JSON."""
        return await self._request("POST", url, json=json, data=data, headers=headers)

    async def put(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform a PUT request (JSON body or form data) and return decoded JSON."""
        return await self._request("PUT", url, json=json, data=data, headers=headers)

    async def delete(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform a DELETE request and return decoded JSON (None for an empty body)."""
        return await self._request("DELETE", url, json=json, headers=headers)

    async def _request(
        self,
        method: HttpMethod,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        kind: ResponseKind = "json",
    ) -> Any:
        request_id = uuid.uuid4().hex[:12]
        max_retries = self._settings.http.max_retries
        event_prefix = f"http_{method.lower()}"
        last_error: Optional[Exception] = None

        with bound_contextvars(
            http_method=method,
            http_url=url,
            http_request_id=request_id,
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.request(
                            method,
                            url,
                            params=params or None,
                            json=json,
                            data=data,
                            headers=headers,
                        ) as response:
                            text = await response.text()
                            if response.status == 429:
                                retry_after: Optional[float] = None
                                header = response.headers.get("Retry-After")
                                if header:
                                    try:
                                        retry_after = float(header)
                                    except ValueError:
                                        pass
                                raise _RetryableStatus(429, _parse_body(text), retry_after)
                            if response.status >= 500:
                                raise _RetryableStatus(response.status, _parse_body(text))
                            if response.status >= 400:
                                body = _parse_body(text)
                                self._logger.debug(
                                    f"{event_prefix}_rejected",
                                    http_status_code=response.status,
                                )
                                raise ServerRequestFailedError(
                                    f"Server request failed with error: {response.status} "
                                    f"{_describe(body, response.reason)}",
                                    url=url,
                                    status_code=response.status,
                                    response_data=body,
                                )
                            if kind == "text":
                                return text
                            body = _parse_body(text)
                            if isinstance(body, str):
                                raise InvalidResponseBodyError(
                                    f"Server returned a non-JSON body: {url}",
                                    url=url,
                                    status_code=response.status,
                                    response_data=body,
                                )
                            return body
                    except _RetryableStatus as e:
                        last_error = e
                        if e.status == 429:
                            self._logger.warning(
                                f"{event_prefix}_rate_limited",
                                http_status_code=429,
                                http_retry_after_seconds=e.retry_after,
                            )
                        else:
                            self._logger.debug(
                                f"{event_prefix}_retry",
                                http_status_code=e.status,
                            )
                        if e.retry_after is not None and e.retry_after > 0:
                            await asyncio.sleep(e.retry_after)
                        else:
                            await asyncio.sleep(self._backoff_delay(attempt))
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        last_error = e
                        self._logger.debug(
                            f"{event_prefix}_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                        await asyncio.sleep(self._backoff_delay(attempt))

            status_code = last_error.status if isinstance(last_error, _RetryableStatus) else None
            response_data = last_error.data if isinstance(last_error, _RetryableStatus) else None
            self._logger.error(
                f"{event_prefix}_failed",
                http_status_code=status_code,
                http_attempts=max_retries,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise ServerRequestFailedError(
                f"{method} failed after {max_retries} attempts: {url}",
                url=url,
                status_code=status_code,
                response_data=response_data,
                cause=last_error,
            ) from last_error


def _describe(body: Any, reason: Optional[str]) -> str:
    if isinstance(body, dict) and body:
        return jsonlib.dumps(body)
    if isinstance(body, str) and body:
        return body[:200]
    return reason or ""
