# -*- coding: utf-8 -*-
"""SEP-1 resolver: fetch, parse and cache an anchor's stellar.toml."""

from __future__ import annotations

import structlog
import toml
from typing import Any, Callable, Optional
from cachetools import TTLCache
from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import ServerRequestFailedError, TomlNotFoundError
from stellar_wallet_sdk.models.toml_info import TomlInfo, parse_toml


class StellarTomlResolver:
    """Resolves home_domain -> TomlInfo.

    Parsed documents are kept in a cachetools.TTLCache keyed by
    (home_domain, scheme) so repeated Anchor lookups do not refetch.
    """

    def __init__(
        self,
        http_client: AsyncHttpClient,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            http_client: Async HTTP client (injected).
            settings: Application settings (uses settings.anchor for cache sizing).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        a = settings.anchor
        self._cache: TTLCache[tuple[str, str], TomlInfo] = TTLCache(
            maxsize=a.toml_cache_maxsize,
            ttl=a.toml_cache_ttl_seconds,
        )
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @staticmethod
    def toml_url(home_domain: str, allow_http: bool = False) -> str:
        scheme = "http" if allow_http else "https"
        return f"{scheme}://{home_domain}/.well-known/stellar.toml"

    async def resolve(
        self,
        home_domain: str,
        allow_http: bool = False,
        *,
        should_refresh: bool = False,
    ) -> TomlInfo:
        """Return the parsed stellar.toml of home_domain.

        Args:
            home_domain: Anchor domain (no scheme), e.g. "testanchor.stellar.org".
            allow_http: Fetch over plain http instead of https.
            should_refresh: Bypass the cache and refetch.

        Raises:
            TomlNotFoundError: If the document cannot be fetched or is not valid TOML.
        """
        key = (home_domain, "http" if allow_http else "https")
        if not should_refresh:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        url = self.toml_url(home_domain, allow_http)
        with bound_contextvars(toml_home_domain=home_domain):
            try:
                text = await self._http.get_text(url)
            except ServerRequestFailedError as e:
                self._logger.warning(
                    "toml_fetch_failed",
                    toml_url=url,
                    http_status_code=e.status_code,
                )
                raise TomlNotFoundError(home_domain, str(e)) from e
            try:
                doc = toml.loads(text)
            except toml.TomlDecodeError as e:
                self._logger.warning("toml_parse_failed", error_message=str(e))
                raise TomlNotFoundError(home_domain, f"invalid TOML: {e}") from e

            info = parse_toml(doc)
            self._cache[key] = info
            self._logger.debug(
                "toml_resolved",
                toml_has_sep10=info.has_sep10,
                toml_has_sep24=info.has_sep24,
                toml_has_sep6=info.has_sep6,
            )
            return info

    def invalidate(self, home_domain: Optional[str] = None) -> None:
        """Drop cached documents (all of them, or only those of home_domain)."""
        if home_domain is None:
            self._cache.clear()
            return
        for key in [k for k in self._cache if k[0] == home_domain]:
            self._cache.pop(key, None)
