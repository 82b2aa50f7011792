# -*- coding: utf-8 -*-
"""Wallet: creates Anchor clients sharing one HTTP client and TOML cache."""

from __future__ import annotations

import structlog
from typing import Any, Callable, Optional

from stellar_wallet_sdk.anchor.anchor import Anchor
from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.clients.toml_resolver import StellarTomlResolver
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import AllowHttpOnNonTestnetError


class Wallet:
    """Top-level SDK object."""

    def __init__(
        self,
        settings: Settings,
        http_client: AsyncHttpClient,
        toml_resolver: StellarTomlResolver,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._toml_resolver = toml_resolver
        self._get_logger = get_logger
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def settings(self) -> Settings:
        return self._settings

    def anchor(
        self,
        home_domain: str,
        *,
        language: Optional[str] = None,
        allow_http: Optional[bool] = None,
    ) -> Anchor:
        """Create an Anchor for home_domain.

        Raises:
            AllowHttpOnNonTestnetError: If plain http is requested outside testnet.
        """
        http_allowed = self._settings.anchor.allow_http if allow_http is None else allow_http
        if http_allowed and self._settings.stellar.network != "testnet":
            raise AllowHttpOnNonTestnetError()
        return Anchor(
            home_domain,
            settings=self._settings,
            http_client=self._http,
            toml_resolver=self._toml_resolver,
            language=language,
            allow_http=http_allowed,
            get_logger=self._get_logger,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Wallet:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
