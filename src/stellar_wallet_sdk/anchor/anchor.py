# -*- coding: utf-8 -*-
"""Anchor: entry point to every SEP service of one home domain."""

from __future__ import annotations

import structlog
from typing import Any, Callable, Optional

from stellar_wallet_sdk.anchor.sep24 import Sep24
from stellar_wallet_sdk.anchor.sep38 import Sep38
from stellar_wallet_sdk.anchor.sep6 import Sep6
from stellar_wallet_sdk.auth.sep10 import Sep10
from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.clients.toml_resolver import StellarTomlResolver
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.customer.sep12 import Sep12
from stellar_wallet_sdk.exceptions import KYCServerNotFoundError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.models.toml_info import TomlInfo


class Anchor:
    """One anchor, identified by its home domain. Create through Wallet.anchor()."""

    def __init__(
        self,
        home_domain: str,
        *,
        settings: Settings,
        http_client: AsyncHttpClient,
        toml_resolver: StellarTomlResolver,
        language: Optional[str] = None,
        allow_http: bool = False,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the anchor.

        Args:
            home_domain: Domain hosting /.well-known/stellar.toml.
            settings: Application settings.
            http_client: Async HTTP client shared by every SEP client.
            toml_resolver: SEP-1 resolver (shared cache).
            language: Default `lang` for requests (settings.anchor.language if None).
            allow_http: Fetch stellar.toml over plain http.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self.home_domain = home_domain
        self.settings = settings
        self.language = language or settings.anchor.language
        self.allow_http = allow_http
        self._http = http_client
        self._toml_resolver = toml_resolver
        self._toml: Optional[TomlInfo] = None
        self._get_logger = get_logger
        self._sep6: Optional[Sep6] = None
        self._sep24: Optional[Sep24] = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def sep1(self, should_refresh: bool = False) -> TomlInfo:
        """stellar.toml of the anchor, cached on this instance."""
        if self._toml is not None and not should_refresh:
            return self._toml
        self._toml = await self._toml_resolver.resolve(
            self.home_domain,
            self.allow_http,
            should_refresh=should_refresh,
        )
        return self._toml

    async def info(self, should_refresh: bool = False) -> TomlInfo:
        return await self.sep1(should_refresh)

    async def sep10(self) -> Sep10:
        """SEP-10 client configured from WEB_AUTH_ENDPOINT and SIGNING_KEY."""
        toml = await self.sep1()
        if not toml.web_auth_endpoint:
            raise ValueError(f"{self.home_domain} does not advertise WEB_AUTH_ENDPOINT")
        return Sep10(
            self.settings,
            self._http,
            web_auth_endpoint=toml.web_auth_endpoint,
            home_domain=self.home_domain,
            server_signing_key=toml.signing_key,
            get_logger=self._get_logger,
        )

    async def auth(self) -> Sep10:
        return await self.sep10()

    async def sep12(self, auth_token: AuthToken) -> Sep12:
        """SEP-12 client for auth_token.

        Raises:
            KYCServerNotFoundError: If the anchor advertises no KYC_SERVER.
        """
        toml = await self.sep1()
        if not toml.kyc_server:
            raise KYCServerNotFoundError()
        return Sep12(auth_token, toml.kyc_server, self._http, get_logger=self._get_logger)

    async def customer(self, auth_token: AuthToken) -> Sep12:
        return await self.sep12(auth_token)

    def sep6(self) -> Sep6:
        if self._sep6 is None:
            self._sep6 = Sep6(self, self._http, get_logger=self._get_logger)
        return self._sep6

    def transfer(self) -> Sep6:
        return self.sep6()

    def sep24(self) -> Sep24:
        if self._sep24 is None:
            self._sep24 = Sep24(self, self._http, get_logger=self._get_logger)
        return self._sep24

    def interactive(self) -> Sep24:
        return self.sep24()

    def sep38(self, auth_token: Optional[AuthToken] = None) -> Sep38:
        return Sep38(self, self._http, auth_token, get_logger=self._get_logger)

    def quote(self, auth_token: Optional[AuthToken] = None) -> Sep38:
        return self.sep38(auth_token)
