# -*- coding: utf-8 -*-
"""SEP-6 programmatic deposit and withdrawal."""

from __future__ import annotations

from typing import Any, Mapping, Optional, cast

from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.anchor.schema import Sep6Info, Sep6TransferResponse
from stellar_wallet_sdk.anchor.transfer import TransferServerClient
from stellar_wallet_sdk.exceptions import ServerRequestFailedError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.models.toml_info import TomlInfo
from stellar_wallet_sdk.utils.case import compact_params
from stellar_wallet_sdk.watcher.watcher import WatcherSepType

# 403 bodies that describe what the anchor still needs; returned to the caller.
CUSTOMER_INFO_RESPONSE_TYPES = frozenset(
    {"non_interactive_customer_info_needed", "customer_info_status"}
)


class Sep6(TransferServerClient):
    """Programmatic flow (TRANSFER_SERVER). Get one through Anchor.sep6()."""

    sep_type = WatcherSepType.SEP6

    def _endpoint_from(self, toml: TomlInfo) -> Optional[str]:
        return toml.transfer_server

    async def info(self, should_refresh: bool = False, lang: Optional[str] = None) -> Sep6Info:
        """GET /info. Cached after the first call unless should_refresh is set."""
        if self._info is not None and not should_refresh:
            return cast(Sep6Info, self._info)
        self._info = await self._fetch_info(lang)
        return cast(Sep6Info, self._info)

    async def deposit(
        self, auth_token: AuthToken, params: Mapping[str, Any]
    ) -> Sep6TransferResponse:
        """GET /deposit with params (asset_code, account, memo_type, memo, type, amount, ...)."""
        return await self._transfer("deposit", auth_token, params)

    async def deposit_exchange(
        self, auth_token: AuthToken, params: Mapping[str, Any]
    ) -> Sep6TransferResponse:
        """GET /deposit-exchange (destination_asset, source_asset, amount, quote_id, ...)."""
        return await self._transfer("deposit-exchange", auth_token, params)

    async def withdraw(
        self, auth_token: AuthToken, params: Mapping[str, Any]
    ) -> Sep6TransferResponse:
        """GET /withdraw with params (asset_code, type, dest, dest_extra, amount, ...)."""
        return await self._transfer("withdraw", auth_token, params)

    async def withdraw_exchange(
        self, auth_token: AuthToken, params: Mapping[str, Any]
    ) -> Sep6TransferResponse:
        """GET /withdraw-exchange (source_asset, destination_asset, amount, type, quote_id, ...)."""
        return await self._transfer("withdraw-exchange", auth_token, params)

    async def _transfer(
        self,
        path: str,
        auth_token: AuthToken,
        params: Mapping[str, Any],
    ) -> Sep6TransferResponse:
        """Run one transfer request.

        A 403 whose body `type` is non_interactive_customer_info_needed or
        customer_info_status is a normal answer (KYC still required or under
        review) and is returned instead of raised.
        """
        endpoint = await self._endpoint()
        query = compact_params(params)
        with bound_contextvars(sep6_flow=path, sep6_asset_code=query.get("asset_code")):
            try:
                data = await self._http.get(
                    f"{endpoint}/{path}",
                    params=query,
                    headers=auth_token.authorization_header,
                )
            except ServerRequestFailedError as e:
                body = e.response_data
                if (
                    e.status_code == 403
                    and isinstance(body, dict)
                    and body.get("type") in CUSTOMER_INFO_RESPONSE_TYPES
                ):
                    self._logger.info("sep6_customer_info_required", sep6_response_type=body.get("type"))
                    return cast(Sep6TransferResponse, body)
                raise
            return cast(Sep6TransferResponse, data if isinstance(data, dict) else {})
