# -*- coding: utf-8 -*-
"""SEP-38 anchor RFQ (quote) client."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union, cast

from stellar_wallet_sdk.anchor.schema import (
    Sep38Info,
    Sep38PriceContext,
    Sep38PriceResponse,
    Sep38PricesResponse,
    Sep38QuoteResponse,
)
from stellar_wallet_sdk.exceptions import Sep38PriceOnlyOneAmountError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.utils.case import compact_params

if TYPE_CHECKING:
    from stellar_wallet_sdk.anchor.anchor import Anchor
    from stellar_wallet_sdk.clients.http import AsyncHttpClient


class Sep38:
    """Quote server client (ANCHOR_QUOTE_SERVER). Get one through Anchor.sep38().

    Assets use the SEP-38 identification format, e.g.
    `stellar:USDC:GA5Z...` or `iso4217:USD`.
    """

    def __init__(
        self,
        anchor: "Anchor",
        http_client: "AsyncHttpClient",
        auth_token: Optional[AuthToken] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._anchor = anchor
        self._http = http_client
        self._auth_token = auth_token
        self._info: Optional[Sep38Info] = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _endpoint(self) -> str:
        toml = await self._anchor.sep1()
        if not toml.anchor_quote_server:
            raise ValueError(f"{self._anchor.home_domain} does not advertise ANCHOR_QUOTE_SERVER")
        return toml.anchor_quote_server

    def _headers(self, auth_token: Optional[AuthToken] = None) -> Optional[Dict[str, str]]:
        token = auth_token or self._auth_token
        return token.authorization_header if token is not None else None

    def _required_headers(self, auth_token: Optional[AuthToken]) -> Dict[str, str]:
        headers = self._headers(auth_token)
        if headers is None:
            raise ValueError("a SEP-10 auth token is required for quote requests")
        return headers

    async def info(self, should_refresh: bool = False) -> Sep38Info:
        """GET /info: assets and delivery methods the anchor quotes for."""
        if self._info is not None and not should_refresh:
            return self._info
        endpoint = await self._endpoint()
        data = await self._http.get(f"{endpoint}/info", headers=self._headers())
        self._info = cast(Sep38Info, data if isinstance(data, dict) else {})
        return self._info

    async def prices(
        self,
        sell_asset: str,
        sell_amount: str,
        *,
        sell_delivery_method: Optional[str] = None,
        buy_delivery_method: Optional[str] = None,
        country_code: Optional[str] = None,
    ) -> Sep38PricesResponse:
        """GET /prices: indicative prices of every asset buyable with sell_amount of sell_asset."""
        endpoint = await self._endpoint()
        params = compact_params(
            {
                "sell_asset": sell_asset,
                "sell_amount": sell_amount,
                "sell_delivery_method": sell_delivery_method,
                "buy_delivery_method": buy_delivery_method,
                "country_code": country_code,
            }
        )
        data = await self._http.get(f"{endpoint}/prices", params=params, headers=self._headers())
        return cast(Sep38PricesResponse, data if isinstance(data, dict) else {})

    async def price(
        self,
        sell_asset: str,
        buy_asset: str,
        context: Union[Sep38PriceContext, str],
        *,
        sell_amount: Optional[str] = None,
        buy_amount: Optional[str] = None,
        sell_delivery_method: Optional[str] = None,
        buy_delivery_method: Optional[str] = None,
        country_code: Optional[str] = None,
    ) -> Sep38PriceResponse:
        """GET /price: indicative price for one asset pair.

        Raises:
            Sep38PriceOnlyOneAmountError: Unless exactly one of sell_amount / buy_amount is given.
        """
        _check_one_amount(sell_amount, buy_amount)
        endpoint = await self._endpoint()
        params = compact_params(
            {
                "sell_asset": sell_asset,
                "buy_asset": buy_asset,
                "sell_amount": sell_amount,
                "buy_amount": buy_amount,
                "context": _context_value(context),
                "sell_delivery_method": sell_delivery_method,
                "buy_delivery_method": buy_delivery_method,
                "country_code": country_code,
            }
        )
        data = await self._http.get(f"{endpoint}/price", params=params, headers=self._headers())
        return cast(Sep38PriceResponse, data if isinstance(data, dict) else {})

    async def request_quote(
        self,
        sell_asset: str,
        buy_asset: str,
        context: Union[Sep38PriceContext, str],
        *,
        sell_amount: Optional[str] = None,
        buy_amount: Optional[str] = None,
        expire_after: Optional[str] = None,
        sell_delivery_method: Optional[str] = None,
        buy_delivery_method: Optional[str] = None,
        country_code: Optional[str] = None,
        auth_token: Optional[AuthToken] = None,
    ) -> Sep38QuoteResponse:
        """POST /quote: firm quote the anchor honours until `expires_at`.

        Raises:
            Sep38PriceOnlyOneAmountError: Unless exactly one amount is given.
            ValueError: If no auth token is available.
        """
        _check_one_amount(sell_amount, buy_amount)
        headers = self._required_headers(auth_token)
        endpoint = await self._endpoint()
        body = {
            k: v
            for k, v in {
                "sell_asset": sell_asset,
                "buy_asset": buy_asset,
                "sell_amount": sell_amount,
                "buy_amount": buy_amount,
                "expire_after": expire_after,
                "context": _context_value(context),
                "sell_delivery_method": sell_delivery_method,
                "buy_delivery_method": buy_delivery_method,
                "country_code": country_code,
            }.items()
            if v is not None
        }
        data = await self._http.post(f"{endpoint}/quote", json=body, headers=headers)
        quote = cast(Sep38QuoteResponse, data if isinstance(data, dict) else {})
        self._logger.info(
            "sep38_quote_created",
            sep38_quote_id=quote.get("id"),
            sep38_expires_at=quote.get("expires_at"),
        )
        return quote

    async def get_quote(
        self, quote_id: str, *, auth_token: Optional[AuthToken] = None
    ) -> Sep38QuoteResponse:
        """GET /quote/{id}."""
        headers = self._required_headers(auth_token)
        endpoint = await self._endpoint()
        data = await self._http.get(f"{endpoint}/quote/{quote_id}", headers=headers)
        return cast(Sep38QuoteResponse, data if isinstance(data, dict) else {})


def _check_one_amount(sell_amount: Optional[str], buy_amount: Optional[str]) -> None:
    if (sell_amount is None) == (buy_amount is None):
        raise Sep38PriceOnlyOneAmountError()


def _context_value(context: Union[Sep38PriceContext, str]) -> str:
    return context.value if isinstance(context, Sep38PriceContext) else context
