# -*- coding: utf-8 -*-
"""SEP-24 interactive deposit and withdrawal."""

from __future__ import annotations

from typing import Any, Dict, Optional, cast

from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.anchor.schema import FlowType, Sep24Info, Sep24PostResponse
from stellar_wallet_sdk.anchor.transfer import TransferServerClient
from stellar_wallet_sdk.exceptions import AssetNotSupportedError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.models.toml_info import TomlInfo
from stellar_wallet_sdk.utils.validation import mask_account
from stellar_wallet_sdk.watcher.watcher import WatcherSepType


class Sep24(TransferServerClient):
    """Interactive flow (TRANSFER_SERVER_SEP0024). Get one through Anchor.sep24()."""

    sep_type = WatcherSepType.SEP24

    def _endpoint_from(self, toml: TomlInfo) -> Optional[str]:
        return toml.transfer_server_sep24

    async def info(self, should_refresh: bool = False, lang: Optional[str] = None) -> Sep24Info:
        """GET /info. Cached after the first call unless should_refresh is set."""
        if self._info is not None and not should_refresh:
            return cast(Sep24Info, self._info)
        self._info = await self._fetch_info(lang)
        return cast(Sep24Info, self._info)

    async def deposit(
        self,
        auth_token: AuthToken,
        asset_code: str,
        *,
        lang: Optional[str] = None,
        extra_fields: Optional[Dict[str, Any]] = None,
        destination_memo: Optional[str] = None,
        destination_memo_type: Optional[str] = None,
        destination_account: Optional[str] = None,
    ) -> Sep24PostResponse:
        """Start an interactive deposit; the response carries the anchor's `url` and transaction `id`.

        Args:
            auth_token: SEP-10 token.
            asset_code: Asset to deposit; must be enabled in /info `deposit`.
            lang: Language for the interactive UI (defaults to the anchor language).
            extra_fields: Additional SEP-9 or anchor specific fields sent as-is.
            destination_memo: Memo the anchor should attach to the Stellar payment.
            destination_memo_type: "id", "text" or "hash" (required with destination_memo).
            destination_account: Account receiving the funds (defaults to the token's account on the anchor side).

        Raises:
            AssetNotSupportedError: If the asset is not enabled for deposit.
            ServerRequestFailedError: If the anchor rejects the request.
        """
        return await self._flow(
            FlowType.DEPOSIT,
            auth_token,
            asset_code,
            lang=lang,
            extra_fields=extra_fields,
            memo=destination_memo,
            memo_type=destination_memo_type,
            account=destination_account,
        )

    async def withdraw(
        self,
        auth_token: AuthToken,
        asset_code: str,
        *,
        lang: Optional[str] = None,
        extra_fields: Optional[Dict[str, Any]] = None,
        withdrawal_account: Optional[str] = None,
    ) -> Sep24PostResponse:
        """Start an interactive withdrawal.

        Raises:
            AssetNotSupportedError: If the asset is not enabled for withdrawal.
            ServerRequestFailedError: If the anchor rejects the request.
        """
        return await self._flow(
            FlowType.WITHDRAW,
            auth_token,
            asset_code,
            lang=lang,
            extra_fields=extra_fields,
            account=withdrawal_account,
        )

    async def _flow(
        self,
        flow_type: FlowType,
        auth_token: AuthToken,
        asset_code: str,
        *,
        lang: Optional[str],
        extra_fields: Optional[Dict[str, Any]],
        account: Optional[str],
        memo: Optional[str] = None,
        memo_type: Optional[str] = None,
    ) -> Sep24PostResponse:
        endpoint = await self._endpoint()
        info = await self.info()
        assets = info.get(flow_type.value) or {}
        asset_info = assets.get(asset_code)
        if asset_info is None or asset_info.get("enabled") is False:
            raise AssetNotSupportedError(flow_type.value, asset_code)

        body: Dict[str, Any] = {
            "asset_code": asset_code,
            "lang": lang or self._anchor.language,
        }
        if account:
            body["account"] = account
        if memo is not None:
            body["memo_type"] = memo_type
            body["memo"] = memo
        body.update(extra_fields or {})

        with bound_contextvars(
            sep24_flow=flow_type.value,
            sep24_asset_code=asset_code,
            sep24_account_masked=mask_account(auth_token.account),
        ):
            data = await self._http.post(
                f"{endpoint}/transactions/{flow_type.value}/interactive",
                json=body,
                headers=auth_token.authorization_header,
            )
            response = cast(Sep24PostResponse, data if isinstance(data, dict) else {})
            self._logger.info("sep24_interactive_started", sep24_transaction_id=response.get("id"))
            return response
