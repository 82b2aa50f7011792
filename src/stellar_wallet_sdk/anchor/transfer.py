# -*- coding: utf-8 -*-
"""Behaviour shared by the SEP-6 and SEP-24 transfer server clients."""

from __future__ import annotations

import structlog
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.anchor.schema import AnchorTransaction
from stellar_wallet_sdk.exceptions import MissingTransactionIdError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.models.toml_info import TomlInfo
from stellar_wallet_sdk.watcher import transactions as anchor_transactions
from stellar_wallet_sdk.watcher.watcher import Watcher, WatcherSepType

if TYPE_CHECKING:
    from stellar_wallet_sdk.anchor.anchor import Anchor
    from stellar_wallet_sdk.clients.http import AsyncHttpClient


class TransferServerClient(ABC):
    """Base for Sep6 and Sep24: /info caching, transaction lookups and the watcher."""

    sep_type: WatcherSepType

    def __init__(
        self,
        anchor: "Anchor",
        http_client: "AsyncHttpClient",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._anchor = anchor
        self._http = http_client
        self._get_logger = get_logger
        self._info: Optional[Dict[str, Any]] = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @abstractmethod
    def _endpoint_from(self, toml: TomlInfo) -> Optional[str]:
        """Transfer server URL advertised in the anchor's stellar.toml."""

    async def _endpoint(self) -> str:
        toml = await self._anchor.sep1()
        endpoint = self._endpoint_from(toml)
        if not endpoint:
            raise ValueError(
                f"{self._anchor.home_domain} does not advertise a {self.sep_type.value} transfer server"
            )
        return endpoint

    async def _fetch_info(self, lang: Optional[str]) -> Dict[str, Any]:
        endpoint = await self._endpoint()
        data = await self._http.get(
            f"{endpoint}/info",
            params={"lang": lang or self._anchor.language},
        )
        return data if isinstance(data, dict) else {}

    async def get_transaction_by(
        self,
        auth_token: AuthToken,
        *,
        id: Optional[str] = None,
        stellar_transaction_id: Optional[str] = None,
        external_transaction_id: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> AnchorTransaction:
        """Get one transaction by id, Stellar transaction hash or external id.

        The first identifier given wins (id, then stellar_transaction_id,
        then external_transaction_id).

        Raises:
            MissingTransactionIdError: If no identifier is given.
            ServerRequestFailedError: On transport failure or a non-2xx response.
            InvalidTransactionResponseError: If the anchor returns no transaction.
        """
        if id:
            params: Dict[str, Any] = {"id": id}
        elif stellar_transaction_id:
            params = {"stellar_transaction_id": stellar_transaction_id}
        elif external_transaction_id:
            params = {"external_transaction_id": external_transaction_id}
        else:
            raise MissingTransactionIdError()
        params["lang"] = lang or self._anchor.language

        endpoint = await self._endpoint()
        with bound_contextvars(transfer_sep=self.sep_type.value):
            return await anchor_transactions.get_transaction_by(
                self._http, auth_token, params, endpoint
            )

    async def get_transactions_for_asset(
        self,
        auth_token: AuthToken,
        asset_code: str,
        *,
        kind: Optional[str] = None,
        no_older_than: Optional[str] = None,
        limit: Optional[int] = None,
        paging_id: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> List[AnchorTransaction]:
        """Get the account's transactions for asset_code (newest first, as the anchor orders them).

        Raises:
            ServerRequestFailedError: On transport failure or a non-2xx response.
            InvalidTransactionsResponseError: If the anchor returns no transactions list.
        """
        endpoint = await self._endpoint()
        params = {
            "asset_code": asset_code,
            "kind": kind,
            "no_older_than": no_older_than,
            "limit": limit,
            "paging_id": paging_id,
            "lang": lang or self._anchor.language,
        }
        with bound_contextvars(transfer_sep=self.sep_type.value, transfer_asset_code=asset_code):
            return await anchor_transactions.get_transactions_for_asset(
                self._http, auth_token, params, endpoint
            )

    def watcher(self) -> Watcher:
        """New Watcher polling this transfer server."""
        return Watcher(
            self,
            self.sep_type,
            default_timeout_ms=self._anchor.settings.watcher.timeout_ms,
            get_logger=self._get_logger,
        )
