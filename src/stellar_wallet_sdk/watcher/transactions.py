# -*- coding: utf-8 -*-
"""Transfer server transaction lookups shared by SEP-6 and SEP-24."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.exceptions import (
    InvalidResponseBodyError,
    InvalidTransactionResponseError,
    InvalidTransactionsResponseError,
)
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.utils.case import compact_params

if TYPE_CHECKING:
    from stellar_wallet_sdk.anchor.schema import AnchorTransaction


async def get_transactions_for_asset(
    http: AsyncHttpClient,
    auth_token: AuthToken,
    params: Mapping[str, Any],
    endpoint: str,
) -> list[AnchorTransaction]:
    """GET {endpoint}/transactions and return the `transactions` list.

    Args:
        http: HTTP client used for the request.
        auth_token: SEP-10 token sent as bearer credential.
        params: Query values (asset_code, kind, paging_id, no_older_than, limit, lang).
            None values are dropped; camelCase keys are converted to snake_case.
        endpoint: Transfer server base URL (no trailing slash).

    Raises:
        ServerRequestFailedError: On transport failure or a non-2xx response.
        InvalidTransactionsResponseError: If the body is not JSON or has no `transactions` list.
    """
    try:
        body = await http.get(
            f"{endpoint}/transactions",
            params=compact_params(params),
            headers=auth_token.authorization_header,
        )
    except InvalidResponseBodyError as e:
        raise InvalidTransactionsResponseError(e.response_data) from e
    transactions = body.get("transactions") if isinstance(body, dict) else None
    if not isinstance(transactions, list):
        raise InvalidTransactionsResponseError(transactions)
    return transactions


async def get_transaction_by(
    http: AsyncHttpClient,
    auth_token: AuthToken,
    params: Mapping[str, Any],
    endpoint: str,
) -> AnchorTransaction:
    """GET {endpoint}/transaction and return the `transaction` object.

    Raises:
        ServerRequestFailedError: On transport failure or a non-2xx response.
        InvalidTransactionResponseError: If the body is not JSON or `transaction` is missing or empty.
    """
    try:
        body = await http.get(
            f"{endpoint}/transaction",
            params=compact_params(params),
            headers=auth_token.authorization_header,
        )
    except InvalidResponseBodyError as e:
        raise InvalidTransactionResponseError(e.response_data) from e
    transaction = body.get("transaction") if isinstance(body, dict) else None
    if not isinstance(transaction, dict) or not transaction:
        raise InvalidTransactionResponseError(transaction)
    return transaction  # type: ignore[return-value]
