"""Custom exceptions for anchor requests, authentication and the watcher."""

from __future__ import annotations

import json
from typing import Any


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return repr(value)


class WalletError(Exception):
    """Base exception for wallet SDK errors."""

    pass


class MissingRequiredConfigError(WalletError):
    """Raised when a required configuration value is missing."""

    pass


class AllowHttpOnNonTestnetError(WalletError):
    """Raised when plain http is requested outside of testnet."""

    def __init__(self) -> None:
        super().__init__("Can only allow http on testnet")


class ServerRequestFailedError(WalletError):
    """Raised when an anchor request fails (network error or non-2xx response)."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        response_data: Any = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.response_data = response_data
        self.cause = cause


class InvalidResponseBodyError(ServerRequestFailedError):
    """Raised when a 2xx response carries a body that is not JSON."""


class InvalidTransactionResponseError(WalletError):
    """Raised when GET /transaction returns no transaction object."""

    def __init__(self, transaction_response: Any) -> None:
        super().__init__(
            f"Invalid transaction in response data: {_dump(transaction_response)}"
        )
        self.transaction_response = transaction_response


class InvalidTransactionsResponseError(WalletError):
    """Raised when GET /transactions returns no transactions list."""

    def __init__(self, transactions_response: Any) -> None:
        super().__init__(
            f"Invalid transactions in response data: {_dump(transactions_response)}"
        )
        self.transactions_response = transactions_response


class MissingTransactionIdError(WalletError):
    def __init__(self) -> None:
        super().__init__(
            "One of id, stellar_transaction_id or external_transaction_id is required"
        )


class AssetNotSupportedError(WalletError):
    def __init__(self, flow_type: str | None, asset_code: str) -> None:
        suffix = f" for {flow_type}" if flow_type else ""
        super().__init__(f"Asset {asset_code} not supported{suffix}")
        self.flow_type = flow_type
        self.asset_code = asset_code


class TomlNotFoundError(WalletError):
    """Raised when stellar.toml cannot be fetched or parsed for a home domain."""

    def __init__(self, home_domain: str, reason: str) -> None:
        super().__init__(f"stellar.toml for {home_domain} unavailable: {reason}")
        self.home_domain = home_domain


class KYCServerNotFoundError(WalletError):
    def __init__(self) -> None:
        super().__init__("Required KYC server URL not found")


class CustomerNotFoundError(WalletError):
    def __init__(self, params: dict[str, Any]) -> None:
        super().__init__(f"Customer not found using params {_dump(params)}")
        self.params = params


class Sep9InfoRequiredError(WalletError):
    def __init__(self) -> None:
        super().__init__("Sep-9 info required")


class InvalidMemoError(WalletError):
    def __init__(self) -> None:
        super().__init__("Memo ID must be a positive integer")


class ClientDomainWithMemoError(WalletError):
    def __init__(self) -> None:
        super().__init__("Client domain cannot be used with memo")


class MissingTokenError(WalletError):
    def __init__(self) -> None:
        super().__init__("Token was not returned")


class InvalidTokenError(WalletError):
    def __init__(self) -> None:
        super().__init__("Invalid token given")


class ExpiredTokenError(WalletError):
    def __init__(self, expires_at: int) -> None:
        super().__init__(f"Token has already expired. Expiration time: {expires_at}")
        self.expires_at = expires_at


class DefaultSignerDomainAccountError(WalletError):
    def __init__(self) -> None:
        super().__init__(
            "The DefaultSigner can't sign transactions with domain account. "
            "Use a DomainSigner to sign challenges that carry a client_domain."
        )


class ChallengeTxnIncorrectSequenceError(WalletError):
    def __init__(self) -> None:
        super().__init__("Challenge transaction sequence number must be 0")


class ChallengeTxnInvalidSignatureError(WalletError):
    def __init__(self) -> None:
        super().__init__("Invalid signature for challenge transaction")


class Sep38PriceOnlyOneAmountError(WalletError):
    def __init__(self) -> None:
        super().__init__("Must give sell_amount or buy_amount value, but not both")


class InvalidSep7UriError(WalletError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid SEP-7 URI: {reason}")
        self.reason = reason
