"""Exceptions subpackage."""

from stellar_wallet_sdk.exceptions.exceptions import (
    AllowHttpOnNonTestnetError,
    AssetNotSupportedError,
    ChallengeTxnIncorrectSequenceError,
    ChallengeTxnInvalidSignatureError,
    ClientDomainWithMemoError,
    CustomerNotFoundError,
    DefaultSignerDomainAccountError,
    ExpiredTokenError,
    InvalidMemoError,
    InvalidResponseBodyError,
    InvalidSep7UriError,
    InvalidTokenError,
    InvalidTransactionResponseError,
    InvalidTransactionsResponseError,
    KYCServerNotFoundError,
    MissingRequiredConfigError,
    MissingTokenError,
    MissingTransactionIdError,
    Sep9InfoRequiredError,
    Sep38PriceOnlyOneAmountError,
    ServerRequestFailedError,
    TomlNotFoundError,
    WalletError,
)

__all__ = [
    "AllowHttpOnNonTestnetError",
    "AssetNotSupportedError",
    "ChallengeTxnIncorrectSequenceError",
    "ChallengeTxnInvalidSignatureError",
    "ClientDomainWithMemoError",
    "CustomerNotFoundError",
    "DefaultSignerDomainAccountError",
    "ExpiredTokenError",
    "InvalidMemoError",
    "InvalidResponseBodyError",
    "InvalidSep7UriError",
    "InvalidTokenError",
    "InvalidTransactionResponseError",
    "InvalidTransactionsResponseError",
    "KYCServerNotFoundError",
    "MissingRequiredConfigError",
    "MissingTokenError",
    "MissingTransactionIdError",
    "Sep9InfoRequiredError",
    "Sep38PriceOnlyOneAmountError",
    "ServerRequestFailedError",
    "TomlNotFoundError",
    "WalletError",
]
