"""Stellar wallet SDK: async anchor clients (SEP-1/6/7/10/12/24/38) and a transaction watcher."""

from stellar_wallet_sdk.anchor import Anchor, Sep6, Sep24, Sep38
from stellar_wallet_sdk.auth import DefaultSigner, DomainSigner, Sep10
from stellar_wallet_sdk.clients import AsyncHttpClient, StellarTomlResolver
from stellar_wallet_sdk.config import get_settings
from stellar_wallet_sdk.customer import Sep12
from stellar_wallet_sdk.DI import Container
from stellar_wallet_sdk.models import AuthToken, TomlInfo
from stellar_wallet_sdk.wallet import Wallet
from stellar_wallet_sdk.watcher import (
    StatusClass,
    TransactionStatus,
    Watcher,
    WatcherResponse,
    WatcherSepType,
    classify_status,
)

__version__ = "0.0.1"
__all__ = [
    "Anchor",
    "AsyncHttpClient",
    "AuthToken",
    "Container",
    "DefaultSigner",
    "DomainSigner",
    "Sep10",
    "Sep12",
    "Sep24",
    "Sep38",
    "Sep6",
    "StatusClass",
    "StellarTomlResolver",
    "TomlInfo",
    "TransactionStatus",
    "Wallet",
    "Watcher",
    "WatcherResponse",
    "WatcherSepType",
    "classify_status",
    "get_settings",
]
