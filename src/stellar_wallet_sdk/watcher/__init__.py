# -*- coding: utf-8 -*-
"""Transaction watcher."""

from stellar_wallet_sdk.watcher.registry import WatchRegistry
from stellar_wallet_sdk.watcher.status import (
    StatusClass,
    TransactionStatus,
    classify_status,
    is_in_progress,
)
from stellar_wallet_sdk.watcher.transactions import (
    get_transaction_by,
    get_transactions_for_asset,
)
from stellar_wallet_sdk.watcher.watcher import (
    SessionState,
    TransferService,
    Watcher,
    WatcherResponse,
    WatcherSepType,
)

__all__ = [
    "SessionState",
    "StatusClass",
    "TransactionStatus",
    "TransferService",
    "WatchRegistry",
    "Watcher",
    "WatcherResponse",
    "WatcherSepType",
    "classify_status",
    "get_transaction_by",
    "get_transactions_for_asset",
    "is_in_progress",
]
