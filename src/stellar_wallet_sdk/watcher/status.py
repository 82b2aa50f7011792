# -*- coding: utf-8 -*-
"""Transaction status values (SEP-6 / SEP-24) and their classification."""

from __future__ import annotations

from enum import Enum


class TransactionStatus(str, Enum):
    """Every status an anchor may report for a transfer."""

    INCOMPLETE = "incomplete"
    PENDING_USER_TRANSFER_START = "pending_user_transfer_start"
    PENDING_USER_TRANSFER_COMPLETE = "pending_user_transfer_complete"
    PENDING_EXTERNAL = "pending_external"
    PENDING_ANCHOR = "pending_anchor"
    PENDING_STELLAR = "pending_stellar"
    PENDING_TRUST = "pending_trust"
    PENDING_USER = "pending_user"
    PENDING_CUSTOMER_INFO_UPDATE = "pending_customer_info_update"
    PENDING_TRANSACTION_INFO_UPDATE = "pending_transaction_info_update"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    EXPIRED = "expired"
    NO_MARKET = "no_market"
    TOO_SMALL = "too_small"
    TOO_LARGE = "too_large"
    ERROR = "error"
    ON_HOLD = "on_hold"


class StatusClass(str, Enum):
    """Outcome bucket the watcher routes a status to."""

    IN_PROGRESS = "in_progress"
    """Keep polling; reported through on_message."""
    TERMINAL_SUCCESS = "terminal_success"
    """Final; reported through on_success (watch-one) or on_message (watch-all)."""
    TERMINAL_ERROR = "terminal_error"
    """Final; reported through on_error with the transaction payload."""


TERMINAL_SUCCESS_STATUSES: frozenset[str] = frozenset(
    {
        TransactionStatus.COMPLETED.value,
        TransactionStatus.REFUNDED.value,
        TransactionStatus.EXPIRED.value,
    }
)

TERMINAL_ERROR_STATUSES: frozenset[str] = frozenset(
    {
        TransactionStatus.ERROR.value,
        TransactionStatus.NO_MARKET.value,
        TransactionStatus.TOO_SMALL.value,
        TransactionStatus.TOO_LARGE.value,
    }
)


def _value(status: str | TransactionStatus | None) -> str:
    if isinstance(status, TransactionStatus):
        return status.value
    return status or ""


def is_in_progress(status: str | TransactionStatus | None) -> bool:
    """True for `pending*`, `incomplete` and `on_hold`."""
    s = _value(status)
    return (
        s.startswith("pending")
        or s == TransactionStatus.INCOMPLETE.value
        or s == TransactionStatus.ON_HOLD.value
    )


def classify_status(status: str | TransactionStatus | None) -> StatusClass:
    """Map a raw status string to a StatusClass.

    Unrecognised values (including a missing status) are TERMINAL_ERROR, so a
    watcher never keeps polling a transaction it cannot interpret.
    """
    s = _value(status)
    if is_in_progress(s):
        return StatusClass.IN_PROGRESS
    if s in TERMINAL_SUCCESS_STATUSES:
        return StatusClass.TERMINAL_SUCCESS
    return StatusClass.TERMINAL_ERROR
