"""Validation helpers for Stellar account ids and memos."""

from __future__ import annotations

from typing import Any

from stellar_sdk import StrKey


def is_account_id(addr: Any) -> bool:
    """Return True if addr is a valid G... (ed25519) or M... (muxed) account id."""
    if not isinstance(addr, str):
        return False
    s = addr.strip()
    return StrKey.is_valid_ed25519_public_key(s) or StrKey.is_valid_med25519_public_key(s)


def is_memo_id(memo: Any) -> bool:
    """Return True if memo is a non-negative integer (or its decimal string)."""
    if isinstance(memo, bool):
        return False
    if isinstance(memo, int):
        return memo >= 0
    if not isinstance(memo, str) or not memo.strip():
        return False
    s = memo.strip()
    return s.isdigit()


def mask_account(addr: str | None) -> str:
    """Return a masked account id for logging (e.g. GABC...WXYZ)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:4]}...{addr[-4:]}"
