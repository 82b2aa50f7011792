# -*- coding: utf-8 -*-
"""Unit tests for account and memo validation helpers."""

from __future__ import annotations

from typing import Any

import pytest
from stellar_sdk import Keypair, MuxedAccount

from stellar_wallet_sdk.utils.validation import is_account_id, is_memo_id, mask_account


def test_is_account_id_accepts_g_and_m_addresses() -> None:
    kp = Keypair.random()
    muxed = MuxedAccount(kp.public_key, 42).account_muxed

    assert is_account_id(kp.public_key) is True
    assert is_account_id(muxed) is True


@pytest.mark.parametrize("value", ["", "GABC", None, 123, Keypair.random().secret])
def test_is_account_id_rejects_everything_else(value: Any) -> None:
    assert is_account_id(value) is False


@pytest.mark.parametrize("memo", [0, 12, "42", " 7 "])
def test_is_memo_id_accepts_non_negative_integers(memo: Any) -> None:
    assert is_memo_id(memo) is True


@pytest.mark.parametrize("memo", [-1, "-1", "1.5", "abc", "", None, True])
def test_is_memo_id_rejects_other_values(memo: Any) -> None:
    assert is_memo_id(memo) is False


def test_mask_account_keeps_edges_only() -> None:
    assert mask_account("GABCDEFGHIJKLMNOPWXYZ") == "GABC...WXYZ"
    assert mask_account("short") == "***"
    assert mask_account(None) == "***"
