# -*- coding: utf-8 -*-
"""Unit tests for key conversion helpers."""

from __future__ import annotations

from stellar_wallet_sdk.utils.case import camel_to_snake_dict, camel_to_snake_key, compact_params


def test_camel_to_snake_key_converts_each_upper_case_letter() -> None:
    assert camel_to_snake_key("stellarTransactionId") == "stellar_transaction_id"
    assert camel_to_snake_key("noOlderThan") == "no_older_than"


def test_camel_to_snake_key_leaves_snake_case_untouched() -> None:
    assert camel_to_snake_key("asset_code") == "asset_code"
    assert camel_to_snake_key("lang") == "lang"


def test_camel_to_snake_dict_only_converts_top_level_keys() -> None:
    result = camel_to_snake_dict({"assetCode": "USDC", "extraFields": {"firstName": "Ada"}})
    assert result == {"asset_code": "USDC", "extra_fields": {"firstName": "Ada"}}


def test_compact_params_drops_none_and_lowers_booleans() -> None:
    params = compact_params(
        {"assetCode": "USDC", "kind": None, "claimableBalanceSupported": True, "onChange": False, "limit": 10}
    )
    assert params == {
        "asset_code": "USDC",
        "claimable_balance_supported": "true",
        "on_change": "false",
        "limit": 10,
    }
