# -*- coding: utf-8 -*-
"""Utility modules."""

from stellar_wallet_sdk.utils.case import (
    camel_to_snake_dict,
    camel_to_snake_key,
    compact_params,
)
from stellar_wallet_sdk.utils.validation import is_account_id, is_memo_id, mask_account

__all__ = [
    "camel_to_snake_dict",
    "camel_to_snake_key",
    "compact_params",
    "is_account_id",
    "is_memo_id",
    "mask_account",
]
