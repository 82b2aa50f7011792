# -*- coding: utf-8 -*-
"""SEP-7 URIs."""

from stellar_wallet_sdk.uri.sep7 import (
    URI_MSG_MAX_LENGTH,
    WEB_STELLAR_SCHEME,
    Sep7UriValidation,
    is_valid_sep7_uri,
    memo_from,
    parse_sep7_uri,
    sep7_pay_uri,
    sep7_replacements_from_string,
    sep7_replacements_to_string,
    sep7_tx_uri,
)

__all__ = [
    "URI_MSG_MAX_LENGTH",
    "WEB_STELLAR_SCHEME",
    "Sep7UriValidation",
    "is_valid_sep7_uri",
    "memo_from",
    "parse_sep7_uri",
    "sep7_pay_uri",
    "sep7_replacements_from_string",
    "sep7_replacements_to_string",
    "sep7_tx_uri",
]
