# -*- coding: utf-8 -*-
"""HTTP and SEP-1 clients."""

from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.clients.toml_resolver import StellarTomlResolver

__all__ = ["AsyncHttpClient", "StellarTomlResolver"]
