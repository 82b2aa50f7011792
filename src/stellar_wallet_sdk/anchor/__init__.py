# -*- coding: utf-8 -*-
"""Anchor and its transfer / quote clients."""

from stellar_wallet_sdk.anchor.anchor import Anchor
from stellar_wallet_sdk.anchor.schema import (
    AnchorTransaction,
    FlowType,
    Sep6Info,
    Sep24Info,
    Sep38Info,
    Sep38PriceContext,
)
from stellar_wallet_sdk.anchor.sep24 import Sep24
from stellar_wallet_sdk.anchor.sep38 import Sep38
from stellar_wallet_sdk.anchor.sep6 import Sep6

__all__ = [
    "Anchor",
    "AnchorTransaction",
    "FlowType",
    "Sep24",
    "Sep24Info",
    "Sep38",
    "Sep38Info",
    "Sep38PriceContext",
    "Sep6",
    "Sep6Info",
]
