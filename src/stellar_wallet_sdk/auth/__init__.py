# -*- coding: utf-8 -*-
"""SEP-10 authentication."""

from stellar_wallet_sdk.auth.sep10 import ChallengeResponse, Sep10
from stellar_wallet_sdk.auth.wallet_signer import DefaultSigner, DomainSigner, WalletSigner

__all__ = [
    "ChallengeResponse",
    "DefaultSigner",
    "DomainSigner",
    "Sep10",
    "WalletSigner",
]
