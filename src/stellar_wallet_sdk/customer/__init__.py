# -*- coding: utf-8 -*-
"""SEP-12 customer (KYC) client."""

from stellar_wallet_sdk.customer.sep12 import (
    AddCustomerResponse,
    GetCustomerResponse,
    Sep12,
)

__all__ = ["AddCustomerResponse", "GetCustomerResponse", "Sep12"]
