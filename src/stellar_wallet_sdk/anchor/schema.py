"""Anchor response types (SEP-6, SEP-24, SEP-38 schema alignment).

Keys match the wire format (snake_case, plus the dashed SEP-6 info sections).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, TypedDict


class FlowType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


class RefundPayment(TypedDict, total=False):
    id: str
    id_type: Literal["stellar", "external"]
    amount: str
    fee: str


class Refunds(TypedDict, total=False):
    amount_refunded: str
    amount_fee: str
    payments: list[RefundPayment]


class AnchorTransaction(TypedDict, total=False):
    """GET /transaction(s) item. The watcher only reads `id` and `status`."""

    id: str
    kind: str
    status: str
    status_eta: int
    kyc_verified: bool
    more_info_url: str
    amount_in: str
    amount_in_asset: str
    amount_out: str
    amount_out_asset: str
    amount_fee: str
    amount_fee_asset: str
    quote_id: str
    started_at: str
    updated_at: str
    completed_at: str
    stellar_transaction_id: str
    external_transaction_id: str
    message: str
    refunds: Refunds
    # deposit
    from_: str
    to: str
    deposit_memo: str
    deposit_memo_type: str
    claimable_balance_id: str
    # withdrawal
    withdraw_memo: str
    withdraw_memo_type: str
    withdraw_anchor_account: str
    # SEP-6 only
    required_info_message: str
    required_info_updates: dict[str, Any]
    required_customer_info_message: str
    required_customer_info_updates: list[str]
    instructions: dict[str, dict[str, str]]


class Sep24AssetInfo(TypedDict, total=False):
    enabled: bool
    min_amount: float
    max_amount: float
    fee_fixed: float
    fee_percent: float
    fee_minimum: float


class Sep24Info(TypedDict, total=False):
    deposit: dict[str, Sep24AssetInfo]
    withdraw: dict[str, Sep24AssetInfo]
    fee: dict[str, Any]
    features: dict[str, bool]


class Sep24PostResponse(TypedDict, total=False):
    type: Literal["interactive_customer_info_needed"]
    url: str
    id: str


class Sep6FieldInfo(TypedDict, total=False):
    description: str
    optional: bool
    choices: list[str]


class Sep6DepositInfo(TypedDict, total=False):
    enabled: bool
    authentication_required: bool
    fee_fixed: float
    fee_percent: float
    min_amount: float
    max_amount: float
    fields: dict[str, Sep6FieldInfo]


class Sep6WithdrawInfo(TypedDict, total=False):
    enabled: bool
    authentication_required: bool
    fee_fixed: float
    fee_percent: float
    min_amount: float
    max_amount: float
    types: dict[str, dict[str, dict[str, Sep6FieldInfo]]]


# "deposit-exchange" / "withdraw-exchange" are not valid identifiers; functional form.
Sep6Info = TypedDict(
    "Sep6Info",
    {
        "deposit": dict[str, Sep6DepositInfo],
        "deposit-exchange": dict[str, Sep6DepositInfo],
        "withdraw": dict[str, Sep6WithdrawInfo],
        "withdraw-exchange": dict[str, Sep6WithdrawInfo],
        "fee": dict[str, Any],
        "transactions": dict[str, Any],
        "transaction": dict[str, Any],
        "features": dict[str, bool],
    },
    total=False,
)


class Sep6TransferResponse(TypedDict, total=False):
    """Body of GET /deposit, /withdraw and their -exchange variants.

    A 403 `non_interactive_customer_info_needed` / `customer_info_status`
    answer is returned with the same shape (only `type`, `fields`, `status`,
    `more_info_url` set).
    """

    id: str
    how: str
    instructions: dict[str, dict[str, str]]
    eta: int
    min_amount: float
    max_amount: float
    fee_fixed: float
    fee_percent: float
    extra_info: dict[str, Any]
    account_id: str
    memo_type: str
    memo: str
    type: str
    fields: list[str]
    status: str
    more_info_url: str


class Sep38DeliveryMethod(TypedDict, total=False):
    name: str
    description: str


class Sep38AssetInfo(TypedDict, total=False):
    asset: str
    sell_delivery_methods: list[Sep38DeliveryMethod]
    buy_delivery_methods: list[Sep38DeliveryMethod]
    country_codes: list[str]


class Sep38Info(TypedDict, total=False):
    assets: list[Sep38AssetInfo]


class Sep38BuyAsset(TypedDict, total=False):
    asset: str
    price: str
    decimals: int


class Sep38PricesResponse(TypedDict, total=False):
    buy_assets: list[Sep38BuyAsset]


class Sep38FeeDetails(TypedDict, total=False):
    name: str
    description: str
    amount: str


class Sep38Fee(TypedDict, total=False):
    total: str
    asset: str
    details: list[Sep38FeeDetails]


class Sep38PriceResponse(TypedDict, total=False):
    total_price: str
    price: str
    sell_amount: str
    buy_amount: str
    fee: Sep38Fee


class Sep38QuoteResponse(TypedDict, total=False):
    id: str
    expires_at: str
    total_price: str
    price: str
    sell_asset: str
    sell_amount: str
    sell_delivery_method: str
    buy_asset: str
    buy_amount: str
    buy_delivery_method: str
    fee: Sep38Fee


class Sep38PriceContext(str, Enum):
    SEP6 = "sep6"
    SEP24 = "sep24"
    SEP31 = "sep31"
