# -*- coding: utf-8 -*-
"""SEP-12 KYC customer API."""

from __future__ import annotations

import aiohttp
import structlog
from typing import Any, Callable, Dict, Mapping, Optional, TypedDict, Union, cast

from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.exceptions import CustomerNotFoundError, Sep9InfoRequiredError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.utils.case import compact_params
from stellar_wallet_sdk.utils.validation import mask_account

BinaryValue = Union[bytes, bytearray]


class CustomerField(TypedDict, total=False):
    type: str
    description: str
    choices: list[str]
    optional: bool


class ProvidedCustomerField(CustomerField, total=False):
    status: str
    error: str


class GetCustomerResponse(TypedDict, total=False):
    id: str
    status: str
    fields: Dict[str, CustomerField]
    provided_fields: Dict[str, ProvidedCustomerField]
    message: str


class AddCustomerResponse(TypedDict, total=False):
    id: str


class Sep12:
    """KYC server client bound to one auth token. Get one through Anchor.sep12()."""

    def __init__(
        self,
        auth_token: AuthToken,
        base_url: str,
        http_client: AsyncHttpClient,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._auth_token = auth_token
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._headers = auth_token.authorization_header
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get_customer(
        self,
        *,
        id: Optional[str] = None,
        type: Optional[str] = None,
        memo: Optional[str] = None,
        lang: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> GetCustomerResponse:
        """GET /customer: status and required fields of the customer.

        Raises:
            CustomerNotFoundError: If the response has no customer id.
        """
        params = compact_params(
            {"id": id, "type": type, "memo": memo, "lang": lang, "transaction_id": transaction_id}
        )
        data = await self._http.get(f"{self._base_url}/customer", params=params, headers=self._headers)
        if not isinstance(data, dict) or not data.get("id"):
            raise CustomerNotFoundError(params)
        return cast(GetCustomerResponse, data)

    async def add(
        self,
        sep9_info: Optional[Mapping[str, Any]] = None,
        sep9_binary_info: Optional[Mapping[str, BinaryValue]] = None,
        *,
        type: Optional[str] = None,
        memo: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> AddCustomerResponse:
        """PUT /customer to register a new customer."""
        fields: Dict[str, Any] = {}
        if type:
            fields["type"] = type
        fields.update(sep9_info or {})
        if memo:
            fields["memo"] = memo
        if transaction_id:
            fields["transaction_id"] = transaction_id
        return await self._put(fields, sep9_binary_info)

    async def update(
        self,
        sep9_info: Optional[Mapping[str, Any]] = None,
        sep9_binary_info: Optional[Mapping[str, BinaryValue]] = None,
        *,
        id: Optional[str] = None,
        type: Optional[str] = None,
        memo: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> AddCustomerResponse:
        """PUT /customer to update an existing customer.

        Raises:
            Sep9InfoRequiredError: If neither sep9_info nor sep9_binary_info has fields.
        """
        if not sep9_info and not sep9_binary_info:
            raise Sep9InfoRequiredError()
        fields: Dict[str, Any] = {}
        if id:
            fields["id"] = id
        if type:
            fields["type"] = type
        if memo:
            fields["memo"] = memo
        if transaction_id:
            fields["transaction_id"] = transaction_id
        fields.update(sep9_info or {})
        return await self._put(fields, sep9_binary_info)

    async def delete(self, account_address: Optional[str] = None, memo: Optional[str] = None) -> None:
        """DELETE /customer/{account}; defaults to the token's account."""
        account = account_address or self._auth_token.account
        with bound_contextvars(sep12_account_masked=mask_account(account)):
            await self._http.delete(
                f"{self._base_url}/customer/{account}",
                json={"memo": memo} if memo else None,
                headers=self._headers,
            )
            self._logger.info("sep12_customer_deleted")

    async def _put(
        self,
        fields: Dict[str, Any],
        binary: Optional[Mapping[str, BinaryValue]],
    ) -> AddCustomerResponse:
        url = f"{self._base_url}/customer"
        if binary:
            # SEP-12: binary fields go after the text fields.
            form = aiohttp.FormData()
            for k, v in fields.items():
                form.add_field(k, str(v))
            for k, b in binary.items():
                form.add_field(k, bytes(b), filename=k, content_type="application/octet-stream")
            data = await self._http.put(url, data=form, headers=self._headers)
        else:
            data = await self._http.put(url, json=fields, headers=self._headers)
        response = cast(AddCustomerResponse, data if isinstance(data, dict) else {})
        self._logger.info("sep12_customer_put", sep12_customer_id=response.get("id"), sep12_binary=bool(binary))
        return response
