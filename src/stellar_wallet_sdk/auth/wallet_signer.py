# -*- coding: utf-8 -*-
"""Signers used to sign SEP-10 challenge transactions."""

from __future__ import annotations

import structlog
from typing import Any, Callable, Dict, Optional, Protocol

from stellar_sdk import Keypair, TransactionEnvelope

from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.config import get_settings
from stellar_wallet_sdk.exceptions import DefaultSignerDomainAccountError, ServerRequestFailedError


class WalletSigner(Protocol):
    """Signs challenges with the client account and, if requested, the client domain account."""

    def sign_with_client_account(
        self, envelope: TransactionEnvelope, account_kp: Keypair
    ) -> TransactionEnvelope: ...

    async def sign_with_domain_account(
        self,
        transaction_xdr: str,
        network_passphrase: str,
        account_kp: Keypair,
    ) -> TransactionEnvelope: ...


class DefaultSigner:
    """Signs with the account keypair; cannot provide a client domain signature."""

    def sign_with_client_account(
        self, envelope: TransactionEnvelope, account_kp: Keypair
    ) -> TransactionEnvelope:
        envelope.sign(account_kp)
        return envelope

    async def sign_with_domain_account(
        self,
        transaction_xdr: str,
        network_passphrase: str,
        account_kp: Keypair,
    ) -> TransactionEnvelope:
        raise DefaultSignerDomainAccountError()


class DomainSigner(DefaultSigner):
    """Gets the client domain signature from a remote signing server.

    The server receives {"transaction", "network_passphrase"} and answers
    with {"transaction": <signed XDR>}.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        *,
        http_client: Optional[AsyncHttpClient] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the signer.

        Args:
            url: Signing server endpoint.
            headers: Extra headers for the signing request (e.g. its own Authorization).
            http_client: Client to use; a short-lived one is created per request if None.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._url = url
        self._headers = dict(headers or {})
        self._http = http_client
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def sign_with_domain_account(
        self,
        transaction_xdr: str,
        network_passphrase: str,
        account_kp: Keypair,
    ) -> TransactionEnvelope:
        body = {"transaction": transaction_xdr, "network_passphrase": network_passphrase}
        if self._http is not None:
            data = await self._http.post(self._url, json=body, headers=self._headers)
        else:
            async with AsyncHttpClient(get_settings()) as http:
                data = await http.post(self._url, json=body, headers=self._headers)

        signed = data.get("transaction") if isinstance(data, dict) else None
        if not isinstance(signed, str) or not signed:
            raise ServerRequestFailedError(
                "Signing server returned no transaction",
                url=self._url,
                response_data=data,
            )
        self._logger.debug("domain_signer_signed")
        return TransactionEnvelope.from_xdr(signed, network_passphrase)
