# -*- coding: utf-8 -*-
"""SEP-10 web authentication: challenge, sign, exchange for a JWT."""

from __future__ import annotations

import structlog
from typing import Any, Callable, Dict, Optional, TypedDict, Union

from stellar_sdk import Keypair, ManageData, TransactionEnvelope
from stellar_sdk.exceptions import BadSignatureError
from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.auth.wallet_signer import DefaultSigner, WalletSigner
from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import (
    ChallengeTxnIncorrectSequenceError,
    ChallengeTxnInvalidSignatureError,
    ClientDomainWithMemoError,
    InvalidMemoError,
    MissingTokenError,
    ServerRequestFailedError,
)
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.utils.validation import is_memo_id, mask_account

CLIENT_DOMAIN_DATA_NAME = "client_domain"


class ChallengeResponse(TypedDict, total=False):
    """GET web_auth_endpoint body."""

    transaction: str
    network_passphrase: str


class Sep10:
    """Authenticates an account against an anchor's WEB_AUTH_ENDPOINT.

    Get one through Anchor.sep10(); it carries the endpoint, home domain and
    server signing key from the anchor's stellar.toml.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: AsyncHttpClient,
        *,
        web_auth_endpoint: str,
        home_domain: str,
        server_signing_key: Optional[str] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Application settings (uses settings.auth and settings.stellar).
            http_client: Async HTTP client (injected).
            web_auth_endpoint: WEB_AUTH_ENDPOINT from stellar.toml.
            home_domain: Anchor home domain, sent as home_domain.
            server_signing_key: SIGNING_KEY from stellar.toml; when set the
                challenge must carry a valid signature from it.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._http = http_client
        self.web_auth_endpoint = web_auth_endpoint
        self.home_domain = home_domain
        self.server_signing_key = server_signing_key
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def authenticate(
        self,
        account_kp: Keypair,
        *,
        wallet_signer: Optional[WalletSigner] = None,
        memo_id: Optional[Union[int, str]] = None,
        client_domain: Optional[str] = None,
    ) -> AuthToken:
        """Run the full SEP-10 flow and return the issued token.

        Args:
            account_kp: Account to authenticate. Must hold the secret unless
                wallet_signer signs elsewhere.
            wallet_signer: Signer for the client (and client domain) signatures.
                Defaults to DefaultSigner.
            memo_id: Memo identifying a shared-account user.
            client_domain: Wallet domain to attest; defaults to
                settings.auth.default_client_domain.

        Raises:
            InvalidMemoError: If memo_id is not a non-negative integer.
            ClientDomainWithMemoError: If both memo_id and a client domain are used.
            ChallengeTxnIncorrectSequenceError: If the challenge sequence is not 0.
            ChallengeTxnInvalidSignatureError: If the server signature is missing or wrong.
            MissingTokenError: If the anchor returns no token.
            InvalidTokenError: If the token cannot be decoded.
            ExpiredTokenError: If the token is already expired.
            ServerRequestFailedError: If a request to the anchor fails.
        """
        domain = client_domain or self._settings.auth.default_client_domain
        signer = wallet_signer if wallet_signer is not None else DefaultSigner()
        with bound_contextvars(
            sep10_account_masked=mask_account(account_kp.public_key),
            sep10_home_domain=self.home_domain,
        ):
            challenge = await self.challenge(account_kp, memo_id=memo_id, client_domain=domain)
            envelope = await self.sign(account_kp, challenge, signer)
            token = await self.get_token(envelope)
            self._logger.info("sep10_authenticated", sep10_expires_at=token.expires_at)
            return token

    async def challenge(
        self,
        account_kp: Keypair,
        *,
        memo_id: Optional[Union[int, str]] = None,
        client_domain: Optional[str] = None,
    ) -> ChallengeResponse:
        """GET the challenge transaction for account_kp."""
        if memo_id is not None and not is_memo_id(memo_id):
            raise InvalidMemoError()
        if memo_id is not None and client_domain:
            raise ClientDomainWithMemoError()

        params: Dict[str, Any] = {"account": account_kp.public_key}
        if memo_id is not None:
            params["memo"] = str(memo_id)
        if client_domain:
            params["client_domain"] = client_domain
        if self.home_domain:
            params["home_domain"] = self.home_domain

        data = await self._http.get(self.web_auth_endpoint, params=params)
        if not isinstance(data, dict) or not data.get("transaction"):
            raise ServerRequestFailedError(
                "Challenge response carries no transaction",
                url=self.web_auth_endpoint,
                response_data=data,
            )
        return ChallengeResponse(
            transaction=data["transaction"],
            network_passphrase=data.get("network_passphrase") or self._settings.stellar.passphrase,
        )

    async def sign(
        self,
        account_kp: Keypair,
        challenge: ChallengeResponse,
        wallet_signer: WalletSigner,
    ) -> TransactionEnvelope:
        """Validate the challenge and add the client (and client domain) signatures."""
        xdr = challenge["transaction"]
        passphrase = challenge.get("network_passphrase") or self._settings.stellar.passphrase
        envelope = TransactionEnvelope.from_xdr(xdr, passphrase)

        if envelope.transaction.sequence != 0:
            raise ChallengeTxnIncorrectSequenceError()
        if self.server_signing_key:
            self._verify_server_signature(envelope)

        if any(
            isinstance(op, ManageData) and op.data_name == CLIENT_DOMAIN_DATA_NAME
            for op in envelope.transaction.operations
        ):
            self._logger.debug("sep10_client_domain_signing")
            envelope = await wallet_signer.sign_with_domain_account(xdr, passphrase, account_kp)

        return wallet_signer.sign_with_client_account(envelope, account_kp)

    async def get_token(self, envelope: TransactionEnvelope) -> AuthToken:
        """POST the signed challenge and decode the returned JWT."""
        data = await self._http.post(
            self.web_auth_endpoint,
            json={"transaction": envelope.to_xdr()},
        )
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise MissingTokenError()
        return AuthToken.validated(token)

    def _verify_server_signature(self, envelope: TransactionEnvelope) -> None:
        server_kp = Keypair.from_public_key(self.server_signing_key)
        tx_hash = envelope.hash()
        for decorated in envelope.signatures:
            if decorated.signature_hint != server_kp.signature_hint():
                continue
            try:
                server_kp.verify(tx_hash, decorated.signature)
            except BadSignatureError:
                continue
            return
        self._logger.warning("sep10_invalid_server_signature")
        raise ChallengeTxnInvalidSignatureError()
