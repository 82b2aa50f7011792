"""AuthToken: SEP-10 JWT issued by an anchor's web auth endpoint.

The wallet never verifies the anchor's signature on the JWT (it does not hold
the key); it only reads the claims to know who the token is for and when it
expires.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import jwt

from stellar_wallet_sdk.exceptions import ExpiredTokenError, InvalidTokenError


@dataclass(frozen=True, slots=True)
class AuthToken:
    token: str
    """Raw JWT, sent as `Authorization: Bearer <token>`."""
    issuer: str | None
    principal_account: str
    """`sub` claim: `G...`, `M...` or `G...:memo`."""
    issued_at: int | None
    expires_at: int | None
    client_domain: str | None = None

    @property
    def account(self) -> str:
        return self.principal_account.split(":")[0]

    @property
    def memo(self) -> str | None:
        parts = self.principal_account.split(":")
        if len(parts) != 2:
            return None
        return parts[1]

    def is_expired(self, *, now: float | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at < int(now if now is not None else time.time())

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    @classmethod
    def from_jwt(cls, token: str) -> AuthToken:
        """Decode claims from a JWT without verifying its signature.

        Raises:
            InvalidTokenError: If the token cannot be decoded or has no `sub`.
        """
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        sub = claims.get("sub")
        if not isinstance(sub, str) or not sub:
            raise InvalidTokenError()
        return cls(
            token=token,
            issuer=claims.get("iss"),
            principal_account=sub,
            issued_at=_int_claim(claims.get("iat")),
            expires_at=_int_claim(claims.get("exp")),
            client_domain=claims.get("client_domain"),
        )

    @classmethod
    def validated(cls, token: str, *, now: float | None = None) -> AuthToken:
        """Decode a freshly issued token and reject it if it already expired.

        Raises:
            InvalidTokenError: If the token cannot be decoded.
            ExpiredTokenError: If `exp` lies in the past.
        """
        auth_token = cls.from_jwt(token)
        if auth_token.is_expired(now=now):
            raise ExpiredTokenError(auth_token.expires_at or 0)
        return auth_token


def _int_claim(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None
