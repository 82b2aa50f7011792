# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, cast

import jwt
import pytest
from stellar_sdk import Keypair

from stellar_wallet_sdk.anchor.schema import AnchorTransaction
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.models.auth_token import AuthToken

JWT_TEST_SECRET = "unit-test-signing-secret-of-sufficient-length"


@pytest.fixture
def settings() -> Settings:
    """Settings built without reading the environment or .env."""
    return Settings(_env_file=None)


@pytest.fixture
def account_kp() -> Keypair:
    """Client account used by tests."""
    return Keypair.random()


@pytest.fixture
def jwt_factory(account_kp: Keypair) -> Callable[..., str]:
    """Encode a SEP-10 style JWT; claims can be overridden or removed (value None)."""

    def _build(**overrides: Any) -> str:
        now = int(time.time())
        claims: dict[str, Any] = {
            "iss": "https://testanchor.stellar.org/auth",
            "sub": account_kp.public_key,
            "iat": now,
            "exp": now + 3600,
        }
        claims.update(overrides)
        claims = {k: v for k, v in claims.items() if v is not None}
        return jwt.encode(claims, JWT_TEST_SECRET, algorithm="HS256")

    return _build


@pytest.fixture
def auth_token(jwt_factory: Callable[..., str]) -> AuthToken:
    return AuthToken.from_jwt(jwt_factory())


@pytest.fixture
def make_transaction() -> Callable[..., AnchorTransaction]:
    """Build a transfer server transaction: make_transaction(0, "incomplete") -> id "0"."""

    def _build(i: int | str, status: str, **extra: Any) -> AnchorTransaction:
        tx: dict[str, Any] = {
            "id": str(i),
            "kind": "deposit",
            "status": status,
            "started_at": "2026-10-19T12:00:00Z",
        }
        tx.update(extra)
        return cast(AnchorTransaction, tx)

    return _build
