# -*- coding: utf-8 -*-
"""Unit tests for Anchor."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from stellar_wallet_sdk.anchor.anchor import Anchor
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import KYCServerNotFoundError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.models.toml_info import TomlInfo

FULL_TOML = TomlInfo(
    web_auth_endpoint="https://testanchor.stellar.org/auth",
    signing_key="GCHLHDBOKG2JWMJQBTLSL5XG6NO7ESXI2TAQKZXCXWXB5WI2X6W233PR",
    kyc_server="https://testanchor.stellar.org/sep12",
    transfer_server_sep24="https://testanchor.stellar.org/sep24",
)


def _anchor(settings: Settings, toml: TomlInfo, **kwargs: Any) -> tuple[Anchor, Any]:
    resolver: Any = SimpleNamespace(resolve=AsyncMock(return_value=toml))
    http: Any = SimpleNamespace()
    anchor = Anchor(
        "testanchor.stellar.org",
        settings=settings,
        http_client=http,
        toml_resolver=resolver,
        **kwargs,
    )
    return anchor, resolver


async def test_sep1_is_resolved_once_unless_refreshed(settings: Settings) -> None:
    anchor, resolver = _anchor(settings, FULL_TOML, allow_http=True)

    assert await anchor.sep1() is FULL_TOML
    assert await anchor.info() is FULL_TOML
    await anchor.sep1(should_refresh=True)

    assert resolver.resolve.await_count == 2
    resolver.resolve.assert_awaited_with("testanchor.stellar.org", True, should_refresh=True)


async def test_sep10_uses_toml_endpoint_and_signing_key(settings: Settings) -> None:
    anchor, _ = _anchor(settings, FULL_TOML)

    sep10 = await anchor.sep10()

    assert sep10.web_auth_endpoint == FULL_TOML.web_auth_endpoint
    assert sep10.server_signing_key == FULL_TOML.signing_key
    assert sep10.home_domain == "testanchor.stellar.org"


async def test_sep10_requires_web_auth_endpoint(settings: Settings) -> None:
    anchor, _ = _anchor(settings, TomlInfo())

    with pytest.raises(ValueError):
        await anchor.auth()


async def test_sep12_requires_kyc_server(settings: Settings, auth_token: AuthToken) -> None:
    anchor, _ = _anchor(settings, TomlInfo())

    with pytest.raises(KYCServerNotFoundError):
        await anchor.customer(auth_token)


def test_transfer_clients_are_created_once(settings: Settings) -> None:
    anchor, _ = _anchor(settings, FULL_TOML)

    assert anchor.sep24() is anchor.interactive()
    assert anchor.sep6() is anchor.transfer()


def test_language_defaults_to_settings(settings: Settings) -> None:
    default, _ = _anchor(settings, FULL_TOML)
    custom, _ = _anchor(settings, FULL_TOML, language="pt")

    assert default.language == "en"
    assert custom.language == "pt"
