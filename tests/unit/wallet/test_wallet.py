# -*- coding: utf-8 -*-
"""Unit tests for Wallet and the DI container."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from stellar_wallet_sdk.DI import Container
from stellar_wallet_sdk.anchor.anchor import Anchor
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import AllowHttpOnNonTestnetError
from stellar_wallet_sdk.wallet import Wallet


def _wallet(settings: Settings) -> tuple[Wallet, Any]:
    http: Any = SimpleNamespace(aclose=AsyncMock())
    resolver: Any = SimpleNamespace()
    return Wallet(settings, http, resolver), http


def test_anchor_inherits_settings(settings: Settings) -> None:
    wallet, _ = _wallet(settings)

    anchor = wallet.anchor("testanchor.stellar.org", language="es")

    assert isinstance(anchor, Anchor)
    assert anchor.home_domain == "testanchor.stellar.org"
    assert anchor.language == "es"
    assert anchor.allow_http is False


def test_http_is_allowed_on_testnet(settings: Settings) -> None:
    wallet, _ = _wallet(settings)

    assert wallet.anchor("localhost:8000", allow_http=True).allow_http is True


def test_http_is_refused_outside_testnet() -> None:
    wallet, _ = _wallet(Settings.from_env(_env_file=None, stellar={"network": "public"}))

    with pytest.raises(AllowHttpOnNonTestnetError):
        wallet.anchor("localhost:8000", allow_http=True)


async def test_context_manager_closes_http_client(settings: Settings) -> None:
    wallet, http = _wallet(settings)

    async with wallet:
        pass

    http.aclose.assert_awaited_once()


async def test_container_wires_a_single_wallet(settings: Settings) -> None:
    container = Container()
    container.config.override(settings)

    wallet = container.wallet()

    assert wallet is container.wallet()
    assert wallet.settings is settings
    await wallet.aclose()
