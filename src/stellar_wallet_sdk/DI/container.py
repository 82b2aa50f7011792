# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from stellar_wallet_sdk.clients.http import AsyncHttpClient
from stellar_wallet_sdk.clients.toml_resolver import StellarTomlResolver
from stellar_wallet_sdk.config import get_settings
from stellar_wallet_sdk.wallet import Wallet


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP client, TOML resolver and Wallet."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    toml_resolver = providers.Singleton(
        StellarTomlResolver,
        http_client=http_client,
        settings=config,
    )

    wallet = providers.Singleton(
        Wallet,
        settings=config,
        http_client=http_client,
        toml_resolver=toml_resolver,
    )
