# -*- coding: utf-8 -*-
"""Domain models."""

from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.models.toml_info import (
    TomlCurrency,
    TomlDocumentation,
    TomlInfo,
    TomlPrincipal,
    TomlValidator,
    parse_toml,
)

__all__ = [
    "AuthToken",
    "TomlCurrency",
    "TomlDocumentation",
    "TomlInfo",
    "TomlPrincipal",
    "TomlValidator",
    "parse_toml",
]
