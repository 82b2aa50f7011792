# -*- coding: utf-8 -*-
"""Dependency injection."""

from stellar_wallet_sdk.DI.container import Container

__all__ = ["Container"]
