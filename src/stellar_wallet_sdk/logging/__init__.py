"""Structured logging setup."""

from stellar_wallet_sdk.logging.config import configure_logging

__all__ = ["configure_logging"]
