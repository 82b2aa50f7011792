"""Configuration subpackage."""

from stellar_wallet_sdk.config.config import (
    AnchorSettings,
    AppSettings,
    AuthSettings,
    DemoSettings,
    HttpSettings,
    LoggingSettings,
    Settings,
    StellarSettings,
    WatcherSettings,
    get_settings,
)

__all__ = [
    "AnchorSettings",
    "AppSettings",
    "AuthSettings",
    "DemoSettings",
    "HttpSettings",
    "LoggingSettings",
    "Settings",
    "StellarSettings",
    "WatcherSettings",
    "get_settings",
]
