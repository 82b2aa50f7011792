# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, STELLAR__NETWORK.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from stellar_sdk import Network

NetworkName = Literal["testnet", "public", "futurenet"]

_PASSPHRASES: dict[str, str] = {
    "testnet": Network.TESTNET_NETWORK_PASSPHRASE,
    "public": Network.PUBLIC_NETWORK_PASSPHRASE,
    "futurenet": "Test SDF Future Network ; October 2022",
}

_HORIZON_URLS: dict[str, str] = {
    "testnet": "https://horizon-testnet.stellar.org",
    "public": "https://horizon.stellar.org",
    "futurenet": "https://horizon-futurenet.stellar.org",
}


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "stellar-wallet-sdk"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/stellar_wallet.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 14
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class HttpSettings(BaseSettings):
    """Transport configuration shared by every anchor request."""

    model_config = SettingsConfigDict(extra="ignore")

    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum number of attempts for retryable failures (429, 5xx, network).",
    )
    user_agent: str = Field(
        default="stellar-wallet-sdk-python",
        description="Value sent in the User-Agent header.",
    )


class StellarSettings(BaseSettings):
    """Stellar network selection (from env STELLAR__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    network: NetworkName = "testnet"
    network_passphrase: Optional[str] = Field(
        default=None,
        description="Overrides the passphrase derived from `network`.",
    )
    horizon_url: Optional[str] = Field(
        default=None,
        description="Overrides the Horizon URL derived from `network`.",
    )

    @computed_field
    @property
    def passphrase(self) -> str:
        """Network passphrase in effect."""
        return self.network_passphrase or _PASSPHRASES[self.network]

    @computed_field
    @property
    def horizon(self) -> str:
        """Horizon base URL in effect."""
        return (self.horizon_url or _HORIZON_URLS[self.network]).rstrip("/")


class AnchorSettings(BaseSettings):
    """Defaults applied to every Anchor created by the Wallet."""

    model_config = SettingsConfigDict(extra="ignore")

    language: str = Field(default="en", description="Default `lang` sent to anchors.")
    allow_http: bool = Field(
        default=False,
        description="Resolve stellar.toml over plain http (testnet only).",
    )
    toml_cache_ttl_seconds: float = Field(default=300.0, ge=0.0, le=86400.0)
    toml_cache_maxsize: int = Field(default=256, ge=1, le=10000)


class AuthSettings(BaseSettings):
    """SEP-10 defaults."""

    model_config = SettingsConfigDict(extra="ignore")

    default_client_domain: Optional[str] = Field(
        default=None,
        description="client_domain sent with every challenge request unless overridden.",
    )


class WatcherSettings(BaseSettings):
    """Transaction watcher defaults."""

    model_config = SettingsConfigDict(extra="ignore")

    timeout_ms: int = Field(
        default=5000,
        ge=1,
        le=3_600_000,
        description="Delay between two polls of the transfer server, in milliseconds.",
    )


class DemoSettings(BaseSettings):
    """Inputs for `python -m stellar_wallet_sdk.main` (from env DEMO__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    home_domain: str = ""
    asset_code: str = ""
    account_secret: Optional[SecretStr] = None
    kind: Optional[Literal["deposit", "withdrawal"]] = None


class Settings(BaseSettings):
    """Root configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. WATCHER__TIMEOUT_MS, ANCHOR__LANGUAGE.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    stellar: StellarSettings = Field(default_factory=StellarSettings)
    anchor: AnchorSettings = Field(default_factory=AnchorSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    demo: DemoSettings = Field(default_factory=DemoSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(watcher={"timeout_ms": 1000})
        - from_env(stellar={"network": "public"})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from stellar_wallet_sdk.config import get_settings

        settings = get_settings()
        passphrase = settings.stellar.passphrase
    """
    return Settings()
