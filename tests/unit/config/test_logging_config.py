# -*- coding: utf-8 -*-
"""Unit tests for logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import structlog
from stellar_sdk import Keypair

from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.logging.config import REDACTED, configure_logging, redact_secrets


def test_redact_secrets_masks_known_keys_seeds_and_bearer_tokens() -> None:
    seed = Keypair.random().secret

    event = redact_secrets(
        None,
        "info",
        {
            "event": "sep10_authenticated",
            "token": "eyJhbGciOi",
            "note": f"loaded {seed}",
            "header": "Bearer abc.def.ghi",
            "account": "GABC",
        },
    )

    assert event["token"] == REDACTED
    assert seed not in event["note"]
    assert event["header"] == f"Bearer {REDACTED}"
    assert event["account"] == "GABC"
    assert event["event"] == "sep10_authenticated"


def test_configure_logging_writes_json_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "wallet.log"
    settings = Settings.from_env(
        _env_file=None,
        logging={"log_to_console": False, "log_to_file": True, "log_file_path": str(log_file)},
    )

    configure_logging(settings)
    structlog.get_logger("test").info("watcher_started", watcher_asset_code="USDC")
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    content = log_file.read_text(encoding="utf-8")
    assert '"event": "watcher_started"' in content
    assert '"stellar_network": "testnet"' in content
