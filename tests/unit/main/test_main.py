# -*- coding: utf-8 -*-
"""Unit tests for the demo runner's configuration checks."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from stellar_wallet_sdk import main as main_module
from stellar_wallet_sdk.config import Settings
from stellar_wallet_sdk.exceptions import MissingRequiredConfigError


def _patch_runner(monkeypatch: pytest.MonkeyPatch, settings: Settings) -> Mock:
    container = Mock()
    monkeypatch.setattr(main_module, "configure_logging", lambda: None)
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "Container", container)
    return container


async def test_run_requires_account_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None, demo={"home_domain": "testanchor.stellar.org", "asset_code": "USDC"})
    container = _patch_runner(monkeypatch, settings)

    with pytest.raises(MissingRequiredConfigError, match="DEMO__ACCOUNT_SECRET"):
        await main_module.run()

    container.assert_not_called()


async def test_run_reports_every_missing_value(monkeypatch: pytest.MonkeyPatch) -> None:
    container = _patch_runner(monkeypatch, Settings(_env_file=None))

    with pytest.raises(MissingRequiredConfigError) as exc_info:
        await main_module.run()

    assert str(exc_info.value) == "DEMO__HOME_DOMAIN, DEMO__ASSET_CODE, DEMO__ACCOUNT_SECRET"
    container.assert_not_called()
