# -*- coding: utf-8 -*-
"""
Demo runner: authenticate with an anchor and watch its SEP-24 transactions.

Orchestrates: logging, settings, container, SEP-10 auth, watcher, shutdown (SIGINT or CancelledError).

Run with: python -m stellar_wallet_sdk.main
Required env: DEMO__HOME_DOMAIN, DEMO__ASSET_CODE, DEMO__ACCOUNT_SECRET.

Notebook usage:
    from stellar_wallet_sdk.main import run
    await run()  # Interrupt kernel to stop; the watcher stops on CancelledError.
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from typing import Any

from stellar_sdk import Keypair

from stellar_wallet_sdk.DI import Container
from stellar_wallet_sdk.config import Settings, get_settings
from stellar_wallet_sdk.exceptions import MissingRequiredConfigError
from stellar_wallet_sdk.logging.config import configure_logging
from stellar_wallet_sdk.utils import mask_account


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


def _require_demo_settings(settings: Settings, logger: Any) -> None:
    demo = settings.demo
    missing = [
        name
        for name, value in (
            ("DEMO__HOME_DOMAIN", demo.home_domain.strip()),
            ("DEMO__ASSET_CODE", demo.asset_code.strip()),
            ("DEMO__ACCOUNT_SECRET", demo.account_secret.get_secret_value() if demo.account_secret else ""),
        )
        if not value
    ]
    if missing:
        logger.error("main_missing_config", missing=missing)
        raise MissingRequiredConfigError(", ".join(missing))


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    _require_demo_settings(settings, logger)
    demo = settings.demo
    account_secret = demo.account_secret
    if account_secret is None:
        raise MissingRequiredConfigError("DEMO__ACCOUNT_SECRET")

    container = Container()
    wallet = container.wallet()
    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)

    account_kp = Keypair.from_secret(account_secret.get_secret_value())
    anchor = wallet.anchor(demo.home_domain.strip())
    try:
        sep10 = await anchor.sep10()
        auth_token = await sep10.authenticate(account_kp)
        logger.info(
            "main_authenticated",
            account_masked=mask_account(auth_token.account),
            home_domain=anchor.home_domain,
        )

        def on_message(tx: Any) -> None:
            logger.info("main_transaction_update", transaction_id=tx.get("id"), status=tx.get("status"))

        def on_error(err: Any) -> None:
            if isinstance(err, Exception):
                logger.error("main_watch_failed", error_type=type(err).__name__, error_message=str(err))
            else:
                logger.warning("main_transaction_failed", transaction_id=err.get("id"), status=err.get("status"))

        watcher = anchor.sep24().watcher()
        handle = watcher.watch_all_transactions(
            auth_token,
            demo.asset_code.strip(),
            on_message,
            on_error,
            kind=demo.kind,
        )
        logger.info(
            "main_watching",
            asset_code=demo.asset_code.strip(),
            timeout_ms=settings.watcher.timeout_ms,
        )
        try:
            await shutdown_event.wait()
        finally:
            handle.stop()
            watcher.stop_all()
    finally:
        await wallet.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
