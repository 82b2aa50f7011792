# -*- coding: utf-8 -*-
"""Unit tests for Watcher.watch_all_transactions."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest

from stellar_wallet_sdk.anchor.schema import AnchorTransaction
from stellar_wallet_sdk.exceptions import ServerRequestFailedError
from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.watcher import Watcher, WatcherSepType

# Large enough that the timer never fires during a test; polls are driven by refresh().
NEVER_MS = 60_000


class _FakeTransferService:
    """Returns queued poll results in order; repeats the last one when the queue runs out."""

    def __init__(self, *results: Any) -> None:
        self._results = list(results)
        self.calls: list[dict[str, Any]] = []
        self.gate: asyncio.Event | None = None

    async def get_transactions_for_asset(
        self, auth_token: AuthToken, asset_code: str, **kwargs: Any
    ) -> list[AnchorTransaction]:
        self.calls.append({"asset_code": asset_code, **kwargs})
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(result, Exception):
            raise result
        return result

    async def get_transaction_by(self, auth_token: AuthToken, **kwargs: Any) -> AnchorTransaction:
        raise AssertionError("not used by watch_all_transactions")


async def _settle() -> None:
    """Let pending poll tasks run to completion."""
    for _ in range(5):
        await asyncio.sleep(0)


def _watcher(service: _FakeTransferService) -> Watcher:
    return Watcher(service, WatcherSepType.SEP24, default_timeout_ms=NEVER_MS)


def _ids(mock: Mock) -> list[str]:
    return [c.args[0]["id"] for c in mock.call_args_list]


async def test_first_poll_reports_only_in_progress_transactions(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService(
        [
            make_transaction(1, "pending_user_transfer_start"),
            make_transaction(2, "completed"),
            make_transaction(3, "error"),
            make_transaction(4, "incomplete"),
        ]
    )
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.stop()

    assert _ids(on_message) == ["1", "4"]
    on_error.assert_not_called()


async def test_unchanged_transactions_are_not_reported_twice(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService(
        [make_transaction(1, "pending_anchor")],
        [make_transaction(1, "pending_anchor")],
        [make_transaction(1, "pending_stellar")],
    )
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.refresh()
    await _settle()
    handle.refresh()
    await _settle()
    handle.stop()

    assert [c.args[0]["status"] for c in on_message.call_args_list] == [
        "pending_anchor",
        "pending_stellar",
    ]
    on_error.assert_not_called()


async def test_final_transactions_from_first_poll_stay_ignored(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    first = [make_transaction(1, "completed"), make_transaction(2, "refunded")]
    service = _FakeTransferService(first, first)
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.refresh()
    await _settle()
    handle.stop()

    on_message.assert_not_called()
    on_error.assert_not_called()


async def test_transaction_that_finished_between_polls_is_reported_once(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    late = make_transaction(9, "completed")
    service = _FakeTransferService([], [late], [late])
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.refresh()
    await _settle()
    handle.refresh()
    await _settle()
    handle.stop()

    assert _ids(on_message) == ["9"]
    on_error.assert_not_called()


async def test_new_error_transaction_on_retry_goes_to_on_error(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    failed = make_transaction(5, "error")
    service = _FakeTransferService([], [failed])
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.refresh()
    await _settle()
    handle.stop()

    on_message.assert_not_called()
    on_error.assert_called_once_with(failed)


async def test_new_in_progress_transaction_on_retry_is_reported(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService([], [make_transaction(7, "pending_user_transfer_start")])
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.refresh()
    await _settle()
    handle.stop()

    assert _ids(on_message) == ["7"]
    on_error.assert_not_called()


async def test_seen_transaction_moving_to_failure_status_goes_to_on_error(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService(
        [make_transaction(1, "pending_anchor")],
        [make_transaction(1, "too_large")],
    )
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.refresh()
    await _settle()
    handle.stop()

    assert _ids(on_message) == ["1"]
    on_error.assert_called_once()
    assert on_error.call_args.args[0]["status"] == "too_large"


async def test_watchlist_transactions_are_reported_on_every_poll(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    done = make_transaction(2, "completed")
    service = _FakeTransferService([done, make_transaction(3, "expired")])
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(
        auth_token, "USDC", on_message, on_error, watchlist=["2"]
    )
    await _settle()
    handle.refresh()
    await _settle()
    handle.stop()

    assert _ids(on_message) == ["2", "2"]
    on_error.assert_not_called()


async def test_empty_result_produces_no_callbacks(auth_token: AuthToken) -> None:
    service = _FakeTransferService([])
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.stop()

    assert len(service.calls) == 1
    on_message.assert_not_called()
    on_error.assert_not_called()


async def test_transactions_without_id_are_skipped(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    no_id: Any = {"status": "pending_anchor"}
    service = _FakeTransferService([no_id, make_transaction(1, "pending_anchor")])
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.stop()

    assert _ids(on_message) == ["1"]


async def test_filter_params_are_forwarded_to_fetch(auth_token: AuthToken) -> None:
    service = _FakeTransferService([])

    handle = _watcher(service).watch_all_transactions(
        auth_token,
        "SRT",
        Mock(),
        Mock(),
        kind="withdrawal",
        no_older_than="2026-01-01T00:00:00Z",
        lang="es",
    )
    await _settle()
    handle.stop()

    assert service.calls == [
        {
            "asset_code": "SRT",
            "kind": "withdrawal",
            "no_older_than": "2026-01-01T00:00:00Z",
            "lang": "es",
        }
    ]


async def test_fetch_failure_is_reported_and_polling_pauses(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    failure = ServerRequestFailedError("boom", status_code=500)
    service = _FakeTransferService(failure, [make_transaction(1, "pending_anchor")])
    on_message, on_error = Mock(), Mock()
    watcher = Watcher(service, WatcherSepType.SEP24)

    handle = watcher.watch_all_transactions(auth_token, "USDC", on_message, on_error, timeout=1)
    await asyncio.sleep(0.05)

    assert len(service.calls) == 1
    on_error.assert_called_once_with(failure)
    on_message.assert_not_called()

    handle.refresh()
    await _settle()
    handle.stop()

    assert _ids(on_message) == ["1"]


async def test_timer_polls_again_after_timeout(auth_token: AuthToken) -> None:
    service = _FakeTransferService([])
    watcher = Watcher(service, WatcherSepType.SEP24)

    handle = watcher.watch_all_transactions(auth_token, "USDC", Mock(), Mock(), timeout=1)
    await asyncio.sleep(0.05)
    handle.stop()

    assert len(service.calls) >= 2


async def test_stop_before_fetch_resolves_suppresses_callbacks(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService([make_transaction(1, "pending_anchor")])
    service.gate = asyncio.Event()
    on_message, on_error = Mock(), Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.stop()
    service.gate.set()
    await _settle()

    assert len(service.calls) == 1
    on_message.assert_not_called()
    on_error.assert_not_called()


async def test_stop_cancels_the_scheduled_poll(auth_token: AuthToken) -> None:
    service = _FakeTransferService([])
    watcher = Watcher(service, WatcherSepType.SEP24)

    handle = watcher.watch_all_transactions(auth_token, "USDC", Mock(), Mock(), timeout=5)
    await _settle()
    handle.stop()
    await asyncio.sleep(0.05)

    assert len(service.calls) == 1


async def test_stop_is_idempotent_and_refresh_after_stop_does_nothing(auth_token: AuthToken) -> None:
    service = _FakeTransferService([])
    watcher = _watcher(service)

    handle = watcher.watch_all_transactions(auth_token, "USDC", Mock(), Mock())
    await _settle()
    handle.stop()
    handle.stop()
    handle.refresh()
    await _settle()

    assert len(service.calls) == 1
    assert watcher.active_keys == []


async def test_fresh_watch_after_stop_starts_with_empty_history(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService([make_transaction(1, "pending_anchor")])
    watcher = _watcher(service)
    first_messages, second_messages = Mock(), Mock()

    handle = watcher.watch_all_transactions(auth_token, "USDC", first_messages, Mock())
    await _settle()
    handle.stop()
    handle = watcher.watch_all_transactions(auth_token, "USDC", second_messages, Mock())
    await _settle()
    handle.stop()

    assert _ids(first_messages) == ["1"]
    assert _ids(second_messages) == ["1"]


async def test_watching_same_asset_again_replaces_previous_session(auth_token: AuthToken) -> None:
    service = _FakeTransferService([])
    watcher = _watcher(service)

    old = watcher.watch_all_transactions(auth_token, "USDC", Mock(), Mock())
    await _settle()
    new = watcher.watch_all_transactions(auth_token, "USDC", Mock(), Mock())
    await _settle()
    old.refresh()
    await _settle()

    assert len(service.calls) == 2
    assert watcher.active_keys == [("all", "USDC")]
    new.stop()


async def test_stop_all_stops_every_session(auth_token: AuthToken) -> None:
    service = _FakeTransferService([])
    watcher = _watcher(service)

    watcher.watch_all_transactions(auth_token, "USDC", Mock(), Mock())
    watcher.watch_all_transactions(auth_token, "SRT", Mock(), Mock())
    await _settle()
    assert sorted(watcher.active_keys) == [("all", "SRT"), ("all", "USDC")]

    watcher.stop_all()

    assert watcher.active_keys == []


async def test_on_message_stopping_the_watch_halts_remaining_reports(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService(
        [make_transaction(1, "pending_anchor"), make_transaction(2, "pending_anchor")]
    )
    received: list[str] = []
    handle: Any = None

    def on_message(tx: AnchorTransaction) -> None:
        received.append(tx["id"])
        handle.stop()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, Mock())
    await _settle()

    assert received == ["1"]


async def test_callback_exception_is_passed_to_on_error(
    auth_token: AuthToken, make_transaction: Callable[..., AnchorTransaction]
) -> None:
    service = _FakeTransferService([make_transaction(1, "pending_anchor")])
    failure = RuntimeError("callback broke")
    on_message = Mock(side_effect=failure)
    on_error = Mock()

    handle = _watcher(service).watch_all_transactions(auth_token, "USDC", on_message, on_error)
    await _settle()
    handle.stop()

    on_error.assert_called_once_with(failure)


@pytest.mark.parametrize("sep_type", [WatcherSepType.SEP6, WatcherSepType.SEP24])
async def test_handle_is_usable_before_first_poll_resolves(
    auth_token: AuthToken, sep_type: WatcherSepType
) -> None:
    service = _FakeTransferService([])
    watcher = Watcher(service, sep_type, default_timeout_ms=NEVER_MS)

    handle = watcher.watch_all_transactions(auth_token, "USDC", Mock(), Mock())
    handle.stop()
    await _settle()

    assert watcher.active_keys == []
