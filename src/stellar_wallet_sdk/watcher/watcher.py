# -*- coding: utf-8 -*-
"""Transaction watcher: polls a transfer server and reports new or changed transactions.

Two modes:

* watch_all_transactions: every transaction of one asset. The first poll
  reports only in-progress transactions (plus the watchlist); later polls
  report status changes, new in-progress transactions and transactions that
  reached a final status between two polls.
* watch_one_transaction: a single transaction id, until it reaches a final
  status.

Each watch call creates a session that owns its registry, its timer and its
poll tasks. Polling runs on the caller's event loop; callbacks are invoked
synchronously from it.
"""

from __future__ import annotations

import asyncio
import structlog
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable, Optional, Protocol, Union

from structlog.contextvars import bound_contextvars

from stellar_wallet_sdk.models.auth_token import AuthToken
from stellar_wallet_sdk.watcher.registry import WatchRegistry
from stellar_wallet_sdk.watcher.status import (
    StatusClass,
    TransactionStatus,
    classify_status,
)

if TYPE_CHECKING:
    from stellar_wallet_sdk.anchor.schema import AnchorTransaction

OnMessage = Callable[["AnchorTransaction"], None]
OnSuccess = Callable[["AnchorTransaction"], None]
OnError = Callable[[Union["AnchorTransaction", Exception]], None]

# Unseen transactions with one of these statuses are reported on a later poll
# unless they were already final on the first poll.
_LATE_FINAL_STATUSES: frozenset[str] = frozenset(
    {
        TransactionStatus.COMPLETED.value,
        TransactionStatus.REFUNDED.value,
        TransactionStatus.EXPIRED.value,
        TransactionStatus.ERROR.value,
    }
)


class WatcherSepType(str, Enum):
    """Transfer protocol the watched transactions belong to."""

    SEP6 = "SEP6"
    SEP24 = "SEP24"


class SessionState(str, Enum):
    """Watch session lifecycle state."""

    INITIAL = "INITIAL"
    """Created; first poll not started yet."""
    POLLING = "POLLING"
    """At least one poll cycle started; further cycles are retries."""
    STOPPED = "STOPPED"
    """stop() called; registry cleared, no more callbacks."""


class TransferService(Protocol):
    """What the watcher needs from Sep6 / Sep24."""

    async def get_transactions_for_asset(
        self,
        auth_token: AuthToken,
        asset_code: str,
        *,
        kind: Optional[str] = None,
        no_older_than: Optional[str] = None,
        limit: Optional[int] = None,
        paging_id: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> list[AnchorTransaction]: ...

    async def get_transaction_by(
        self,
        auth_token: AuthToken,
        *,
        id: Optional[str] = None,
        stellar_transaction_id: Optional[str] = None,
        external_transaction_id: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> AnchorTransaction: ...


@dataclass(frozen=True, slots=True)
class WatcherResponse:
    """Control handle returned by the watch calls. Usable before the first poll resolves."""

    refresh: Callable[[], None]
    """Poll now (no-op once stopped)."""
    stop: Callable[[], None]
    """Cancel the pending poll and drop history. Idempotent."""


class _PollSession(ABC):
    """One watch: a registry, at most one pending timer and the poll tasks it started."""

    def __init__(
        self,
        key: Hashable,
        timeout_ms: int,
        on_error: OnError,
        on_stopped: Callable[[_PollSession], None],
        logger: Any,
        log_context: dict[str, Any],
    ) -> None:
        self.key = key
        self.registry = WatchRegistry()
        self.state = SessionState.INITIAL
        self._timeout_ms = timeout_ms
        self._on_error = on_error
        self._on_stopped = on_stopped
        self._logger = logger
        self._log_context = log_context
        self._loop = asyncio.get_running_loop()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def watching(self) -> bool:
        return self.registry.watching

    def response(self) -> WatcherResponse:
        return WatcherResponse(refresh=self.refresh, stop=self.stop)

    def start(self) -> None:
        self.registry.watching = True
        self._logger.info("watcher_started", watcher_timeout_ms=self._timeout_ms, **self._log_context)
        self._start_cycle()

    def refresh(self) -> None:
        if not self.watching:
            return
        self._cancel_timer()
        self._start_cycle()

    def stop(self) -> None:
        if self.state is SessionState.STOPPED:
            return
        self._cancel_timer()
        self.state = SessionState.STOPPED
        self.registry.clear()
        self._on_stopped(self)
        self._logger.info("watcher_stopped", **self._log_context)

    def _start_cycle(self) -> None:
        if not self.watching:
            return
        first = self.state is SessionState.INITIAL
        self.state = SessionState.POLLING
        task = self._loop.create_task(self._poll(first))
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _schedule_next(self) -> None:
        self._cancel_timer()
        self._timer = self._loop.call_later(self._timeout_ms / 1000, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self._start_cycle()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            # on_error itself raised; nothing left to deliver it to.
            self._logger.error(
                "watcher_callback_failed",
                error_type=type(exc).__name__,
                error_message=str(exc),
                **self._log_context,
            )

    async def _poll(self, first: bool) -> None:
        with bound_contextvars(**self._log_context):
            try:
                result = await self._fetch()
            except Exception as e:
                if not self.watching:
                    self._logger.debug("watcher_poll_discarded")
                    return
                self._logger.warning(
                    "watcher_fetch_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                self._on_error(e)
                return

            if not self.watching:
                self._logger.debug("watcher_poll_discarded")
                return

            try:
                reschedule = self._process(result, first)
            except Exception as e:
                self._logger.warning(
                    "watcher_process_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                self._on_error(e)
                return

            # a callback may have stopped the session
            if reschedule and self.watching:
                self._schedule_next()

    @abstractmethod
    async def _fetch(self) -> Any:
        """Fetch what this session watches from the transfer server."""

    @abstractmethod
    def _process(self, result: Any, first: bool) -> bool:
        """Report what changed; return True to schedule another poll."""


class AllTransactionsSession(_PollSession):
    """Watch every transaction of one asset."""

    def __init__(
        self,
        service: TransferService,
        auth_token: AuthToken,
        asset_code: str,
        on_message: OnMessage,
        on_error: OnError,
        *,
        watchlist: Iterable[str],
        timeout_ms: int,
        fetch_params: dict[str, Any],
        on_stopped: Callable[[_PollSession], None],
        logger: Any,
        log_context: dict[str, Any],
    ) -> None:
        super().__init__(
            ("all", asset_code),
            timeout_ms,
            on_error,
            on_stopped,
            logger,
            log_context,
        )
        self._service = service
        self._auth_token = auth_token
        self._asset_code = asset_code
        self._on_message = on_message
        self._watchlist = frozenset(watchlist)
        self._fetch_params = fetch_params

    async def _fetch(self) -> list[AnchorTransaction]:
        return await self._service.get_transactions_for_asset(
            self._auth_token,
            self._asset_code,
            **self._fetch_params,
        )

    def _should_report(self, tx: AnchorTransaction, first: bool) -> bool:
        tx_id = tx.get("id")
        status = tx.get("status")
        in_progress = classify_status(status) is StatusClass.IN_PROGRESS

        if tx_id in self._watchlist:
            return True

        if first:
            if not in_progress:
                self.registry.ignore(tx)
            return in_progress

        if self.registry.has_seen(tx_id):
            return self.registry.last_status(tx_id) != status

        if status in _LATE_FINAL_STATUSES and not self.registry.is_ignored(tx_id):
            return True

        return in_progress

    def _process(self, result: list[AnchorTransaction], first: bool) -> bool:
        with_id = [tx for tx in result if tx.get("id")]
        if len(with_id) != len(result):
            self._logger.warning(
                "watcher_transactions_without_id",
                watcher_skipped_count=len(result) - len(with_id),
            )
        reported = [tx for tx in with_id if self._should_report(tx, first)]
        self._logger.debug(
            "watcher_poll_completed",
            watcher_first_poll=first,
            watcher_fetched_count=len(result),
            watcher_reported_count=len(reported),
        )
        for tx in reported:
            if not self.watching:
                break
            self.registry.record(tx)
            if classify_status(tx.get("status")) is StatusClass.TERMINAL_ERROR:
                self._on_error(tx)
            else:
                self._on_message(tx)
        return True


class OneTransactionSession(_PollSession):
    """Watch one transaction id until it reaches a final status."""

    def __init__(
        self,
        service: TransferService,
        auth_token: AuthToken,
        asset_code: str,
        tx_id: str,
        on_message: OnMessage,
        on_success: OnSuccess,
        on_error: OnError,
        *,
        timeout_ms: int,
        lang: Optional[str],
        on_stopped: Callable[[_PollSession], None],
        logger: Any,
        log_context: dict[str, Any],
    ) -> None:
        super().__init__(
            ("one", asset_code, tx_id),
            timeout_ms,
            on_error,
            on_stopped,
            logger,
            log_context,
        )
        self._service = service
        self._auth_token = auth_token
        self._tx_id = tx_id
        self._on_message = on_message
        self._on_success = on_success
        self._lang = lang

    async def _fetch(self) -> AnchorTransaction:
        return await self._service.get_transaction_by(
            self._auth_token,
            id=self._tx_id,
            lang=self._lang,
        )

    def _process(self, result: AnchorTransaction, first: bool) -> bool:
        status = result.get("status")
        status_class = classify_status(status)

        if self.registry.has_seen(self._tx_id) and self.registry.last_status(self._tx_id) == status:
            return status_class is StatusClass.IN_PROGRESS

        self.registry.seen[self._tx_id] = result
        self._logger.debug(
            "watcher_transaction_changed",
            watcher_status=status,
            watcher_status_class=status_class.value,
        )
        if status_class is StatusClass.IN_PROGRESS:
            self._on_message(result)
            return True
        # final status: the session ends and leaves the watcher
        try:
            if status_class is StatusClass.TERMINAL_SUCCESS:
                self._on_success(result)
            else:
                self._on_error(result)
        finally:
            self.stop()
        return False


class Watcher:
    """Polls a SEP-6 or SEP-24 transfer server for transaction updates.

    Obtain one through Sep24.watcher() or Sep6.watcher(). Sessions are kept
    per watch key: asset_code for watch_all_transactions, (asset_code, id)
    for watch_one_transaction. Starting a watch on a key that is already
    being watched by this Watcher stops the previous session first.
    """

    def __init__(
        self,
        transfer_service: TransferService,
        sep_type: WatcherSepType,
        *,
        default_timeout_ms: int = 5000,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            transfer_service: Sep6 or Sep24 instance used to fetch transactions.
            sep_type: Which protocol transfer_service speaks.
            default_timeout_ms: Delay between polls when a watch call gives none.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._service = transfer_service
        self.sep_type = sep_type
        self._default_timeout_ms = default_timeout_ms
        self._sessions: dict[Hashable, _PollSession] = {}
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def active_keys(self) -> list[Hashable]:
        return [k for k, s in self._sessions.items() if s.watching]

    def watch_all_transactions(
        self,
        auth_token: AuthToken,
        asset_code: str,
        on_message: OnMessage,
        on_error: OnError,
        *,
        watchlist: Iterable[str] = (),
        timeout: Optional[int] = None,
        kind: Optional[str] = None,
        no_older_than: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> WatcherResponse:
        """Watch every transaction of asset_code and report new or changed ones.

        On the first poll only in-progress transactions are reported. Later
        polls report status changes, new in-progress transactions and new
        transactions that are already completed/refunded/expired/error.
        Transactions whose status classifies as an error go to on_error,
        everything else to on_message. Ids in watchlist are reported on every
        poll in which they appear.

        A failed fetch is passed to on_error and polling pauses until
        refresh() is called.

        Args:
            auth_token: SEP-10 token for the transfer server.
            asset_code: Asset whose transactions are watched.
            on_message: Called with each reported transaction.
            on_error: Called with failed-status transactions and fetch errors.
            watchlist: Transaction ids reported on every poll.
            timeout: Delay between polls in milliseconds.
            kind: Forwarded to GET /transactions.
            no_older_than: Forwarded to GET /transactions.
            lang: Forwarded to GET /transactions.

        Returns:
            WatcherResponse with refresh() and stop().
        """
        timeout_ms = timeout if timeout is not None else self._default_timeout_ms
        key = ("all", asset_code)
        self._stop_existing(key)
        session = AllTransactionsSession(
            self._service,
            auth_token,
            asset_code,
            on_message,
            on_error,
            watchlist=watchlist,
            timeout_ms=timeout_ms,
            fetch_params={"kind": kind, "no_older_than": no_older_than, "lang": lang},
            on_stopped=self._forget,
            logger=self._logger,
            log_context={
                "watcher_mode": "all",
                "watcher_sep": self.sep_type.value,
                "watcher_asset_code": asset_code,
            },
        )
        self._sessions[key] = session
        session.start()
        return session.response()

    def watch_one_transaction(
        self,
        auth_token: AuthToken,
        asset_code: str,
        id: str,
        on_message: OnMessage,
        on_success: OnSuccess,
        on_error: OnError,
        *,
        timeout: Optional[int] = None,
        lang: Optional[str] = None,
    ) -> WatcherResponse:
        """Watch a single transaction until it completes or fails.

        Each status change is reported once: in-progress through on_message
        (and polling continues), completed/refunded/expired through
        on_success, anything else through on_error. After a final status
        the session stops as if stop() were called. A failed fetch is passed
        to on_error and polling pauses until refresh() is called.

        Returns:
            WatcherResponse with refresh() and stop().
        """
        timeout_ms = timeout if timeout is not None else self._default_timeout_ms
        key = ("one", asset_code, id)
        self._stop_existing(key)
        session = OneTransactionSession(
            self._service,
            auth_token,
            asset_code,
            id,
            on_message,
            on_success,
            on_error,
            timeout_ms=timeout_ms,
            lang=lang,
            on_stopped=self._forget,
            logger=self._logger,
            log_context={
                "watcher_mode": "one",
                "watcher_sep": self.sep_type.value,
                "watcher_asset_code": asset_code,
                "watcher_transaction_id": id,
            },
        )
        self._sessions[key] = session
        session.start()
        return session.response()

    def stop_all(self) -> None:
        """Stop every session started by this watcher."""
        for session in list(self._sessions.values()):
            session.stop()

    def _stop_existing(self, key: Hashable) -> None:
        existing = self._sessions.get(key)
        if existing is not None:
            existing.stop()

    def _forget(self, session: _PollSession) -> None:
        if self._sessions.get(session.key) is session:
            del self._sessions[session.key]
