# -*- coding: utf-8 -*-
"""Per-session bookkeeping for the transaction watcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stellar_wallet_sdk.anchor.schema import AnchorTransaction


@dataclass(slots=True)
class WatchRegistry:
    """What one watch session has reported and deliberately skipped.

    Owned by a single session; never shared between watches.
    """

    watching: bool = False
    seen: dict[str, AnchorTransaction] = field(default_factory=dict)
    """id -> last transaction reported to the caller."""
    ignored_on_first_poll: dict[str, AnchorTransaction] = field(default_factory=dict)
    """id -> transaction that was already past in-progress on the first poll (watch-all only)."""

    def last_status(self, tx_id: str) -> str | None:
        """Status of the last reported version of tx_id, or None if never reported."""
        previous = self.seen.get(tx_id)
        if previous is None:
            return None
        return previous.get("status")

    def has_seen(self, tx_id: str) -> bool:
        return tx_id in self.seen

    def record(self, transaction: AnchorTransaction) -> None:
        self.seen[transaction["id"]] = transaction

    def ignore(self, transaction: AnchorTransaction) -> None:
        self.ignored_on_first_poll[transaction["id"]] = transaction

    def is_ignored(self, tx_id: str) -> bool:
        return tx_id in self.ignored_on_first_poll

    def clear(self) -> None:
        """Stop watching and drop all history."""
        self.watching = False
        self.seen.clear()
        self.ignored_on_first_poll.clear()
