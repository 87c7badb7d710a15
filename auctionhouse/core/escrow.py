"""
Escrow Ledger - Bookkeeping of bidder funds held by the auction house.

Entries are keyed by (auction_id, bidder). The ledger never moves money
itself: the registry moves funds through the payment ledger and records
the result here.

Invariant maintained by the registry:
    total_held(auction) == current highest bid   while the auction is active
    total_held(auction) == 0                     once it is ended/cancelled
"""

import threading
from typing import Dict, Tuple

from auctionhouse.utils.logger import get_logger

logger = get_logger("escrow")

EscrowKey = Tuple[int, str]


class EscrowLedger:
    """
    Per-auction escrow balances.

    All operations take the ledger lock, so a released entry can never be
    observed as non-zero by a concurrent reader.
    """

    def __init__(self):
        # (auction_id, bidder) -> held amount
        self.entries: Dict[EscrowKey, int] = {}
        self.total_deposited: int = 0
        self.total_released: int = 0
        self._lock = threading.Lock()

    # =========================================================================
    # Mutation
    # =========================================================================

    def hold(self, auction_id: int, bidder: str, amount: int) -> None:
        """
        Record funds received from bidder for auction_id.

        Replaces any existing entry. Bidders are refunded in full when
        outbid, so a live entry is only ever overwritten by a higher bid
        from the same bidder after their previous one was released.
        """
        if amount <= 0:
            raise ValueError(f"Escrow amount must be positive, got {amount}")

        with self._lock:
            self.entries[(auction_id, bidder)] = amount
            self.total_deposited += amount

        logger.debug(f"Escrow hold: auction={auction_id}, bidder={bidder}, amount={amount}")

    def release(self, auction_id: int, bidder: str) -> int:
        """
        Clear bidder's entry and return the amount it held (0 if none).

        Used both for outbid refunds and for settlement of the winner.
        """
        with self._lock:
            amount = self.entries.pop((auction_id, bidder), 0)
            self.total_released += amount

        if amount:
            logger.debug(f"Escrow release: auction={auction_id}, bidder={bidder}, amount={amount}")
        return amount

    # =========================================================================
    # Queries
    # =========================================================================

    def balance_of(self, auction_id: int, bidder: str) -> int:
        with self._lock:
            return self.entries.get((auction_id, bidder), 0)

    def total_held(self, auction_id: int) -> int:
        """Sum of all entries for one auction."""
        with self._lock:
            return sum(
                amount
                for (entry_auction, _), amount in self.entries.items()
                if entry_auction == auction_id
            )

    def stats(self) -> dict:
        """Get escrow statistics."""
        with self._lock:
            return {
                "open_entries": len(self.entries),
                "total_held": sum(self.entries.values()),
                "total_deposited": self.total_deposited,
                "total_released": self.total_released,
            }


__all__ = ["EscrowLedger"]
