"""
Query Layer - Read-only projections over auctions and escrow.

Nothing here mutates state. Unknown auction ids yield None, except for
escrow lookups which default to 0.
"""

from dataclasses import dataclass
from typing import List, Optional

from auctionhouse.core.clock import Clock
from auctionhouse.core.config import AuctionConfig
from auctionhouse.core.escrow import EscrowLedger
from auctionhouse.core.registry import Auction, AuctionRegistry, minimum_bid


@dataclass(frozen=True)
class AuctionStatus:
    """Point-in-time status of an auction."""
    active: bool
    ended: bool          # clock has reached end_time
    has_bids: bool
    blocks_remaining: int


class AuctionQueries:
    """Read-only views used by callers and indexers."""

    def __init__(
        self,
        registry: AuctionRegistry,
        escrow: EscrowLedger,
        clock: Clock,
        config: AuctionConfig,
    ):
        self.registry = registry
        self.escrow = escrow
        self.clock = clock
        self.config = config

    def get_auction(self, auction_id: int) -> Optional[Auction]:
        return self.registry.get(auction_id)

    def get_min_bid(self, auction_id: int) -> Optional[int]:
        """Reserve price if unbid, else current bid plus the required increment."""
        auction = self.registry.get(auction_id)
        if auction is None:
            return None
        return minimum_bid(auction, self.config)

    def get_highest_bid(self, auction_id: int) -> Optional[int]:
        auction = self.registry.get(auction_id)
        if auction is None:
            return None
        return auction.current_bid

    def get_escrow(self, auction_id: int, bidder: str) -> int:
        return self.escrow.balance_of(auction_id, bidder)

    def get_status(self, auction_id: int) -> Optional[AuctionStatus]:
        auction = self.registry.get(auction_id)
        if auction is None:
            return None

        now = self.clock.now()
        return AuctionStatus(
            active=auction.active,
            ended=auction.is_expired(now),
            has_bids=auction.has_bids,
            blocks_remaining=max(0, auction.end_time - now),
        )

    def get_auction_count(self) -> int:
        return self.registry.count()

    def list_auctions(self, active_only: bool = False) -> List[Auction]:
        records = [self.registry.get(i) for i in self.registry.auction_ids()]
        return [a for a in records if a is not None and (a.active or not active_only)]


__all__ = ["AuctionStatus", "AuctionQueries"]
