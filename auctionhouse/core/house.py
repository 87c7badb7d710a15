"""
Auction House - The operation surface, wired from one configuration.

Builds the clock, ledgers, escrow, settlement engine, registry, query
layer and event log, and exposes every operation a caller or indexer
needs. Collaborators default to the in-memory implementations; pass real
ones to host the house on another ledger.
"""

from typing import List, Optional, Tuple

from auctionhouse.core.clock import Clock, ManualClock
from auctionhouse.core.config import AuctionConfig
from auctionhouse.core.errors import AuctionError
from auctionhouse.core.escrow import EscrowLedger
from auctionhouse.core.events import EventLog
from auctionhouse.core.ledgers import (
    AssetLedger,
    AssetRef,
    InMemoryAssetLedger,
    InMemoryPaymentLedger,
    PaymentLedger,
)
from auctionhouse.core.query import AuctionQueries, AuctionStatus
from auctionhouse.core.registry import Auction, AuctionRegistry
from auctionhouse.core.settlement import SettlementEngine, SettlementReceipt


class AuctionHouse:
    """
    Auction house with escrowed bids and royalty settlement.

    Attributes:
        config: Active rule set
        clock: Block clock
        assets: Asset-ownership ledger
        payments: Native-currency ledger
        escrow: Escrow bookkeeping
        events: Hash-chained event log
        settlement: Settlement engine
        registry: Auction state machine
        queries: Read-only views
    """

    def __init__(
        self,
        config: Optional[AuctionConfig] = None,
        clock: Optional[Clock] = None,
        assets: Optional[AssetLedger] = None,
        payments: Optional[PaymentLedger] = None,
    ):
        self.config = config or AuctionConfig()
        self.clock = clock if clock is not None else ManualClock()
        self.assets = assets if assets is not None else InMemoryAssetLedger()
        self.payments = payments if payments is not None else InMemoryPaymentLedger()

        self.escrow = EscrowLedger()
        self.events = EventLog()
        self.settlement = SettlementEngine(self.payments, self.config.custody_identity)
        self.registry = AuctionRegistry(
            config=self.config,
            clock=self.clock,
            assets=self.assets,
            payments=self.payments,
            escrow=self.escrow,
            settlement=self.settlement,
            events=self.events,
        )
        self.queries = AuctionQueries(self.registry, self.escrow, self.clock, self.config)

    # =========================================================================
    # Mutating Operations
    # =========================================================================

    def create_auction(
        self,
        seller: str,
        asset_ref: AssetRef,
        duration: int,
        reserve_price: int,
        royalty_bps: int,
        royalty_recipient: str,
    ) -> Tuple[Optional[int], Optional[AuctionError]]:
        return self.registry.create_auction(
            seller, asset_ref, duration, reserve_price, royalty_bps, royalty_recipient
        )

    def bid(self, auction_id: int, amount: int, bidder: str) -> Tuple[bool, Optional[AuctionError]]:
        return self.registry.bid(auction_id, amount, bidder)

    def end_auction(
        self,
        auction_id: int,
        asset_ref: AssetRef,
        caller: str,
    ) -> Tuple[Optional[SettlementReceipt], Optional[AuctionError]]:
        return self.registry.end_auction(auction_id, asset_ref, caller)

    def cancel_auction(
        self,
        auction_id: int,
        asset_ref: AssetRef,
        caller: str,
    ) -> Tuple[bool, Optional[AuctionError]]:
        return self.registry.cancel_auction(auction_id, asset_ref, caller)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_auction(self, auction_id: int) -> Optional[Auction]:
        return self.queries.get_auction(auction_id)

    def get_min_bid(self, auction_id: int) -> Optional[int]:
        return self.queries.get_min_bid(auction_id)

    def get_highest_bid(self, auction_id: int) -> Optional[int]:
        return self.queries.get_highest_bid(auction_id)

    def get_escrow(self, auction_id: int, bidder: str) -> int:
        return self.queries.get_escrow(auction_id, bidder)

    def get_status(self, auction_id: int) -> Optional[AuctionStatus]:
        return self.queries.get_status(auction_id)

    def get_auction_count(self) -> int:
        return self.queries.get_auction_count()

    def list_auctions(self, active_only: bool = False) -> List[Auction]:
        return self.queries.list_auctions(active_only)

    def stats(self) -> dict:
        """Combined registry, escrow, settlement and log statistics."""
        return {
            "block": self.clock.now(),
            "registry": self.registry.stats(),
            "escrow": self.escrow.stats(),
            "settlement": self.settlement.stats(),
            "events": len(self.events),
        }
