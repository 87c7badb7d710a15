"""
Auction Registry - Lifecycle of escrowed English auctions.

State machine:

    ACTIVE --end_auction--> ENDED
    ACTIVE --cancel_auction--> CANCELLED

Terminal states are never left; records are kept forever as history.

Bidding rules:
- First bid must be at least the reserve price
- Later bids must beat the current bid by max(min_increment, increment_bps)
- The outbid bidder is refunded in full before the new bid is installed
- A bid with extension_window blocks or fewer remaining pushes the end
  back by extension_blocks (anti-snipe)

Concurrency:
Every auction id owns one lock. bid/end/cancel run their whole
read-validate-transfer-write sequence under it, collaborator calls
included, so two bids can never both beat the same current bid. The event is
appended before the lock is released. Different auctions never contend.
"""

import threading
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from auctionhouse.core.clock import Clock
from auctionhouse.core.config import AuctionConfig
from auctionhouse.core.errors import AuctionError
from auctionhouse.core.escrow import EscrowLedger
from auctionhouse.core.events import (
    AuctionCancelled,
    AuctionCreated,
    AuctionEnded,
    BidPlaced,
    EventLog,
)
from auctionhouse.core.ledgers import AssetLedger, AssetRef, PaymentLedger
from auctionhouse.core.settlement import SettlementEngine, SettlementReceipt
from auctionhouse.utils.logger import get_logger
from auctionhouse.utils.validation import (
    BPS_DENOMINATOR,
    validate_amount,
    validate_asset_ref,
    validate_bps,
    validate_duration,
    validate_identity,
)

logger = get_logger("registry")


# =============================================================================
# Data Structures
# =============================================================================


class AuctionState(IntEnum):
    """Lifecycle state of an auction."""
    ACTIVE = 0
    ENDED = 1       # Settled, asset delivered
    CANCELLED = 2   # Withdrawn by seller before any bid


@dataclass
class Auction:
    """
    One listing and its bidding state.

    Attributes:
        auction_id: Sequential id, never reused
        seller: Identity that listed the asset
        asset_ref: Item held in custody for the auction
        reserve_price: Minimum first bid (> 0)
        royalty_bps: Share of the final price for royalty_recipient
        royalty_recipient: Identity receiving the royalty
        start_time: Block the auction was created at
        end_time: Block from which bids are refused (anti-snipe may move it)
        current_bid: Highest accepted bid, 0 if none
        current_bidder: Identity of the highest bidder, None if none
        state: Lifecycle state
        bid_count: Accepted bids
        extension_count: Anti-snipe extensions applied
    """
    auction_id: int
    seller: str
    asset_ref: AssetRef
    reserve_price: int
    royalty_bps: int
    royalty_recipient: str
    start_time: int
    end_time: int
    current_bid: int = 0
    current_bidder: Optional[str] = None
    state: AuctionState = AuctionState.ACTIVE
    bid_count: int = 0
    extension_count: int = 0

    @property
    def active(self) -> bool:
        return self.state == AuctionState.ACTIVE

    @property
    def has_bids(self) -> bool:
        return self.current_bid > 0

    def is_expired(self, now: int) -> bool:
        return now >= self.end_time


def minimum_bid(auction: Auction, config: AuctionConfig) -> int:
    """Smallest amount the next bid on auction must reach."""
    if not auction.has_bids:
        return auction.reserve_price

    pct_increment = auction.current_bid * config.increment_bps // BPS_DENOMINATOR
    return auction.current_bid + max(config.min_increment, pct_increment)


# =============================================================================
# Auction Registry
# =============================================================================


class AuctionRegistry:
    """
    Owner of all auction records and their transitions.

    The custody identity holds listed assets and escrowed bids on behalf
    of the house.
    """

    def __init__(
        self,
        config: AuctionConfig,
        clock: Clock,
        assets: AssetLedger,
        payments: PaymentLedger,
        escrow: EscrowLedger,
        settlement: SettlementEngine,
        events: EventLog,
    ):
        self.config = config
        self.clock = clock
        self.assets = assets
        self.payments = payments
        self.escrow = escrow
        self.settlement = settlement
        self.events = events
        self.custody = config.custody_identity

        # Auction ID -> Auction
        self.auctions: Dict[int, Auction] = {}

        # Auction ID -> lock serializing bid/end/cancel
        self._locks: Dict[int, threading.Lock] = {}

        # Guards id allocation and the two maps above
        self._registry_lock = threading.Lock()
        self._next_id = 0

        logger.info(f"AuctionRegistry initialized with custody={self.custody}")

    def _lock_for(self, auction_id: int) -> Optional[threading.Lock]:
        with self._registry_lock:
            return self._locks.get(auction_id)

    # =========================================================================
    # Creation
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
        """
        List asset_ref for auction.

        Takes custody of the asset before the id is allocated.

        Args:
            seller: Caller listing the asset (must own it)
            asset_ref: Item to auction
            duration: Blocks until the auction ends
            reserve_price: Minimum first bid
            royalty_bps: Royalty share in basis points
            royalty_recipient: Identity receiving the royalty

        Returns:
            (auction_id, error) - auction_id is None on failure

        Raises:
            CollaboratorError: the asset ledger refused the custody transfer
        """
        for valid, err in (
            validate_identity(seller, "seller"),
            validate_asset_ref(asset_ref),
            validate_duration(duration),
            validate_amount(reserve_price, "reserve_price"),
            validate_bps(royalty_bps),
            validate_identity(royalty_recipient, "royalty_recipient"),
        ):
            if not valid:
                logger.debug(f"Rejected create_auction: {err}")
                return None, AuctionError.INVALID_INPUT

        if duration < self.config.min_duration:
            return None, AuctionError.INVALID_DURATION

        if royalty_bps > self.config.max_royalty_bps:
            return None, AuctionError.INVALID_PERCENT

        if reserve_price == 0:
            return None, AuctionError.BID_TOO_LOW

        self.assets.transfer_ownership(asset_ref, seller, self.custody)

        now = self.clock.now()
        with self._registry_lock:
            auction_id = self._next_id
            self._next_id += 1

            auction = Auction(
                auction_id=auction_id,
                seller=seller,
                asset_ref=asset_ref,
                reserve_price=reserve_price,
                royalty_bps=royalty_bps,
                royalty_recipient=royalty_recipient,
                start_time=now,
                end_time=now + duration,
            )
            self.auctions[auction_id] = auction
            self._locks[auction_id] = threading.Lock()

            # Bids resolve the lock through the registry lock, so the
            # created event precedes any event of this auction
            self.events.append(AuctionCreated(
                auction_id=auction_id,
                block=now,
                seller=seller,
                asset=str(asset_ref),
                reserve_price=reserve_price,
                royalty_bps=royalty_bps,
                royalty_recipient=royalty_recipient,
                end_block=auction.end_time,
            ))

        logger.info(
            f"Auction {auction_id} created: asset={asset_ref}, seller={seller}, "
            f"reserve={reserve_price}, ends at block {auction.end_time}"
        )
        return auction_id, None

    # =========================================================================
    # Bidding
    # =========================================================================

    def bid(
        self,
        auction_id: int,
        amount: int,
        bidder: str,
    ) -> Tuple[bool, Optional[AuctionError]]:
        """
        Place a bid, escrowing amount and refunding the outbid bidder.

        Returns:
            (success, error)

        Raises:
            CollaboratorError: the payment ledger refused a transfer; the
                auction is left exactly as it was
        """
        valid, err = validate_amount(amount)
        if valid:
            valid, err = validate_identity(bidder, "bidder")
        if not valid:
            logger.debug(f"Rejected bid on auction {auction_id}: {err}")
            return False, AuctionError.INVALID_INPUT

        lock = self._lock_for(auction_id)
        if lock is None:
            return False, AuctionError.AUCTION_NOT_ACTIVE

        with lock:
            auction = self.auctions[auction_id]
            if not auction.active:
                return False, AuctionError.AUCTION_NOT_ACTIVE

            now = self.clock.now()
            if auction.is_expired(now):
                return False, AuctionError.AUCTION_EXPIRED

            if bidder == auction.seller:
                return False, AuctionError.UNAUTHORIZED

            if amount < minimum_bid(auction, self.config):
                return False, AuctionError.BID_TOO_LOW

            previous_bidder = auction.current_bidder
            previous_amount = auction.current_bid

            self.payments.move_funds(bidder, self.custody, amount)

            refunded = 0
            if previous_bidder is not None:
                try:
                    self.payments.move_funds(self.custody, previous_bidder, previous_amount)
                except Exception:
                    logger.error(f"Refund to {previous_bidder} failed on auction {auction_id}, returning new bid")
                    self.payments.move_funds(self.custody, bidder, amount)
                    raise
                refunded = self.escrow.release(auction_id, previous_bidder)

            self.escrow.hold(auction_id, bidder, amount)
            auction.current_bid = amount
            auction.current_bidder = bidder
            auction.bid_count += 1

            extended = False
            if auction.end_time - now <= self.config.extension_window:
                auction.end_time += self.config.extension_blocks
                auction.extension_count += 1
                extended = True
                logger.info(f"Auction {auction_id} extended to block {auction.end_time} by late bid")

            self.events.append(BidPlaced(
                auction_id=auction_id,
                block=now,
                bidder=bidder,
                amount=amount,
                previous_bidder=previous_bidder,
                refunded=refunded,
                end_block=auction.end_time,
                extended=extended,
            ))

        logger.debug(f"Bid accepted: auction={auction_id}, bidder={bidder}, amount={amount}")
        return True, None

    # =========================================================================
    # Ending
    # =========================================================================

    def end_auction(
        self,
        auction_id: int,
        asset_ref: AssetRef,
        caller: str,
    ) -> Tuple[Optional[SettlementReceipt], Optional[AuctionError]]:
        """
        Close an expired auction. Anyone may call.

        With a winner: settle the winning bid, deliver the asset, clear
        the winner's escrow. Without: return the asset to the seller.

        Returns:
            (receipt, error) - receipt is None when there were no bids

        Raises:
            SettlementError: disbursement failed; auction stays active
            CollaboratorError: asset delivery failed; auction stays active
        """
        valid, err = validate_identity(caller, "caller")
        if not valid:
            logger.debug(f"Rejected end_auction on {auction_id}: {err}")
            return None, AuctionError.INVALID_INPUT

        lock = self._lock_for(auction_id)
        if lock is None:
            return None, AuctionError.AUCTION_NOT_ACTIVE

        with lock:
            auction = self.auctions[auction_id]
            if not auction.active:
                return None, AuctionError.AUCTION_NOT_ACTIVE

            if asset_ref != auction.asset_ref:
                return None, AuctionError.UNAUTHORIZED

            now = self.clock.now()
            if not auction.is_expired(now):
                return None, AuctionError.AUCTION_NOT_ENDED

            receipt = None
            winner = auction.current_bidder
            if winner is not None:
                receipt = self.settlement.settle(
                    auction_id,
                    auction.current_bid,
                    auction.royalty_bps,
                    auction.royalty_recipient,
                    auction.seller,
                )
                self.assets.transfer_ownership(auction.asset_ref, self.custody, winner)
                self.escrow.release(auction_id, winner)
                self.settlement.finalize(auction_id)
            else:
                self.assets.transfer_ownership(auction.asset_ref, self.custody, auction.seller)

            auction.state = AuctionState.ENDED
            self.events.append(AuctionEnded(
                auction_id=auction_id,
                block=now,
                caller=caller,
                seller=auction.seller,
                winner=winner,
                amount=receipt.amount if receipt else 0,
                royalty_amount=receipt.royalty_amount if receipt else 0,
                seller_amount=receipt.seller_amount if receipt else 0,
            ))

        if winner is not None:
            logger.info(f"Auction {auction_id} ended: winner={winner}, price={receipt.amount}")
        else:
            logger.info(f"Auction {auction_id} ended without bids, asset returned to {auction.seller}")
        return receipt, None

    def cancel_auction(
        self,
        auction_id: int,
        asset_ref: AssetRef,
        caller: str,
    ) -> Tuple[bool, Optional[AuctionError]]:
        """
        Withdraw an unbid auction. Seller only.

        Returns:
            (success, error)

        Raises:
            CollaboratorError: asset return failed; auction stays active
        """
        lock = self._lock_for(auction_id)
        if lock is None:
            return False, AuctionError.AUCTION_NOT_ACTIVE

        with lock:
            auction = self.auctions[auction_id]
            if not auction.active:
                return False, AuctionError.AUCTION_NOT_ACTIVE

            if caller != auction.seller or asset_ref != auction.asset_ref:
                return False, AuctionError.UNAUTHORIZED

            if auction.has_bids:
                return False, AuctionError.NO_BIDS

            self.assets.transfer_ownership(auction.asset_ref, self.custody, auction.seller)
            auction.state = AuctionState.CANCELLED
            self.events.append(AuctionCancelled(
                auction_id=auction_id,
                block=self.clock.now(),
                seller=auction.seller,
            ))

        logger.info(f"Auction {auction_id} cancelled by seller {caller}")
        return True, None

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, auction_id: int) -> Optional[Auction]:
        """Consistent copy of an auction record, None if unknown."""
        lock = self._lock_for(auction_id)
        if lock is None:
            return None
        with lock:
            return replace(self.auctions[auction_id])

    def count(self) -> int:
        """Number of auctions ever created (the next id)."""
        with self._registry_lock:
            return self._next_id

    def auction_ids(self) -> List[int]:
        with self._registry_lock:
            return sorted(self.auctions)

    # =========================================================================
    # Statistics
    # =========================================================================

    def stats(self) -> dict:
        """Get registry statistics."""
        records = [a for a in (self.get(i) for i in self.auction_ids()) if a is not None]
        return {
            "total_auctions": len(records),
            "active": sum(1 for a in records if a.state == AuctionState.ACTIVE),
            "ended": sum(1 for a in records if a.state == AuctionState.ENDED),
            "cancelled": sum(1 for a in records if a.state == AuctionState.CANCELLED),
            "escrowed": sum(a.current_bid for a in records if a.active),
        }


__all__ = [
    "AuctionState",
    "Auction",
    "AuctionRegistry",
    "minimum_bid",
]
