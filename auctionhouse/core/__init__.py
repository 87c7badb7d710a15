"""Auction registry, escrow, settlement and queries"""
from auctionhouse.core.config import AuctionConfig, load_config
from auctionhouse.core.errors import AuctionError, CollaboratorError, SettlementError
from auctionhouse.core.clock import Clock, ManualClock
from auctionhouse.core.ledgers import (
    AssetRef,
    AssetLedger,
    PaymentLedger,
    InMemoryAssetLedger,
    InMemoryPaymentLedger,
)
from auctionhouse.core.escrow import EscrowLedger
from auctionhouse.core.events import EventLog
from auctionhouse.core.settlement import SettlementEngine, SettlementReceipt, split_payment
from auctionhouse.core.registry import Auction, AuctionRegistry, AuctionState, minimum_bid
from auctionhouse.core.query import AuctionQueries, AuctionStatus
from auctionhouse.core.house import AuctionHouse

__all__ = [
    "AuctionConfig",
    "load_config",
    "AuctionError",
    "CollaboratorError",
    "SettlementError",
    "Clock",
    "ManualClock",
    "AssetRef",
    "AssetLedger",
    "PaymentLedger",
    "InMemoryAssetLedger",
    "InMemoryPaymentLedger",
    "EscrowLedger",
    "EventLog",
    "SettlementEngine",
    "SettlementReceipt",
    "split_payment",
    "Auction",
    "AuctionRegistry",
    "AuctionState",
    "minimum_bid",
    "AuctionQueries",
    "AuctionStatus",
    "AuctionHouse",
]
