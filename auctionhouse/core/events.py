"""
Events - Structured records emitted once per mutating operation.

Events are pydantic models so indexers receive validated, JSON-ready
records. The EventLog is append-only and hash-chained:

    digest[n] = keccak256(digest[n-1] || canonical_json(event[n]))

with digest[-1] = 32 zero bytes. Each event is appended right after the
state mutation it describes, under the same auction lock, so log order
matches the order the mutations were applied. The log lock is a leaf lock.
"""

import threading
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from auctionhouse.crypto import GENESIS_DIGEST, bytes_to_hex, chain_digest, hex_to_bytes
from auctionhouse.utils.logger import get_logger

logger = get_logger("events")

# Fields filled in by the log, excluded from the hashed payload
_LOG_FIELDS = {"digest"}


# =============================================================================
# Event Records
# =============================================================================


class AuctionEvent(BaseModel):
    """Common envelope for every auction event."""
    model_config = ConfigDict(frozen=True)

    kind: str
    auction_id: int
    block: int
    sequence: int = -1
    prev_digest: str = ""
    digest: str = ""

    def payload(self) -> bytes:
        """Canonical bytes hashed into the chain."""
        return self.model_dump_json(exclude=_LOG_FIELDS).encode()


class AuctionCreated(AuctionEvent):
    kind: Literal["created"] = "created"
    seller: str
    asset: str
    reserve_price: int
    royalty_bps: int
    royalty_recipient: str
    end_block: int


class BidPlaced(AuctionEvent):
    kind: Literal["bid"] = "bid"
    bidder: str
    amount: int
    previous_bidder: Optional[str] = None
    refunded: int = 0
    end_block: int
    extended: bool = False


class AuctionEnded(AuctionEvent):
    kind: Literal["ended"] = "ended"
    caller: str
    seller: str
    winner: Optional[str] = None
    amount: int = 0
    royalty_amount: int = 0
    seller_amount: int = 0


class AuctionCancelled(AuctionEvent):
    kind: Literal["cancelled"] = "cancelled"
    seller: str


AnyEvent = Union[AuctionCreated, BidPlaced, AuctionEnded, AuctionCancelled]


# =============================================================================
# Event Log
# =============================================================================


class EventLog:
    """
    Append-only, hash-chained event log.

    Attributes:
        records: Events in emission order, sequence and digests filled in
        head: Hex digest of the last record (zero digest when empty)
    """

    def __init__(self):
        self.records: List[AuctionEvent] = []
        self.head: str = bytes_to_hex(GENESIS_DIGEST)
        self._lock = threading.Lock()

    def append(self, event: AuctionEvent) -> AuctionEvent:
        """Seal event into the chain and return the stored record."""
        with self._lock:
            sealed = event.model_copy(update={
                "sequence": len(self.records),
                "prev_digest": self.head,
            })
            digest = chain_digest(hex_to_bytes(self.head), sealed.payload())
            sealed = sealed.model_copy(update={"digest": bytes_to_hex(digest)})

            self.records.append(sealed)
            self.head = sealed.digest

        logger.debug(f"Event #{sealed.sequence} {sealed.kind} auction={sealed.auction_id}")
        return sealed

    def events(
        self,
        kind: Optional[str] = None,
        auction_id: Optional[int] = None,
    ) -> List[AuctionEvent]:
        """Filter recorded events by kind and/or auction."""
        with self._lock:
            records = list(self.records)
        return [
            e for e in records
            if (kind is None or e.kind == kind)
            and (auction_id is None or e.auction_id == auction_id)
        ]

    def verify(self) -> bool:
        """Recompute the chain and check every stored digest."""
        with self._lock:
            records = list(self.records)

        prev = bytes_to_hex(GENESIS_DIGEST)
        for index, record in enumerate(records):
            if record.sequence != index or record.prev_digest != prev:
                return False
            expected = bytes_to_hex(chain_digest(hex_to_bytes(prev), record.payload()))
            if record.digest != expected:
                logger.warning(f"Event #{index} digest mismatch")
                return False
            prev = record.digest
        return True

    def __len__(self) -> int:
        return len(self.records)


__all__ = [
    "AuctionEvent",
    "AuctionCreated",
    "BidPlaced",
    "AuctionEnded",
    "AuctionCancelled",
    "AnyEvent",
    "EventLog",
]
