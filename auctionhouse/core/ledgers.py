"""
Ledgers - Asset-ownership and payment collaborators.

The auction house only needs two calls from the outside world:

    transfer_ownership(asset_ref, from, to)
    move_funds(from, to, amount)

Both are defined here as protocols together with in-memory reference
implementations. The in-memory ledgers keep a transfer journal so callers
can observe every movement, much like chain transfer events.
"""

import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

from auctionhouse.core.errors import CollaboratorError
from auctionhouse.utils.logger import get_logger

logger = get_logger("ledgers")


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class AssetRef:
    """
    Reference to a unique item.

    Attributes:
        collection: Contract / collection that issued the item
        token_id: Item id within the collection
    """
    collection: str
    token_id: int

    def __str__(self) -> str:
        return f"{self.collection}#{self.token_id}"


@dataclass(frozen=True)
class AssetTransfer:
    """Journal entry for an ownership change."""
    asset_ref: AssetRef
    sender: Optional[str]  # None for a mint
    recipient: str


@dataclass(frozen=True)
class FundsTransfer:
    """Journal entry for a native-currency movement."""
    sender: str
    recipient: str
    amount: int


# =============================================================================
# Protocols
# =============================================================================


class AssetLedger(Protocol):
    def transfer_ownership(self, asset_ref: AssetRef, sender: str, recipient: str) -> None:
        """Move the item; raise CollaboratorError if refused."""
        ...


class PaymentLedger(Protocol):
    def move_funds(self, sender: str, recipient: str, amount: int) -> None:
        """Move amount atomically; raise CollaboratorError if refused."""
        ...


# =============================================================================
# In-memory Asset Ledger
# =============================================================================


class InMemoryAssetLedger:
    """
    Single-collection registry of unique items.

    Token ids are sequential from 1, like a minimal NFT contract.
    """

    def __init__(self, collection: str = "test-nft"):
        self.collection = collection
        self.owners: Dict[AssetRef, str] = {}
        self.transfers: List[AssetTransfer] = []
        self._last_token_id = 0
        self._lock = threading.Lock()

    def mint(self, recipient: str) -> AssetRef:
        """Mint a new item to recipient and return its reference."""
        with self._lock:
            self._last_token_id += 1
            asset_ref = AssetRef(self.collection, self._last_token_id)
            self.owners[asset_ref] = recipient
            self.transfers.append(AssetTransfer(asset_ref, None, recipient))

        logger.debug(f"Minted {asset_ref} to {recipient}")
        return asset_ref

    def owner_of(self, asset_ref: AssetRef) -> Optional[str]:
        return self.owners.get(asset_ref)

    def transfer_ownership(self, asset_ref: AssetRef, sender: str, recipient: str) -> None:
        with self._lock:
            owner = self.owners.get(asset_ref)
            if owner is None:
                raise CollaboratorError(f"Unknown asset {asset_ref}")
            if owner != sender:
                logger.warning(f"Refused transfer of {asset_ref}: {sender} is not the owner")
                raise CollaboratorError(f"{sender} does not own {asset_ref}")

            self.owners[asset_ref] = recipient
            self.transfers.append(AssetTransfer(asset_ref, sender, recipient))

        logger.debug(f"Asset {asset_ref}: {sender} -> {recipient}")

    def transfers_of(self, asset_ref: AssetRef) -> List[AssetTransfer]:
        return [t for t in self.transfers if t.asset_ref == asset_ref]


# =============================================================================
# In-memory Payment Ledger
# =============================================================================


class InMemoryPaymentLedger:
    """
    Account-balance ledger for the native currency.

    Each move_funds call is atomic: it either debits and credits in full or
    raises without changing any balance.
    """

    def __init__(self):
        self.balances: Dict[str, int] = defaultdict(int)
        self.transfers: List[FundsTransfer] = []
        self._lock = threading.Lock()

    def credit(self, identity: str, amount: int) -> None:
        """Fund an account out of thin air (genesis allocation)."""
        if amount <= 0:
            raise ValueError(f"Credit must be positive, got {amount}")
        with self._lock:
            self.balances[identity] += amount

    def balance_of(self, identity: str) -> int:
        return self.balances.get(identity, 0)

    def move_funds(self, sender: str, recipient: str, amount: int) -> None:
        if amount <= 0:
            raise CollaboratorError(f"Transfer amount must be positive, got {amount}")
        if sender == recipient:
            raise CollaboratorError("Sender and recipient are the same account")

        with self._lock:
            available = self.balances.get(sender, 0)
            if available < amount:
                logger.warning(f"Refused transfer of {amount} from {sender}: balance {available}")
                raise CollaboratorError(f"Insufficient balance: have {available}, need {amount}")

            self.balances[sender] = available - amount
            self.balances[recipient] += amount
            self.transfers.append(FundsTransfer(sender, recipient, amount))

        logger.debug(f"Funds: {sender} -> {recipient} ({amount})")

    def total_supply(self) -> int:
        return sum(self.balances.values())


__all__ = [
    "AssetRef",
    "AssetTransfer",
    "FundsTransfer",
    "AssetLedger",
    "PaymentLedger",
    "InMemoryAssetLedger",
    "InMemoryPaymentLedger",
]
