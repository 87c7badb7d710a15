"""
Settlement - Royalty split and disbursement of a winning bid.

The winning amount sits in the house custody account. Settlement pays:
- royalty_amount = amount * royalty_bps // 10000 to the royalty recipient
- seller_amount  = amount - royalty_amount to the seller (the remainder)

Disbursement progress is remembered per auction. If a transfer fails the
receipt stays pending, and the next attempt skips whatever was already
paid, so a retried end_auction never pays anyone twice.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from auctionhouse.core.errors import SettlementError
from auctionhouse.core.ledgers import PaymentLedger
from auctionhouse.utils.logger import get_logger
from auctionhouse.utils.validation import BPS_DENOMINATOR

logger = get_logger("settlement")


def split_payment(amount: int, royalty_bps: int) -> Tuple[int, int]:
    """
    Split amount into (royalty_amount, seller_amount).

    Integer arithmetic only; the seller receives the exact remainder.
    """
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    if not 0 <= royalty_bps <= BPS_DENOMINATOR:
        raise ValueError(f"royalty_bps out of range: {royalty_bps}")

    royalty_amount = amount * royalty_bps // BPS_DENOMINATOR
    return royalty_amount, amount - royalty_amount


@dataclass
class SettlementReceipt:
    """Breakdown and progress of one auction's settlement."""
    auction_id: int
    amount: int
    royalty_amount: int
    seller_amount: int
    royalty_recipient: str
    seller: str
    royalty_paid: bool = False
    seller_paid: bool = False

    @property
    def complete(self) -> bool:
        return self.royalty_paid and self.seller_paid


class SettlementEngine:
    """
    Disburses winning bids out of the custody account.
    """

    def __init__(self, payments: PaymentLedger, custody_identity: str):
        self.payments = payments
        self.custody_identity = custody_identity

        # Receipts of settlements not yet finalized by the registry
        self._pending: Dict[int, SettlementReceipt] = {}

        # Track totals
        self.total_settled: int = 0
        self.total_royalties: int = 0
        self.total_to_sellers: int = 0
        self.settlement_count: int = 0

    def settle(
        self,
        auction_id: int,
        amount: int,
        royalty_bps: int,
        royalty_recipient: str,
        seller: str,
    ) -> SettlementReceipt:
        """
        Pay royalty recipient and seller out of custody.

        Resumes a previously interrupted settlement of the same auction.
        The caller must hold the auction's lock.

        Raises:
            SettlementError: a transfer failed; paid steps stay recorded
        """
        receipt = self._pending.get(auction_id)
        if receipt is None:
            royalty_amount, seller_amount = split_payment(amount, royalty_bps)
            receipt = SettlementReceipt(
                auction_id=auction_id,
                amount=amount,
                royalty_amount=royalty_amount,
                seller_amount=seller_amount,
                royalty_recipient=royalty_recipient,
                seller=seller,
                # Zero royalty is never transferred
                royalty_paid=royalty_amount == 0,
            )
            self._pending[auction_id] = receipt

        if not receipt.royalty_paid:
            self._pay(receipt, "royalty", receipt.royalty_recipient, receipt.royalty_amount)
            receipt.royalty_paid = True

        if not receipt.seller_paid:
            self._pay(receipt, "seller", receipt.seller, receipt.seller_amount)
            receipt.seller_paid = True

        logger.info(
            f"Settled auction {auction_id}: amount={receipt.amount}, "
            f"royalty={receipt.royalty_amount}, seller={receipt.seller_amount}"
        )
        return receipt

    def _pay(self, receipt: SettlementReceipt, step: str, recipient: str, amount: int) -> None:
        try:
            self.payments.move_funds(self.custody_identity, recipient, amount)
        except Exception as e:
            logger.error(f"Settlement of auction {receipt.auction_id} failed paying {step}: {e}")
            raise SettlementError(receipt.auction_id, step, e) from e

    def finalize(self, auction_id: int) -> Optional[SettlementReceipt]:
        """
        Forget a completed settlement once the auction is terminal.

        Returns the receipt, or None if nothing was pending.
        """
        receipt = self._pending.get(auction_id)
        if receipt is None:
            return None
        if not receipt.complete:
            raise RuntimeError(f"Settlement of auction {auction_id} is incomplete")

        del self._pending[auction_id]
        self.total_settled += receipt.amount
        self.total_royalties += receipt.royalty_amount
        self.total_to_sellers += receipt.seller_amount
        self.settlement_count += 1
        return receipt

    def pending(self, auction_id: int) -> Optional[SettlementReceipt]:
        """Receipt of an interrupted settlement, if any."""
        return self._pending.get(auction_id)

    def stats(self) -> dict:
        """Get settlement statistics."""
        return {
            "settlements": self.settlement_count,
            "pending": len(self._pending),
            "total_settled": self.total_settled,
            "total_royalties": self.total_royalties,
            "total_to_sellers": self.total_to_sellers,
        }


__all__ = [
    "split_payment",
    "SettlementReceipt",
    "SettlementEngine",
]
