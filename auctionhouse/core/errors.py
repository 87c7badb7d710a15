"""
Error kinds for auction house operations.

Business rule rejections are returned as values (``(result, AuctionError)``
tuples) and never mutate state. Collaborator faults are raised as
exceptions and leave the auction record untouched.
"""

from enum import IntEnum


class AuctionError(IntEnum):
    """
    Rejection reasons returned by mutating operations.

    Codes are stable and start at 101. NOT_FOUND is reserved for hosts
    that surface lookups as errors; the query layer reports an unknown
    auction id as None.
    """
    AUCTION_NOT_ACTIVE = 101
    BID_TOO_LOW = 102
    AUCTION_EXPIRED = 103
    AUCTION_NOT_ENDED = 104
    NO_BIDS = 105
    UNAUTHORIZED = 106
    INVALID_PERCENT = 107
    INVALID_DURATION = 108
    NOT_FOUND = 109
    INVALID_INPUT = 110


class CollaboratorError(Exception):
    """An asset or payment ledger refused or failed a transfer."""


class SettlementError(Exception):
    """
    Disbursement of a winning bid did not complete.

    The auction stays active; calling end_auction again resumes from the
    first transfer that did not complete.
    """

    def __init__(self, auction_id: int, step: str, cause: Exception):
        self.auction_id = auction_id
        self.step = step
        self.cause = cause
        super().__init__(f"Settlement of auction {auction_id} failed at {step}: {cause}")


__all__ = [
    "AuctionError",
    "CollaboratorError",
    "SettlementError",
]
