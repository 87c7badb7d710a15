"""
Clock - Source of the current block height.

The auction house never schedules anything: expiry is detected lazily by
comparing ``now()`` against an auction's end block on every access.
"""

import threading
from typing import Protocol

from auctionhouse.utils.logger import get_logger

logger = get_logger("clock")


class Clock(Protocol):
    """
    Discrete, monotonically increasing time source.

    Contract:
    - now() -> int
    """

    def now(self) -> int:
        ...


class ManualClock:
    """
    Block clock advanced explicitly by the host.

    Used by the in-memory house, the CLI demo and the tests.
    """

    def __init__(self, start: int = 1):
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._height = start
        self._lock = threading.Lock()

    def now(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move the clock forward and return the new height."""
        if blocks < 0:
            raise ValueError("Clock cannot move backwards")
        with self._lock:
            self._height += blocks
            height = self._height
        logger.debug(f"Clock advanced by {blocks} to {height}")
        return height

    def mine_empty_blocks(self, count: int) -> int:
        """Alias for advance(), named after the chain operation it stands for."""
        return self.advance(count)

    def __repr__(self) -> str:
        return f"ManualClock(height={self._height})"
