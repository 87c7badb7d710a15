"""
Unit tests for the escrow ledger.
"""

import threading

import pytest

from auctionhouse.core import EscrowLedger


class TestEscrowLedger:
    """Tests for escrow bookkeeping."""

    def test_hold_and_balance(self):
        escrow = EscrowLedger()

        escrow.hold(0, "alice", 1_000_000)

        assert escrow.balance_of(0, "alice") == 1_000_000

    def test_absent_entry_is_zero(self):
        escrow = EscrowLedger()
        assert escrow.balance_of(0, "nobody") == 0

    def test_release_returns_and_clears(self):
        escrow = EscrowLedger()
        escrow.hold(0, "alice", 1_000_000)

        released = escrow.release(0, "alice")

        assert released == 1_000_000
        assert escrow.balance_of(0, "alice") == 0

    def test_release_absent(self):
        escrow = EscrowLedger()
        assert escrow.release(0, "alice") == 0

    def test_auctions_isolated(self):
        escrow = EscrowLedger()
        escrow.hold(0, "alice", 1_000_000)
        escrow.hold(1, "alice", 2_000_000)

        escrow.release(0, "alice")

        assert escrow.balance_of(0, "alice") == 0
        assert escrow.balance_of(1, "alice") == 2_000_000

    def test_total_held(self):
        escrow = EscrowLedger()
        escrow.hold(0, "alice", 1_000_000)
        escrow.hold(0, "bob", 500)
        escrow.hold(1, "carol", 7)

        assert escrow.total_held(0) == 1_000_500
        assert escrow.total_held(1) == 7
        assert escrow.total_held(2) == 0

    def test_hold_rejects_non_positive(self):
        escrow = EscrowLedger()
        with pytest.raises(ValueError):
            escrow.hold(0, "alice", 0)

    def test_stats(self):
        escrow = EscrowLedger()
        escrow.hold(0, "alice", 100)
        escrow.hold(0, "bob", 200)
        escrow.release(0, "alice")

        stats = escrow.stats()

        assert stats["open_entries"] == 1
        assert stats["total_held"] == 200
        assert stats["total_deposited"] == 300
        assert stats["total_released"] == 100

    def test_concurrent_release_pays_once(self):
        """Racing releases of one entry hand out the amount exactly once."""
        escrow = EscrowLedger()
        escrow.hold(0, "alice", 1_000)
        results = []

        def worker():
            results.append(escrow.release(0, "alice"))

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results) == [0] * 15 + [1_000]
        assert escrow.balance_of(0, "alice") == 0
