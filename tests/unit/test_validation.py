"""
Unit tests for input validation.
"""

from auctionhouse.core import AssetRef
from auctionhouse.utils.validation import (
    MAX_AMOUNT,
    validate_amount,
    validate_asset_ref,
    validate_bps,
    validate_identity,
    validate_integer,
)


class TestValidation:
    """Tests for validation helpers."""

    def test_integer_bounds(self):
        assert validate_integer(5, "x", 0, 10) == (True, "")
        valid, err = validate_integer(11, "x", 0, 10)
        assert not valid
        assert "<= 10" in err

    def test_rejects_bool_and_float(self):
        assert not validate_amount(True)[0]
        assert not validate_amount(1.0)[0]

    def test_amount_range(self):
        assert validate_amount(MAX_AMOUNT)[0]
        assert not validate_amount(MAX_AMOUNT + 1)[0]
        assert not validate_amount(-1)[0]

    def test_bps(self):
        assert validate_bps(0)[0]
        assert validate_bps(20_000)[0]
        assert not validate_bps(-1)[0]
        assert not validate_bps("500")[0]

    def test_identity(self):
        assert validate_identity("alice")[0]
        assert not validate_identity("")[0]
        assert not validate_identity(b"alice")[0]
        assert not validate_identity("a" * 300)[0]

    def test_asset_ref(self):
        assert validate_asset_ref(AssetRef("test-nft", 1))[0]
        assert not validate_asset_ref(AssetRef("", 1))[0]
        assert not validate_asset_ref(AssetRef("test-nft", -1))[0]
        valid, err = validate_asset_ref(("test-nft", 1))
        assert not valid
        assert "AssetRef" in err
