"""
Hashing primitives for the auction house.

Keccak-256 (EVM convention) digests chain the event log so an indexer can
check it holds an unbroken prefix of everything the house emitted.
"""

from Crypto.Hash import keccak

# Digest of the (empty) record preceding the first event
GENESIS_DIGEST = bytes(32)


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).

    Used for: event log chaining.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def chain_digest(prev_digest: bytes, payload: bytes) -> bytes:
    """Digest of a log record: keccak256(prev_digest || payload)."""
    if len(prev_digest) != 32:
        raise ValueError(f"prev_digest must be 32 bytes, got {len(prev_digest)}")
    return keccak256(prev_digest + payload)


def bytes_to_hex(data: bytes, prefix: bool = True) -> str:
    """Convert bytes to hex string."""
    h = data.hex()
    return f"0x{h}" if prefix else h


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


__all__ = [
    "GENESIS_DIGEST",
    "keccak256",
    "chain_digest",
    "bytes_to_hex",
    "hex_to_bytes",
]
