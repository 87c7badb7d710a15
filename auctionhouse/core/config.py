"""
Auction house configuration parameters.

Defines the bidding rules, anti-snipe timing and custody identity.
Defaults describe the standard house rules; every value can be overridden
through ``AUCTIONHOUSE_*`` environment variables or a ``.env`` file.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

ENV_PREFIX = "AUCTIONHOUSE_"


@dataclass
class AuctionConfig:
    """Auction-wide configuration parameters"""

    # Listing rules
    min_duration: int = 100  # Shortest auction, in blocks
    max_royalty_bps: int = 1000  # 10% royalty cap

    # Bid increments: next bid must exceed current by max(flat, pct)
    min_increment: int = 10_000  # Flat increment in base units
    increment_bps: int = 500  # 5% of the current bid

    # Anti-snipe
    extension_window: int = 10  # Bids with <= this many blocks left extend
    extension_blocks: int = 10  # Blocks added to end_time per late bid

    # Identity holding escrowed funds and listed assets
    custody_identity: str = "auction-house"

    # Paths
    log_dir: Path = Path("logs")

    def __post_init__(self):
        """Validate rule parameters"""
        if self.min_duration <= 0:
            raise ValueError(f"min_duration must be positive, got {self.min_duration}")
        if not 0 <= self.max_royalty_bps <= 10_000:
            raise ValueError(f"max_royalty_bps out of range: {self.max_royalty_bps}")
        if self.min_increment <= 0:
            raise ValueError(f"min_increment must be positive, got {self.min_increment}")
        if self.extension_blocks < 0 or self.extension_window < 0:
            raise ValueError("anti-snipe parameters must be non-negative")
        if not self.custody_identity:
            raise ValueError("custody_identity must not be empty")

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _read_overrides(env_file: Optional[str]) -> Dict[str, str]:
    """Collect AUCTIONHOUSE_* values; the process environment wins over the file."""
    values: Dict[str, Optional[str]] = {}
    if env_file:
        values.update(dotenv_values(env_file))
    values.update(os.environ)

    overrides = {}
    for key, value in values.items():
        if key.startswith(ENV_PREFIX) and value is not None:
            overrides[key[len(ENV_PREFIX):].lower()] = value
    return overrides


def load_config(env_file: Optional[str] = None) -> AuctionConfig:
    """
    Load configuration from the environment or use defaults.

    Args:
        env_file: Optional path to a .env file

    Returns:
        AuctionConfig instance
    """
    overrides = _read_overrides(env_file)

    kwargs = {}
    for f in fields(AuctionConfig):
        if f.name not in overrides:
            continue
        raw = overrides[f.name]
        if f.type in (int, "int"):
            kwargs[f.name] = int(raw)
        elif f.type in (Path, "Path"):
            kwargs[f.name] = Path(raw)
        else:
            kwargs[f.name] = raw

    return AuctionConfig(**kwargs)
