"""
Input Validation - Sanitization for values entering the auction house.

Every mutating operation validates its raw inputs here before touching
state, so malformed calls are rejected without side effects:
- Non-integer or negative amounts
- Amounts outside the native-currency range
- Empty or oversized identities and asset references
"""

from typing import Any, Tuple

# =============================================================================
# Constants
# =============================================================================

# Native-currency amounts are unsigned 128-bit values
MIN_AMOUNT = 0
MAX_AMOUNT = 2**128 - 1

MAX_DURATION = 2**32 - 1
MAX_IDENTITY_LENGTH = 256
BPS_DENOMINATOR = 10_000


# =============================================================================
# Validation Functions
# =============================================================================


def validate_integer(
    value: Any,
    name: str,
    min_val: int = MIN_AMOUNT,
    max_val: int = MAX_AMOUNT,
) -> Tuple[bool, str]:
    """
    Validate integer within bounds.

    Args:
        value: Value to validate
        name: Field name for errors
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        (is_valid, error_message)
    """
    # bool is an int subclass but never a meaningful amount
    if not isinstance(value, int) or isinstance(value, bool):
        return False, f"{name} must be int, got {type(value).__name__}"

    if value < min_val:
        return False, f"{name} must be >= {min_val}, got {value}"

    if value > max_val:
        return False, f"{name} must be <= {max_val}, got {value}"

    return True, ""


def validate_amount(amount: Any, name: str = "amount") -> Tuple[bool, str]:
    """Validate a native-currency amount."""
    return validate_integer(amount, name, MIN_AMOUNT, MAX_AMOUNT)


def validate_duration(duration: Any) -> Tuple[bool, str]:
    """Validate an auction duration in blocks."""
    return validate_integer(duration, "duration", 0, MAX_DURATION)


def validate_bps(value: Any, name: str = "royalty_bps") -> Tuple[bool, str]:
    """
    Validate a basis-point value is a non-negative int.

    The upper bound is a business rule and is checked by the caller.
    """
    return validate_integer(value, name, 0, MAX_AMOUNT)


def validate_identity(value: Any, name: str = "identity") -> Tuple[bool, str]:
    """
    Validate a caller or recipient identity.

    Identities are opaque non-empty strings (principal, address, ...).
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    if not value:
        return False, f"{name} must not be empty"

    if len(value) > MAX_IDENTITY_LENGTH:
        return False, f"{name} exceeds max length {MAX_IDENTITY_LENGTH}"

    return True, ""


def validate_asset_ref(value: Any) -> Tuple[bool, str]:
    """Validate an asset reference (collection + item id)."""
    if not hasattr(value, "collection") or not hasattr(value, "token_id"):
        return False, f"asset_ref must be AssetRef, got {type(value).__name__}"

    valid, err = validate_identity(value.collection, "asset_ref.collection")
    if not valid:
        return False, err

    return validate_integer(value.token_id, "asset_ref.token_id", 0, MAX_AMOUNT)


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_integer",
    "validate_amount",
    "validate_duration",
    "validate_bps",
    "validate_identity",
    "validate_asset_ref",
    "MIN_AMOUNT",
    "MAX_AMOUNT",
    "BPS_DENOMINATOR",
]
