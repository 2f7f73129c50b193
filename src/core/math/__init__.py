"""
Core math modules для reflection ledger

Целочисленные примитивы uint256 и fee math с гарантией отсутствия wrap-around.
"""

# Numerical Safeguards (checked uint256)
from src.core.math.numerical_safeguards import (
    # Constants
    MAX_UINT256,
    UINT256_BITS,
    # Checked arithmetic
    checked_add,
    checked_mul,
    checked_sub,
    safe_div,
    # Validation
    validate_uint256,
)

# Fees (basis points)
from src.core.math.fees import (
    BPS_DENOMINATOR,
    FEE_BPS_MAX,
    FEE_BPS_MIN,
    FeeSplit,
    compute_fee,
    validate_fee_bps,
)

__all__ = [
    # Numerical Safeguards — Constants
    "MAX_UINT256",
    "UINT256_BITS",
    # Numerical Safeguards — Checked arithmetic
    "checked_add",
    "checked_mul",
    "checked_sub",
    "safe_div",
    # Numerical Safeguards — Validation
    "validate_uint256",
    # Fees — Constants
    "BPS_DENOMINATOR",
    "FEE_BPS_MAX",
    "FEE_BPS_MIN",
    # Fees — Types
    "FeeSplit",
    # Fees — Functions
    "compute_fee",
    "validate_fee_bps",
]
