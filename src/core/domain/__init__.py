"""
Domain models and value objects.

Contains r-space/t-space unit conversions, transfer models and ledger snapshots.
"""

from src.core.domain.ledger_state import HolderBalance, LedgerMode, LedgerSnapshot
from src.core.domain.transfer import TransferBreakdown, TransferKind, TransferSignal
from src.core.domain.units import (
    initial_reflected_total,
    rate_of,
    reflection_to_token,
    token_to_reflection,
)

__all__ = [
    # Units module
    "initial_reflected_total",
    "rate_of",
    "reflection_to_token",
    "token_to_reflection",
    # Transfer models
    "TransferBreakdown",
    "TransferKind",
    "TransferSignal",
    # Ledger snapshot
    "HolderBalance",
    "LedgerMode",
    "LedgerSnapshot",
]
