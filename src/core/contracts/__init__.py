"""
Contract Validation Module

JSON Schema контракт снапшота reflection ledger.
"""

from .validators import (
    LEDGER_SNAPSHOT_SCHEMA,
    SchemaLoader,
    snapshot_validator,
    validate_ledger_snapshot,
)

__all__ = [
    "LEDGER_SNAPSHOT_SCHEMA",
    "SchemaLoader",
    "snapshot_validator",
    "validate_ledger_snapshot",
]
