"""Reflection — dual-accounting ядро (r-space / t-space).

- RateLedger: r-балансы, r_total, конверсии
- ReflectionEngine: fee-reflecting и exempt переводы
- ReflectiveMode / StandardMode: режимы баланса, выбираемые при создании
"""

from .engine import ReflectionEngine
from .modes import BalanceMode, ReflectiveMode, StandardMode
from .rate_ledger import RateLedger

__all__ = [
    "RateLedger",
    "ReflectionEngine",
    "BalanceMode",
    "ReflectiveMode",
    "StandardMode",
]
