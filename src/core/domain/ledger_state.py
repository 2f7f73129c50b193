"""
LedgerSnapshot — Модель состояния ledger

Immutable Pydantic модель, представляющая снапшот состояния токена.
Полная совместимость с JSON Schema (contracts/schema/ledger_snapshot.json).

Используется для аудита r-space: в снапшоте лежат и сырые r-балансы,
и их номинальные эквиваленты на момент снимка.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class LedgerMode(str, Enum):
    """
    Режим ledger, выбирается один раз при создании.

    REFLECTIVE: балансы в r-space, комиссия отражается всем держателям
    STANDARD: обычные номинальные балансы, без reflection
    """

    REFLECTIVE = "REFLECTIVE"
    STANDARD = "STANDARD"


# =============================================================================
# NESTED MODELS
# =============================================================================


class HolderBalance(BaseModel):
    """Баланс одного держателя."""

    account: str = Field(..., min_length=1, description="Адрес")
    balance: int = Field(..., ge=0, description="Номинальный баланс (t-space)")
    reflected_balance: int | None = Field(
        None, ge=0, description="Сырой r-баланс (None в STANDARD режиме)"
    )

    model_config = {"frozen": True}


# =============================================================================
# LEDGER SNAPSHOT MODEL
# =============================================================================


class LedgerSnapshot(BaseModel):
    """
    Снапшот состояния ledger.

    Содержит:
    - Режим и fee rate
    - Totals (nominal supply, r_total, накопленные комиссии)
    - Балансы держателей
    """

    schema_version: str = Field(..., pattern="^1$", description="Версия схемы")
    mode: LedgerMode = Field(..., description="Режим ledger")
    fee_bps: int = Field(..., ge=0, le=10000, description="Fee rate (bps)")

    # Totals
    total_supply: int = Field(..., ge=0, description="Номинальный total supply")
    reflected_total: int | None = Field(
        None, ge=0, description="r_total (None в STANDARD режиме)"
    )
    rate: int | None = Field(None, ge=0, description="Текущий курс r/t")
    total_fees: int = Field(..., ge=0, description="Накопленные комиссии (t-space)")

    holders: list[HolderBalance] = Field(
        default_factory=list, description="Держатели с ненулевым балансом"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_mode_fields(self) -> "LedgerSnapshot":
        if self.mode == LedgerMode.REFLECTIVE and self.reflected_total is None:
            raise ValueError("reflected_total is required in REFLECTIVE mode")
        if self.mode == LedgerMode.STANDARD and self.reflected_total is not None:
            raise ValueError("reflected_total must be None in STANDARD mode")
        return self
