"""
Transfer — Модели перевода (breakdown и внешний сигнал)

Immutable Pydantic модели:
- TransferBreakdown: полное разложение fee-reflecting перевода в t-space и r-space
- TransferSignal: сигнал о переводе для внешнего event/log слоя

ВАЖНО: TransferSignal.amount для fee-reflecting перевода равен ПОЛНОЙ
запрошенной сумме (до комиссии), а фактически зачисленная сумма
лежит в credited_amount. Наблюдатели, которым нужен реальный прирост
баланса получателя, должны читать credited_amount.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class TransferKind(str, Enum):
    """Вариант перевода."""

    REFLECTING = "REFLECTING"
    EXEMPT = "EXEMPT"
    DELIVER = "DELIVER"


# =============================================================================
# BREAKDOWN
# =============================================================================


class TransferBreakdown(BaseModel):
    """
    Разложение fee-reflecting перевода.

    r_transfer_amount вычисляется из t_transfer_amount, а не как
    r_amount - r_fee: у каждой r-величины ровно один путь округления.
    """

    # t-space
    t_amount: int = Field(..., ge=0, description="Запрошенная номинальная сумма")
    t_fee: int = Field(..., ge=0, description="Комиссия (t-space)")
    t_transfer_amount: int = Field(
        ..., ge=0, description="Сумма к зачислению получателю (t-space)"
    )

    # r-space
    rate: int = Field(..., ge=0, description="Курс до мутации (r_total // supply)")
    r_amount: int = Field(..., ge=0, description="Debit отправителя (r-space)")
    r_fee: int = Field(..., ge=0, description="Сжатие r_total (r-space)")
    r_transfer_amount: int = Field(..., ge=0, description="Credit получателя (r-space)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_fee_split(self) -> "TransferBreakdown":
        if self.t_fee + self.t_transfer_amount != self.t_amount:
            raise ValueError(
                f"t_fee + t_transfer_amount != t_amount: "
                f"{self.t_fee} + {self.t_transfer_amount} != {self.t_amount}"
            )
        return self


# =============================================================================
# SIGNAL
# =============================================================================


class TransferSignal(BaseModel):
    """
    Сигнал о номинальном переводе для внешнего event/log слоя.

    amount — сообщаемая сумма (для REFLECTING это t_amount до комиссии).
    credited_amount — фактический прирост баланса получателя.
    """

    kind: TransferKind = Field(..., description="Вариант перевода")
    sender: str = Field(..., min_length=1, description="Отправитель")
    recipient: str | None = Field(
        None, description="Получатель (None для DELIVER)"
    )
    amount: int = Field(..., ge=0, description="Сообщаемая сумма (t-space)")
    credited_amount: int = Field(..., ge=0, description="Зачисленная сумма (t-space)")
    fee: int = Field(0, ge=0, description="Отражённая комиссия (t-space)")

    model_config = {"frozen": True}
