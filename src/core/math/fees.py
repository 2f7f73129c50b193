"""
Fees — Basis-point fee math (integer-only)

Комиссия считается в номинальных единицах (t-space) с floor-округлением.
Остаток от округления остаётся у получателя.

ФОРМУЛЫ:
    t_fee = floor(t_amount * fee_bps / 10000)
    t_transfer_amount = t_amount - t_fee
"""

from typing import Final, NamedTuple

from src.core.errors import InvalidFeeRateError
from src.core.math.numerical_safeguards import checked_mul, checked_sub

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Знаменатель basis points (100% = 10000 bps)
BPS_DENOMINATOR: Final[int] = 10_000

# Границы допустимого fee rate
FEE_BPS_MIN: Final[int] = 0
FEE_BPS_MAX: Final[int] = BPS_DENOMINATOR


# =============================================================================
# ТИПЫ
# =============================================================================


class FeeSplit(NamedTuple):
    """Разделение суммы на комиссию и зачисляемую часть (t-space)."""

    t_fee: int
    t_transfer_amount: int


# =============================================================================
# FEE MATH
# =============================================================================


def validate_fee_bps(fee_bps: int) -> None:
    """
    Проверка fee rate.

    Raises:
        InvalidFeeRateError: Если fee_bps не int или вне [0, 10000]
    """
    if isinstance(fee_bps, bool) or not isinstance(fee_bps, int):
        raise InvalidFeeRateError(f"fee_bps must be an int, got {fee_bps!r}")

    if not (FEE_BPS_MIN <= fee_bps <= FEE_BPS_MAX):
        raise InvalidFeeRateError(
            f"fee_bps must be in [{FEE_BPS_MIN}, {FEE_BPS_MAX}], got {fee_bps}"
        )


def compute_fee(t_amount: int, fee_bps: int) -> FeeSplit:
    """
    Вычисление комиссии и зачисляемой суммы.

    Args:
        t_amount: Номинальная сумма перевода
        fee_bps: Fee rate в basis points

    Returns:
        FeeSplit(t_fee, t_transfer_amount), t_fee + t_transfer_amount == t_amount

    Examples:
        >>> compute_fee(1000, 100)
        FeeSplit(t_fee=10, t_transfer_amount=990)
        >>> compute_fee(99, 100)
        FeeSplit(t_fee=0, t_transfer_amount=99)
    """
    validate_fee_bps(fee_bps)

    t_fee = checked_mul(t_amount, fee_bps) // BPS_DENOMINATOR
    return FeeSplit(t_fee=t_fee, t_transfer_amount=checked_sub(t_amount, t_fee))
