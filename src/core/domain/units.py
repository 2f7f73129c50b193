"""
ReflectionUnits — Централизованный модуль конверсии r-space ↔ t-space

Единственный допустимый способ преобразований между:
- r-space (внутренняя высокоточная единица хранения балансов)
- t-space (номинальная единица токена, видимая держателям)

ЗАПРЕЩЕНО масштабировать балансы вне этого модуля.
Rate никогда не кэшируется: он вычисляется заново из двух живых totals.
"""

from src.core.errors import DegenerateSupplyError, RateUndefinedError
from src.core.math.numerical_safeguards import (
    MAX_UINT256,
    checked_mul,
    safe_div,
    validate_uint256,
)


# =============================================================================
# ИНИЦИАЛИЗАЦИЯ R-SPACE
# =============================================================================


def initial_reflected_total(initial_supply: int) -> int:
    """
    Начальный r_total для заданного nominal supply.

    Формула: r_total = MAX_UINT256 - (MAX_UINT256 mod initial_supply)

    Наибольшее кратное supply, не превышающее MAX_UINT256: rate на старте
    целый и максимально возможный.

    Raises:
        DegenerateSupplyError: Если initial_supply == 0
    """
    validate_uint256(initial_supply, "initial_supply")

    if initial_supply == 0:
        raise DegenerateSupplyError(
            "Reflective ledger requires non-zero initial supply; "
            "use the non-reflective mode instead"
        )

    return MAX_UINT256 - (MAX_UINT256 % initial_supply)


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def rate_of(r_total: int, nominal_total_supply: int) -> int:
    """
    Курс r-space → t-space.

    Формула: rate = r_total // nominal_total_supply (truncating)

    Raises:
        RateUndefinedError: Если nominal_total_supply == 0
    """
    return safe_div(r_total, nominal_total_supply, error=RateUndefinedError)


def token_to_reflection(t_amount: int, rate: int) -> int:
    """
    Конверсия: t-space → r-space.

    Raises:
        ArithmeticOverflowError: Если t_amount * rate > MAX_UINT256
    """
    return checked_mul(t_amount, rate)


def reflection_to_token(r_amount: int, rate: int) -> int:
    """
    Конверсия: r-space → t-space (truncating).

    Raises:
        RateUndefinedError: Если rate == 0 (r_total < supply)
    """
    return safe_div(r_amount, rate, error=RateUndefinedError)
