"""
Numerical Safeguards — Checked uint256 Arithmetic

Модуль обеспечивает безопасную целочисленную арифметику в диапазоне uint256:
- Checked add/sub/mul с ошибкой вместо wrap-around
- Безопасное (truncating) деление с защитой от деления на ноль
- Валидация типов: только int, bool отвергается

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции лежит в [0, MAX_UINT256], иначе ArithmeticOverflowError
2. Wrap-around никогда не происходит
3. Деление всегда truncating (floor для неотрицательных)
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

from src.core.errors import ArithmeticOverflowError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Разрядность r-space
UINT256_BITS: Final[int] = 256

# Максимальное значение uint256
MAX_UINT256: Final[int] = (1 << UINT256_BITS) - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_uint256(value: int, name: str) -> None:
    """
    Валидация, что значение является uint256.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        TypeError: Если value не int (или bool)
        ArithmeticOverflowError: Если value вне [0, MAX_UINT256]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0 or value > MAX_UINT256:
        raise ArithmeticOverflowError(f"{name} out of uint256 range: {value}")


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения.

    Raises:
        ArithmeticOverflowError: Если a + b > MAX_UINT256
    """
    result = a + b
    if result > MAX_UINT256:
        raise ArithmeticOverflowError(f"uint256 overflow: {a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание с проверкой underflow.

    Raises:
        ArithmeticOverflowError: Если a - b < 0
    """
    if b > a:
        raise ArithmeticOverflowError(f"uint256 underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """
    Умножение с проверкой переполнения.

    Python int не переполняется сам по себе, поэтому граница uint256
    проверяется явно после умножения.

    Raises:
        ArithmeticOverflowError: Если a * b > MAX_UINT256

    Examples:
        >>> checked_mul(2, 3)
        6
        >>> checked_mul(MAX_UINT256, 2)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflowError: ...
    """
    result = a * b
    if result > MAX_UINT256:
        raise ArithmeticOverflowError(f"uint256 overflow: {a} * {b}")
    return result


def safe_div(
    numerator: int,
    denominator: int,
    error: type[Exception] = ZeroDivisionError,
) -> int:
    """
    Truncating деление с явной ошибкой при нулевом делителе.

    Args:
        numerator: Делимое (uint256)
        denominator: Делитель (uint256)
        error: Класс ошибки для denominator == 0

    Returns:
        numerator // denominator

    Raises:
        error: Если denominator == 0
    """
    if denominator == 0:
        raise error(f"Division by zero: {numerator} / 0")
    return numerator // denominator
