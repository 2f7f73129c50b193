"""
Тесты для модуля Numerical Safeguards (checked uint256)

Проверяет:
1. Checked add/sub/mul на границах uint256
2. Truncating деление и ошибку при нулевом делителе
3. Валидацию типов и диапазонов
"""

import pytest

from src.core.errors import ArithmeticOverflowError, RateUndefinedError
from src.core.math.numerical_safeguards import (
    MAX_UINT256,
    UINT256_BITS,
    checked_add,
    checked_mul,
    checked_sub,
    safe_div,
    validate_uint256,
)

# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Тесты констант uint256"""

    def test_max_uint256(self) -> None:
        """MAX_UINT256 = 2^256 - 1"""
        assert UINT256_BITS == 256
        assert MAX_UINT256 == 2**256 - 1


# =============================================================================
# ТЕСТЫ CHECKED ARITHMETIC
# =============================================================================


class TestCheckedAdd:
    """Тесты для checked_add"""

    def test_regular_addition(self) -> None:
        assert checked_add(2, 3) == 5
        assert checked_add(0, 0) == 0

    def test_exact_max_allowed(self) -> None:
        """Сумма ровно MAX_UINT256 допустима"""
        assert checked_add(MAX_UINT256 - 1, 1) == MAX_UINT256

    def test_overflow_raises(self) -> None:
        with pytest.raises(ArithmeticOverflowError, match="overflow"):
            checked_add(MAX_UINT256, 1)


class TestCheckedSub:
    """Тесты для checked_sub"""

    def test_regular_subtraction(self) -> None:
        assert checked_sub(5, 3) == 2
        assert checked_sub(5, 5) == 0

    def test_underflow_raises(self) -> None:
        with pytest.raises(ArithmeticOverflowError, match="underflow"):
            checked_sub(3, 5)


class TestCheckedMul:
    """Тесты для checked_mul"""

    def test_regular_multiplication(self) -> None:
        assert checked_mul(6, 7) == 42
        assert checked_mul(MAX_UINT256, 0) == 0
        assert checked_mul(MAX_UINT256, 1) == MAX_UINT256

    def test_overflow_raises(self) -> None:
        """Python int не переполняется, но граница uint256 соблюдается"""
        with pytest.raises(ArithmeticOverflowError):
            checked_mul(MAX_UINT256, 2)

        with pytest.raises(ArithmeticOverflowError):
            checked_mul(2**128, 2**128)

    def test_just_below_boundary(self) -> None:
        assert checked_mul(2**128, 2**127) == 2**255


class TestSafeDiv:
    """Тесты для safe_div"""

    def test_truncating_division(self) -> None:
        assert safe_div(7, 2) == 3
        assert safe_div(MAX_UINT256, MAX_UINT256) == 1
        assert safe_div(0, 5) == 0

    def test_zero_denominator_default_error(self) -> None:
        with pytest.raises(ZeroDivisionError):
            safe_div(1, 0)

    def test_zero_denominator_custom_error(self) -> None:
        with pytest.raises(RateUndefinedError):
            safe_div(1, 0, error=RateUndefinedError)


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для validate_uint256"""

    def test_validate_uint256_type(self) -> None:
        with pytest.raises(TypeError):
            validate_uint256(1.5, "amount")

        with pytest.raises(TypeError):
            validate_uint256(False, "amount")

    def test_validate_uint256_range(self) -> None:
        validate_uint256(0, "amount")
        validate_uint256(MAX_UINT256, "amount")

        with pytest.raises(ArithmeticOverflowError, match="amount"):
            validate_uint256(-1, "amount")

        with pytest.raises(ArithmeticOverflowError):
            validate_uint256(MAX_UINT256 + 1, "amount")
