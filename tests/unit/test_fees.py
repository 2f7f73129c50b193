"""
Тесты для Fees — basis-point fee math

Проверяемые инварианты:
1. t_fee = floor(t_amount * fee_bps / 10000)
2. t_fee + t_transfer_amount == t_amount
3. fee_bps вне [0, 10000] отвергается
"""

import pytest

from src.core.errors import ArithmeticOverflowError, InvalidFeeRateError
from src.core.math.fees import (
    BPS_DENOMINATOR,
    FeeSplit,
    compute_fee,
    validate_fee_bps,
)
from src.core.math.numerical_safeguards import MAX_UINT256


class TestComputeFee:
    """Тесты compute_fee"""

    def test_one_percent(self):
        """1% от 1000 = 10"""
        assert compute_fee(1000, 100) == FeeSplit(t_fee=10, t_transfer_amount=990)

    def test_floor_rounding(self):
        """Остаток округления остаётся у получателя"""
        split = compute_fee(199, 100)
        assert split.t_fee == 1
        assert split.t_transfer_amount == 198

        split = compute_fee(99, 100)
        assert split.t_fee == 0
        assert split.t_transfer_amount == 99

    def test_zero_fee(self):
        assert compute_fee(12345, 0) == FeeSplit(0, 12345)

    def test_full_fee(self):
        """10000 bps — вся сумма уходит в комиссию"""
        assert compute_fee(12345, BPS_DENOMINATOR) == FeeSplit(12345, 0)

    def test_split_sums_to_amount(self):
        for amount in (1, 7, 10**18, 10**24 + 3):
            for bps in (1, 33, 250, 9999):
                split = compute_fee(amount, bps)
                assert split.t_fee + split.t_transfer_amount == amount

    def test_overflow_in_numerator(self):
        with pytest.raises(ArithmeticOverflowError):
            compute_fee(MAX_UINT256, 2)


class TestValidateFeeBps:
    """Тесты validate_fee_bps"""

    def test_valid_range(self):
        validate_fee_bps(0)
        validate_fee_bps(100)
        validate_fee_bps(10000)

    def test_out_of_range(self):
        with pytest.raises(InvalidFeeRateError):
            validate_fee_bps(-1)

        with pytest.raises(InvalidFeeRateError):
            validate_fee_bps(10001)

    def test_non_int_rejected(self):
        with pytest.raises(InvalidFeeRateError):
            validate_fee_bps(1.5)

        with pytest.raises(InvalidFeeRateError):
            validate_fee_bps(True)
