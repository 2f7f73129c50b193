"""
Тесты для доменных моделей: TransferBreakdown, TransferSignal, LedgerSnapshot

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Immutability (frozen=True)
3. Сериализацию/десериализацию JSON (включая uint256 значения)
4. Граничные случаи и невалидные данные
"""

import json

import pytest
from pydantic import ValidationError

from src.core.domain import (
    HolderBalance,
    LedgerMode,
    LedgerSnapshot,
    TransferBreakdown,
    TransferKind,
    TransferSignal,
)
from src.core.math.numerical_safeguards import MAX_UINT256


# =============================================================================
# TRANSFER BREAKDOWN TESTS
# =============================================================================


class TestTransferBreakdown:
    """Тесты для модели TransferBreakdown"""

    @pytest.fixture
    def valid_breakdown(self) -> TransferBreakdown:
        rate = 7
        return TransferBreakdown(
            t_amount=1000,
            t_fee=10,
            t_transfer_amount=990,
            rate=rate,
            r_amount=1000 * rate,
            r_fee=10 * rate,
            r_transfer_amount=990 * rate,
        )

    def test_valid(self, valid_breakdown):
        assert valid_breakdown.r_fee + valid_breakdown.r_transfer_amount == valid_breakdown.r_amount

    def test_fee_split_must_sum(self):
        with pytest.raises(ValidationError, match="t_fee \\+ t_transfer_amount"):
            TransferBreakdown(
                t_amount=1000,
                t_fee=10,
                t_transfer_amount=991,
                rate=1,
                r_amount=1000,
                r_fee=10,
                r_transfer_amount=991,
            )

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            TransferBreakdown(
                t_amount=-1,
                t_fee=0,
                t_transfer_amount=-1,
                rate=1,
                r_amount=0,
                r_fee=0,
                r_transfer_amount=0,
            )

    def test_frozen(self, valid_breakdown):
        with pytest.raises(ValidationError):
            valid_breakdown.t_fee = 0


# =============================================================================
# TRANSFER SIGNAL TESTS
# =============================================================================


class TestTransferSignal:
    """Тесты для модели TransferSignal"""

    def test_reflecting_signal(self):
        signal = TransferSignal(
            kind=TransferKind.REFLECTING,
            sender="owner",
            recipient="alice",
            amount=1000,
            credited_amount=990,
            fee=10,
        )
        assert signal.amount > 0
        assert signal.amount - signal.credited_amount == signal.fee

    def test_noop_signal(self):
        signal = TransferSignal(
            kind=TransferKind.EXEMPT,
            sender="owner",
            recipient="alice",
            amount=0,
            credited_amount=0,
        )
        assert signal.amount == 0
        assert signal.fee == 0

    def test_empty_sender_rejected(self):
        with pytest.raises(ValidationError):
            TransferSignal(
                kind=TransferKind.EXEMPT,
                sender="",
                recipient="alice",
                amount=1,
                credited_amount=1,
            )

    def test_json_roundtrip_uint256(self):
        signal = TransferSignal(
            kind=TransferKind.EXEMPT,
            sender="owner",
            recipient="alice",
            amount=MAX_UINT256,
            credited_amount=MAX_UINT256,
        )
        restored = TransferSignal.model_validate_json(signal.model_dump_json())
        assert restored == signal
        assert restored.amount == MAX_UINT256


# =============================================================================
# LEDGER SNAPSHOT TESTS
# =============================================================================


class TestLedgerSnapshot:
    """Тесты для модели LedgerSnapshot"""

    @pytest.fixture
    def reflective_snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            schema_version="1",
            mode=LedgerMode.REFLECTIVE,
            fee_bps=100,
            total_supply=1000,
            reflected_total=7000,
            rate=7,
            total_fees=0,
            holders=[
                HolderBalance(account="owner", balance=1000, reflected_balance=7000)
            ],
        )

    def test_holder_entries(self, reflective_snapshot):
        (holder,) = reflective_snapshot.holders
        assert holder.account == "owner"
        assert holder.balance * reflective_snapshot.rate == holder.reflected_balance

    def test_reflective_requires_reflected_total(self):
        with pytest.raises(ValidationError, match="reflected_total is required"):
            LedgerSnapshot(
                schema_version="1",
                mode=LedgerMode.REFLECTIVE,
                fee_bps=0,
                total_supply=1000,
                total_fees=0,
            )

    def test_standard_forbids_reflected_total(self):
        with pytest.raises(ValidationError, match="must be None"):
            LedgerSnapshot(
                schema_version="1",
                mode=LedgerMode.STANDARD,
                fee_bps=0,
                total_supply=1000,
                reflected_total=5,
                total_fees=0,
            )

    def test_schema_version_pattern(self):
        with pytest.raises(ValidationError):
            LedgerSnapshot(
                schema_version="2",
                mode=LedgerMode.STANDARD,
                fee_bps=0,
                total_supply=0,
                total_fees=0,
            )

    def test_fee_bps_range(self):
        with pytest.raises(ValidationError):
            LedgerSnapshot(
                schema_version="1",
                mode=LedgerMode.STANDARD,
                fee_bps=10_001,
                total_supply=0,
                total_fees=0,
            )

    def test_json_serialization(self, reflective_snapshot):
        data = json.loads(reflective_snapshot.model_dump_json())
        assert data["mode"] == "REFLECTIVE"
        assert data["holders"][0]["reflected_balance"] == 7000

        restored = LedgerSnapshot.model_validate(data)
        assert restored == reflective_snapshot
