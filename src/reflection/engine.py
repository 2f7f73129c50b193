"""ReflectionEngine — оркестрация переводов поверх RateLedger.

Fee-reflecting перевод:
    t_fee = floor(t_amount * fee_bps / 10000)
    t_transfer_amount = t_amount - t_fee
    rate = r_total // supply              (ДО мутации)
    r_amount = t_amount * rate            → debit отправителя
    r_transfer_amount = t_transfer_amount * rate → credit получателя
    r_fee = t_fee * rate                  → сжатие r_total

Сжатие r_total повышает rate, и номинальный баланс каждого держателя
растёт пропорционально без обхода множества держателей.

Fee-exempt перевод: равные debit/credit, r_total не меняется.

Состояния нет: каждый вызов атомарен. Все проверки (включая сборку
TransferSignal) выполняются до первой мутации ledger. Комиссия не может
опустить r_total ниже supply: rate всегда >= 1.
"""

import logging

from src.core.domain.transfer import TransferBreakdown, TransferKind, TransferSignal
from src.core.domain.units import token_to_reflection
from src.core.errors import AmountExceedsSupplyError, ZeroTransferError
from src.core.math.fees import compute_fee
from src.core.math.numerical_safeguards import validate_uint256
from src.reflection.rate_ledger import RateLedger

logger = logging.getLogger(__name__)


class ReflectionEngine:
    """Вычисляет fee и r/t split перевода и вызывает RateLedger в нужном порядке.

    Usage:
        engine = ReflectionEngine(ledger)
        signal = engine.transfer_with_reflection(
            sender, recipient, t_amount, fee_bps=100, nominal_total_supply=supply
        )
    """

    def __init__(self, ledger: RateLedger) -> None:
        self._ledger = ledger

    @property
    def ledger(self) -> RateLedger:
        return self._ledger

    def quote(
        self, t_amount: int, fee_bps: int, nominal_total_supply: int
    ) -> TransferBreakdown:
        """Полное разложение fee-reflecting перевода без мутации состояния.

        Raises:
            InvalidFeeRateError: если fee_bps вне [0, 10000]
            RateUndefinedError: если supply == 0
            ArithmeticOverflowError: если t * rate выходит за uint256
        """
        validate_uint256(t_amount, "t_amount")

        t_fee, t_transfer_amount = compute_fee(t_amount, fee_bps)
        rate = self._ledger.rate_of(nominal_total_supply)

        return TransferBreakdown(
            t_amount=t_amount,
            t_fee=t_fee,
            t_transfer_amount=t_transfer_amount,
            rate=rate,
            r_amount=token_to_reflection(t_amount, rate),
            r_fee=token_to_reflection(t_fee, rate),
            # Из уже уменьшенной t-суммы, не r_amount - r_fee
            r_transfer_amount=token_to_reflection(t_transfer_amount, rate),
        )

    def transfer_with_reflection(
        self,
        sender: str,
        recipient: str,
        t_amount: int,
        fee_bps: int,
        nominal_total_supply: int,
    ) -> TransferSignal:
        """Fee-reflecting перевод.

        Returns:
            TransferSignal с amount = t_amount (до комиссии) и
            credited_amount = t_transfer_amount.

        Raises:
            ZeroTransferError: если t_amount == 0
            InsufficientBalanceError: если r-баланс sender < r_amount
            ReflectionExhaustedError: если комиссия обнулила бы rate
        """
        if t_amount == 0:
            raise ZeroTransferError(
                "Fee-reflecting transfer amount must be greater than zero"
            )

        breakdown = self.quote(t_amount, fee_bps, nominal_total_supply)
        signal = TransferSignal(
            kind=TransferKind.REFLECTING,
            sender=sender,
            recipient=recipient,
            amount=t_amount,
            credited_amount=breakdown.t_transfer_amount,
            fee=breakdown.t_fee,
        )

        self._ledger.check_reflect_fee(
            breakdown.r_fee, breakdown.t_fee, nominal_total_supply
        )
        self._ledger.debit_credit(
            sender, recipient, breakdown.r_amount, breakdown.r_transfer_amount
        )
        self._ledger.reflect_fee(breakdown.r_fee, breakdown.t_fee)

        logger.debug(
            f"Reflecting transfer {sender} -> {recipient}: "
            f"amount={t_amount}, fee={breakdown.t_fee}, rate={breakdown.rate}"
        )
        return signal

    def transfer_without_reflection(
        self,
        sender: str,
        recipient: str,
        t_amount: int,
        nominal_total_supply: int,
    ) -> TransferSignal:
        """Fee-exempt перевод: равные debit и credit, r_total не меняется.

        t_amount == 0 — успешный no-op (в отличие от reflecting пути).
        """
        validate_uint256(t_amount, "t_amount")
        signal = TransferSignal(
            kind=TransferKind.EXEMPT,
            sender=sender,
            recipient=recipient,
            amount=t_amount,
            credited_amount=t_amount,
        )

        if t_amount > 0:
            rate = self._ledger.rate_of(nominal_total_supply)
            r_amount = token_to_reflection(t_amount, rate)
            self._ledger.debit_credit(sender, recipient, r_amount, r_amount)

            logger.debug(
                f"Exempt transfer {sender} -> {recipient}: "
                f"amount={t_amount}, rate={rate}"
            )

        return signal

    def deliver(
        self, sender: str, t_amount: int, nominal_total_supply: int
    ) -> TransferSignal:
        """Добровольное отражение собственных токенов всем держателям.

        Весь t_amount списывается с sender и выводится из r_total.

        Raises:
            ZeroTransferError: если t_amount == 0
            InsufficientBalanceError: если r-баланс sender < r_amount
            ReflectionExhaustedError: если комиссия обнулила бы rate
        """
        validate_uint256(t_amount, "t_amount")
        if t_amount == 0:
            raise ZeroTransferError("Delivered amount must be greater than zero")

        rate = self._ledger.rate_of(nominal_total_supply)
        r_amount = token_to_reflection(t_amount, rate)
        signal = TransferSignal(
            kind=TransferKind.DELIVER,
            sender=sender,
            recipient=None,
            amount=t_amount,
            credited_amount=0,
            fee=t_amount,
        )

        self._ledger.check_reflect_fee(r_amount, t_amount, nominal_total_supply)
        self._ledger.debit_credit(sender, sender, r_amount, 0)
        self._ledger.reflect_fee(r_amount, t_amount)

        logger.debug(f"Delivered {t_amount} from {sender} to all holders")
        return signal

    def reflection_from_token(
        self,
        t_amount: int,
        deduct_fee: bool,
        fee_bps: int,
        nominal_total_supply: int,
    ) -> int:
        """r-эквивалент номинальной суммы, опционально после комиссии.

        Raises:
            AmountExceedsSupplyError: если t_amount > supply
        """
        validate_uint256(t_amount, "t_amount")
        if t_amount > nominal_total_supply:
            raise AmountExceedsSupplyError(
                f"Amount must be less than supply: "
                f"t_amount={t_amount}, supply={nominal_total_supply}"
            )

        breakdown = self.quote(t_amount, fee_bps, nominal_total_supply)
        if deduct_fee:
            return breakdown.r_transfer_amount
        return breakdown.r_amount
