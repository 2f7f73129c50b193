"""RateLedger — хранилище r-space состояния и конверсии r ↔ t.

Владеет:
- r-балансами аккаунтов (единственный мутатор: debit_credit)
- r_total (единственный мутатор: reflect_fee)
- t_fee_total (накопленные комиссии, информационно)

Rate НЕ хранится: rate_of() вычисляет r_total // supply при каждом вызове.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. r_balance[account] <= r_total для любого аккаунта
2. sum(r_balance) <= r_total (разница — rounding dust, поглощённый сжатием)
3. r_total никогда не растёт
4. Мутатор либо применяет все изменения, либо ни одного
"""

import logging
from typing import Dict, List

from src.core.domain.units import (
    initial_reflected_total,
    rate_of,
    reflection_to_token,
)
from src.core.errors import (
    InsufficientBalanceError,
    LedgerError,
    ReflectionExhaustedError,
    ReflectionTotalTooSmallError,
)
from src.core.math.numerical_safeguards import (
    checked_add,
    checked_sub,
    validate_uint256,
)

logger = logging.getLogger(__name__)


class RateLedger:
    """Dual-accounting ledger: r-балансы + глобальный r_total.

    Usage:
        ledger = RateLedger()
        ledger.initialize(initial_supply, owner)
        ledger.nominal_balance_of(owner, supply)
    """

    def __init__(self) -> None:
        self._r_owned: Dict[str, int] = {}
        self._r_total: int = 0
        self._t_fee_total: int = 0
        self._initialized: bool = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def r_total(self) -> int:
        return self._r_total

    @property
    def t_fee_total(self) -> int:
        return self._t_fee_total

    @property
    def initialized(self) -> bool:
        return self._initialized

    def reflected_balance_of(self, account: str) -> int:
        """Сырой r-баланс аккаунта (0 если записи нет)."""
        return self._r_owned.get(account, 0)

    def holders(self) -> List[str]:
        """Аккаунты с ненулевым r-балансом."""
        return list(self._r_owned)

    def reflected_sum(self) -> int:
        """Сумма всех r-балансов (для аудита инварианта sum <= r_total)."""
        return sum(self._r_owned.values())

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    def initialize(self, initial_supply: int, owner: str) -> None:
        """Инициализация r-space и выдача всего r_total владельцу.

        Raises:
            DegenerateSupplyError: если initial_supply == 0
            LedgerError: если ledger уже инициализирован
        """
        if self._initialized:
            raise LedgerError("RateLedger is already initialized")

        r_total = initial_reflected_total(initial_supply)

        self._r_total = r_total
        self._r_owned = {owner: r_total}
        self._initialized = True

        logger.info(
            f"RateLedger initialized: supply={initial_supply}, "
            f"r_total={r_total}, owner={owner}"
        )

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def rate_of(self, nominal_total_supply: int) -> int:
        """Текущий курс r_total // supply.

        Raises:
            RateUndefinedError: если supply == 0
        """
        return rate_of(self._r_total, nominal_total_supply)

    def nominal_balance_of(self, account: str, nominal_total_supply: int) -> int:
        """Номинальный баланс аккаунта: r_balance // rate."""
        r_balance = self._r_owned.get(account, 0)
        if r_balance == 0:
            return 0
        return reflection_to_token(r_balance, self.rate_of(nominal_total_supply))

    def nominal_from_reflected(self, r_amount: int, nominal_total_supply: int) -> int:
        """Общая конверсия r-space → t-space.

        Raises:
            ReflectionTotalTooSmallError: если r_amount > r_total
        """
        validate_uint256(r_amount, "r_amount")

        if r_amount > self._r_total:
            raise ReflectionTotalTooSmallError(
                f"Amount must be less than total reflections: "
                f"r_amount={r_amount}, r_total={self._r_total}"
            )

        return reflection_to_token(r_amount, self.rate_of(nominal_total_supply))

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def debit_credit(
        self, sender: str, recipient: str, r_debit: int, r_credit: int
    ) -> None:
        """Debit r_debit у sender, credit r_credit получателю.

        r_debit и r_credit могут различаться: разница — комиссия, уже
        выведенная из обращения через reflect_fee. Конверсий не выполняет.

        Raises:
            InsufficientBalanceError: если r-баланс sender < r_debit
            ArithmeticOverflowError: если credit переполняет uint256
        """
        validate_uint256(r_debit, "r_debit")
        validate_uint256(r_credit, "r_credit")

        available = self._r_owned.get(sender, 0)
        if available < r_debit:
            raise InsufficientBalanceError(sender, available, r_debit)

        # Все новые значения считаются до первой записи
        new_sender = available - r_debit
        if recipient == sender:
            new_sender = checked_add(new_sender, r_credit)
            updates = {sender: new_sender}
        else:
            new_recipient = checked_add(self._r_owned.get(recipient, 0), r_credit)
            updates = {sender: new_sender, recipient: new_recipient}

        for account, r_balance in updates.items():
            if r_balance == 0:
                self._r_owned.pop(account, None)
            else:
                self._r_owned[account] = r_balance

    def check_reflect_fee(
        self, r_fee: int, t_fee: int, nominal_total_supply: int
    ) -> None:
        """Проверка, что reflect_fee(r_fee, t_fee) применим без ошибки.

        Вызывается ДО debit_credit, чтобы transfer не мог упасть посередине.
        После сжатия r_total должен остаться >= supply, иначе rate == 0.

        Raises:
            ArithmeticOverflowError: если r_fee > r_total
            ReflectionExhaustedError: если r_total - r_fee < supply
        """
        remaining = checked_sub(self._r_total, r_fee)
        if remaining < nominal_total_supply:
            raise ReflectionExhaustedError(
                f"Fee would drop r_total below supply: "
                f"r_total={self._r_total}, r_fee={r_fee}, "
                f"supply={nominal_total_supply}"
            )
        checked_add(self._t_fee_total, t_fee)

    def reflect_fee(self, r_fee: int, t_fee: int) -> None:
        """Сжатие r_total на r_fee и учёт t_fee в t_fee_total.

        r_fee должен быть вычислен по курсу ДО сжатия.

        Raises:
            ArithmeticOverflowError: если r_fee > r_total
        """
        validate_uint256(r_fee, "r_fee")
        validate_uint256(t_fee, "t_fee")

        new_r_total = checked_sub(self._r_total, r_fee)
        new_t_fee_total = checked_add(self._t_fee_total, t_fee)

        self._r_total = new_r_total
        self._t_fee_total = new_t_fee_total

    # -------------------------------------------------------------------------
    # Audit
    # -------------------------------------------------------------------------

    def check_invariants(self) -> List[str]:
        """Список нарушенных инвариантов (пустой, если всё в порядке)."""
        violations: List[str] = []

        for account, r_balance in self._r_owned.items():
            if r_balance > self._r_total:
                violations.append(
                    f"balance_exceeds_total: {account} r_balance={r_balance} "
                    f"> r_total={self._r_total}"
                )

        r_sum = self.reflected_sum()
        if r_sum > self._r_total:
            violations.append(
                f"sum_exceeds_total: sum={r_sum} > r_total={self._r_total}"
            )

        return violations
