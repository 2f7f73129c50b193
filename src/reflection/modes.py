"""Balance modes — reflective и standard варианты одного интерфейса.

Режим выбирается один раз при создании токена и не меняется:
- ReflectiveMode: балансы в r-space (RateLedger + ReflectionEngine),
  supply статичен, mint/burn запрещены
- StandardMode: обычные номинальные балансы, комиссий нет,
  r-space операции недоступны, mint/burn разрешены

Вызывающий код работает только с BalanceMode и не ветвится по режиму.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.core.domain.ledger_state import HolderBalance, LedgerMode
from src.core.domain.transfer import TransferKind, TransferSignal
from src.core.errors import (
    BurningDisabledError,
    InsufficientBalanceError,
    MintingDisabledError,
    ReflectionDisabledError,
)
from src.core.math.numerical_safeguards import (
    checked_add,
    checked_sub,
    validate_uint256,
)
from src.reflection.engine import ReflectionEngine
from src.reflection.rate_ledger import RateLedger

logger = logging.getLogger(__name__)


class BalanceMode(ABC):
    """Общий интерфейс balance-query/transfer для обоих режимов."""

    mode: LedgerMode

    @property
    def is_reflective(self) -> bool:
        return self.mode == LedgerMode.REFLECTIVE

    @abstractmethod
    def total_supply(self) -> int:
        """Текущий номинальный total supply."""

    @abstractmethod
    def balance_of(self, account: str) -> int:
        """Номинальный баланс аккаунта."""

    @abstractmethod
    def transfer(
        self, sender: str, recipient: str, amount: int, fee_bps: int, reflect: bool
    ) -> TransferSignal:
        """Перевод; reflect выбирает fee-reflecting или exempt путь."""

    @abstractmethod
    def total_fees(self) -> int:
        """Накопленные отражённые комиссии (t-space)."""

    @abstractmethod
    def token_from_reflection(self, r_amount: int) -> int:
        """Конверсия r-space → t-space."""

    @abstractmethod
    def reflection_from_token(
        self, amount: int, deduct_fee: bool, fee_bps: int
    ) -> int:
        """Конверсия t-space → r-space."""

    @abstractmethod
    def deliver(self, sender: str, amount: int) -> TransferSignal:
        """Отражение собственных токенов sender всем держателям."""

    @abstractmethod
    def mint(self, account: str, amount: int) -> None:
        """Выпуск номинального supply."""

    @abstractmethod
    def burn(self, account: str, amount: int) -> None:
        """Сжигание номинального supply."""

    @abstractmethod
    def reflected_total(self) -> Optional[int]:
        """r_total (None если режим не reflective)."""

    @abstractmethod
    def holders(self) -> List[HolderBalance]:
        """Держатели с ненулевым балансом."""


# =============================================================================
# REFLECTIVE
# =============================================================================


class ReflectiveMode(BalanceMode):
    """r-space балансы с отражением комиссии."""

    mode = LedgerMode.REFLECTIVE

    def __init__(self, initial_supply: int, owner: str) -> None:
        self._ledger = RateLedger()
        self._ledger.initialize(initial_supply, owner)
        self._engine = ReflectionEngine(self._ledger)
        self._supply = initial_supply

    @property
    def ledger(self) -> RateLedger:
        return self._ledger

    @property
    def engine(self) -> ReflectionEngine:
        return self._engine

    def total_supply(self) -> int:
        return self._supply

    def balance_of(self, account: str) -> int:
        return self._ledger.nominal_balance_of(account, self._supply)

    def transfer(
        self, sender: str, recipient: str, amount: int, fee_bps: int, reflect: bool
    ) -> TransferSignal:
        if reflect:
            return self._engine.transfer_with_reflection(
                sender, recipient, amount, fee_bps, self._supply
            )
        return self._engine.transfer_without_reflection(
            sender, recipient, amount, self._supply
        )

    def total_fees(self) -> int:
        return self._ledger.t_fee_total

    def token_from_reflection(self, r_amount: int) -> int:
        return self._ledger.nominal_from_reflected(r_amount, self._supply)

    def reflection_from_token(
        self, amount: int, deduct_fee: bool, fee_bps: int
    ) -> int:
        return self._engine.reflection_from_token(
            amount, deduct_fee, fee_bps, self._supply
        )

    def deliver(self, sender: str, amount: int) -> TransferSignal:
        return self._engine.deliver(sender, amount, self._supply)

    def mint(self, account: str, amount: int) -> None:
        raise MintingDisabledError("Minting is disabled for reflective tokens")

    def burn(self, account: str, amount: int) -> None:
        raise BurningDisabledError("Burning is disabled for reflective tokens")

    def reflected_total(self) -> Optional[int]:
        return self._ledger.r_total

    def holders(self) -> List[HolderBalance]:
        return [
            HolderBalance(
                account=account,
                balance=self.balance_of(account),
                reflected_balance=self._ledger.reflected_balance_of(account),
            )
            for account in sorted(self._ledger.holders())
        ]


# =============================================================================
# STANDARD
# =============================================================================


class StandardMode(BalanceMode):
    """Обычные номинальные балансы без reflection.

    fee_bps и reflect игнорируются: комиссия в этом режиме не взимается.
    """

    mode = LedgerMode.STANDARD

    def __init__(self, initial_supply: int, owner: str) -> None:
        validate_uint256(initial_supply, "initial_supply")
        self._balances: Dict[str, int] = {}
        if initial_supply > 0:
            self._balances[owner] = initial_supply
        self._supply = initial_supply

    def total_supply(self) -> int:
        return self._supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def transfer(
        self, sender: str, recipient: str, amount: int, fee_bps: int, reflect: bool
    ) -> TransferSignal:
        validate_uint256(amount, "amount")
        signal = TransferSignal(
            kind=TransferKind.EXEMPT,
            sender=sender,
            recipient=recipient,
            amount=amount,
            credited_amount=amount,
        )

        if amount > 0:
            available = self._balances.get(sender, 0)
            if available < amount:
                raise InsufficientBalanceError(sender, available, amount)

            if recipient != sender:
                new_recipient = checked_add(self._balances.get(recipient, 0), amount)
                self._set_balance(sender, available - amount)
                self._set_balance(recipient, new_recipient)

        return signal

    def total_fees(self) -> int:
        return 0

    def token_from_reflection(self, r_amount: int) -> int:
        raise ReflectionDisabledError("Token is not reflective")

    def reflection_from_token(
        self, amount: int, deduct_fee: bool, fee_bps: int
    ) -> int:
        raise ReflectionDisabledError("Token is not reflective")

    def deliver(self, sender: str, amount: int) -> TransferSignal:
        raise ReflectionDisabledError("Token is not reflective")

    def mint(self, account: str, amount: int) -> None:
        validate_uint256(amount, "amount")
        new_supply = checked_add(self._supply, amount)
        new_balance = checked_add(self._balances.get(account, 0), amount)

        self._supply = new_supply
        self._set_balance(account, new_balance)
        logger.debug(f"Minted {amount} to {account}, supply={new_supply}")

    def burn(self, account: str, amount: int) -> None:
        validate_uint256(amount, "amount")
        available = self._balances.get(account, 0)
        if available < amount:
            raise InsufficientBalanceError(account, available, amount)
        new_supply = checked_sub(self._supply, amount)

        self._supply = new_supply
        self._set_balance(account, available - amount)
        logger.debug(f"Burned {amount} from {account}, supply={new_supply}")

    def reflected_total(self) -> Optional[int]:
        return None

    def holders(self) -> List[HolderBalance]:
        return [
            HolderBalance(account=account, balance=balance)
            for account, balance in sorted(self._balances.items())
        ]

    def _set_balance(self, account: str, balance: int) -> None:
        if balance == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = balance
