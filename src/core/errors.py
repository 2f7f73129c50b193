"""
Errors — Таксономия ошибок reflection ledger

Все ошибки синхронные и non-retryable: это либо нарушение контракта
вызывающей стороны (zero transfer, zero supply, r_amount вне r-space),
либо арифметическая невозможность (overflow/underflow).

КРИТИЧЕСКИЙ ИНВАРИАНТ:
Любая ошибка прерывает операцию ДО первой мутации состояния.
Частично применённый transfer (debit без credit) никогда не наблюдаем.
"""


# =============================================================================
# BASE
# =============================================================================


class LedgerError(Exception):
    """Базовый класс всех ошибок ledger."""

    pass


# =============================================================================
# SUPPLY / RATE
# =============================================================================


class DegenerateSupplyError(LedgerError):
    """
    Reflective ledger нельзя инициализировать с нулевым supply.

    При нулевом supply r_total = 0 и rate не определён. Вызывающая сторона
    должна выбрать non-reflective режим.
    """

    pass


class RateUndefinedError(LedgerError):
    """Rate запрошен при nominal_total_supply == 0."""

    pass


class ReflectionTotalTooSmallError(LedgerError):
    """r_amount больше r_total: значение не может принадлежать этому r-space."""

    pass


class ReflectionExhaustedError(LedgerError):
    """
    Сжатие r_total опустило бы его ниже nominal_total_supply.

    При r_total < supply курс r_total // supply становится нулевым:
    ненулевые r-балансы перестают конвертироваться в t-space, а любой
    перевод стоит 0 в r-space.
    """

    pass


class AmountExceedsSupplyError(LedgerError):
    """Номинальная сумма больше total supply."""

    pass


class ReflectionDisabledError(LedgerError):
    """r-space операция вызвана в non-reflective режиме."""

    pass


# =============================================================================
# TRANSFERS
# =============================================================================


class InsufficientBalanceError(LedgerError):
    """
    r-баланс отправителя меньше запрошенного debit.

    Attributes:
        account: Адрес отправителя
        available: Текущий r-баланс
        requested: Запрошенный r-debit
    """

    def __init__(self, account: str, available: int, requested: int):
        self.account = account
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient balance for {account}: "
            f"available={available}, requested={requested}"
        )


class ZeroTransferError(LedgerError):
    """Fee-reflecting transfer с нулевой суммой."""

    pass


class ArithmeticOverflowError(LedgerError):
    """Результат вышел за пределы uint256 (overflow или underflow)."""

    pass


# =============================================================================
# TOKEN BOUNDARY
# =============================================================================


class MintingDisabledError(LedgerError):
    """Mint запрещён: supply статичен в reflective режиме."""

    pass


class BurningDisabledError(LedgerError):
    """Burn запрещён: supply статичен в reflective режиме."""

    pass


class InvalidFeeRateError(LedgerError):
    """fee_bps вне диапазона [0, 10000]."""

    pass


class InvalidAddressError(LedgerError):
    """Пустой адрес или zero-address."""

    pass


class UnauthorizedError(LedgerError):
    """Вызывающий не является fee/supply authority."""

    pass
