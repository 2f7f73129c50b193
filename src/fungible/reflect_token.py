"""ReflectToken — граница fungible токена вокруг balance mode.

Отвечает за всё, что НЕ является accounting ядром:
- валидация адресов до любого перевода
- fee authority (кто может менять fee rate, exemptions и supply)
- маршрутизация transfer в reflecting / exempt путь
- mint/burn gating (запрещены в reflective режиме)
- сериализация доступа: все публичные операции под одним RLock

Ядро (RateLedger, ReflectionEngine) считает адреса уже проверенными.
"""

import logging
import threading
from typing import Final, Optional, Set

from src.core.contracts import validate_ledger_snapshot
from src.core.domain.ledger_state import LedgerSnapshot
from src.core.domain.transfer import TransferSignal
from src.core.domain.units import rate_of
from src.core.errors import InvalidAddressError, UnauthorizedError
from src.core.math.fees import validate_fee_bps
from src.core.math.numerical_safeguards import validate_uint256
from src.fungible.config import TokenConfig
from src.reflection.modes import BalanceMode, ReflectiveMode, StandardMode

logger = logging.getLogger(__name__)

# Sentinel адрес, недопустимый как участник перевода
ZERO_ADDRESS: Final[str] = "0x" + "0" * 40

SNAPSHOT_SCHEMA_VERSION: Final[str] = "1"


def validate_address(address: str, name: str) -> None:
    """
    Проверка адреса участника.

    Raises:
        InvalidAddressError: Если адрес пустой, не str или zero-address
    """
    if not isinstance(address, str) or not address:
        raise InvalidAddressError(f"{name} must be a non-empty string, got {address!r}")

    if address.lower() == ZERO_ADDRESS:
        raise InvalidAddressError(f"{name} cannot be the zero address")


class ReflectToken:
    """Fungible токен с опциональным reflection.

    Usage:
        config = TokenConfig.from_whole_tokens(1_000_000, fee_bps=100)
        token = ReflectToken(config, owner="0xowner")
        token.transfer("0xowner", "0xalice", config.units(1_000))
        token.balance_of("0xalice")
    """

    def __init__(
        self,
        config: TokenConfig,
        owner: str,
        authority: Optional[str] = None,
    ) -> None:
        """
        Args:
            config: конфигурация токена (режим, supply, fee rate)
            owner: получатель всего начального supply
            authority: адрес, управляющий fee rate и supply (default: owner)

        Raises:
            DegenerateSupplyError: reflective режим с нулевым supply
        """
        validate_address(owner, "owner")
        if authority is not None:
            validate_address(authority, "authority")

        self._config = config
        self._owner = owner
        self._authority = authority or owner
        self._fee_bps = config.fee_bps
        self._fee_exempt: Set[str] = set()
        self._lock = threading.RLock()

        mode_cls = ReflectiveMode if config.reflective else StandardMode
        self._mode: BalanceMode = mode_cls(config.initial_supply, owner)

        logger.info(
            f"ReflectToken created: mode={self._mode.mode.value}, "
            f"supply={config.initial_supply}, fee_bps={self._fee_bps}"
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def config(self) -> TokenConfig:
        return self._config

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def authority(self) -> str:
        return self._authority

    @property
    def is_reflective(self) -> bool:
        return self._mode.is_reflective

    def total_supply(self) -> int:
        with self._lock:
            return self._mode.total_supply()

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self._mode.balance_of(account)

    def total_fees(self) -> int:
        with self._lock:
            return self._mode.total_fees()

    def token_from_reflection(self, r_amount: int) -> int:
        """Номинальный эквивалент r_amount (аудит r-space)."""
        with self._lock:
            return self._mode.token_from_reflection(r_amount)

    def reflection_from_token(self, amount: int, deduct_fee: bool = False) -> int:
        """r-эквивалент номинальной суммы по текущему fee rate."""
        with self._lock:
            return self._mode.reflection_from_token(amount, deduct_fee, self._fee_bps)

    def current_fee_bps(self) -> int:
        with self._lock:
            return self._fee_bps

    def is_fee_exempt(self, account: str) -> bool:
        with self._lock:
            return account in self._fee_exempt

    # -------------------------------------------------------------------------
    # Transfers
    # -------------------------------------------------------------------------

    def transfer(
        self, sender: str, recipient: str, amount: int, reflect: bool = True
    ) -> TransferSignal:
        """Перевод amount от sender к recipient.

        reflect=True направляет в fee-reflecting путь, кроме случаев, когда
        одна из сторон fee-exempt. Нулевой перевод принимается как no-op
        и в reflecting путь не попадает.

        Returns:
            TransferSignal для внешнего event/log слоя
        """
        validate_address(sender, "sender")
        validate_address(recipient, "recipient")
        validate_uint256(amount, "amount")

        with self._lock:
            exempt = sender in self._fee_exempt or recipient in self._fee_exempt
            use_reflection = reflect and not exempt and amount > 0
            return self._mode.transfer(
                sender, recipient, amount, self._fee_bps, use_reflection
            )

    def deliver(self, sender: str, amount: int) -> TransferSignal:
        """Отражение собственных токенов sender всем держателям."""
        validate_address(sender, "sender")
        validate_uint256(amount, "amount")

        with self._lock:
            return self._mode.deliver(sender, amount)

    # -------------------------------------------------------------------------
    # Authority-gated administration
    # -------------------------------------------------------------------------

    def set_fee_bps(self, caller: str, fee_bps: int) -> None:
        """Изменение fee rate.

        Raises:
            UnauthorizedError: если caller не authority
            InvalidFeeRateError: если fee_bps вне [0, 10000]
        """
        with self._lock:
            self._require_authority(caller, "set_fee_bps")
            validate_fee_bps(fee_bps)

            previous = self._fee_bps
            self._fee_bps = fee_bps
            logger.info(f"Fee rate changed: {previous} -> {fee_bps} bps")

    def set_fee_exempt(self, caller: str, account: str, exempt: bool) -> None:
        """Включение/исключение аккаунта из комиссии."""
        validate_address(account, "account")

        with self._lock:
            self._require_authority(caller, "set_fee_exempt")
            if exempt:
                self._fee_exempt.add(account)
            else:
                self._fee_exempt.discard(account)
            logger.info(f"Fee exemption for {account}: {exempt}")

    def mint(self, caller: str, account: str, amount: int) -> None:
        """Выпуск supply (только STANDARD режим).

        Raises:
            MintingDisabledError: в reflective режиме
        """
        validate_address(account, "account")

        with self._lock:
            self._require_authority(caller, "mint")
            self._mode.mint(account, amount)

    def burn(self, caller: str, account: str, amount: int) -> None:
        """Сжигание supply (только STANDARD режим).

        Raises:
            BurningDisabledError: в reflective режиме
        """
        validate_address(account, "account")

        with self._lock:
            self._require_authority(caller, "burn")
            self._mode.burn(account, amount)

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def snapshot(self) -> LedgerSnapshot:
        """Снапшот состояния, проверенный по ledger_snapshot контракту."""
        with self._lock:
            supply = self._mode.total_supply()
            reflected_total = self._mode.reflected_total()
            rate = None
            if reflected_total is not None:
                rate = rate_of(reflected_total, supply)

            snapshot = LedgerSnapshot(
                schema_version=SNAPSHOT_SCHEMA_VERSION,
                mode=self._mode.mode,
                fee_bps=self._fee_bps,
                total_supply=supply,
                reflected_total=reflected_total,
                rate=rate,
                total_fees=self._mode.total_fees(),
                holders=self._mode.holders(),
            )

        validate_ledger_snapshot(snapshot.model_dump(mode="json"))
        return snapshot

    def _require_authority(self, caller: str, action: str) -> None:
        if caller != self._authority:
            logger.warning(f"Unauthorized {action} attempt by {caller}")
            raise UnauthorizedError(f"{caller} is not allowed to {action}")
