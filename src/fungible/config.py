"""TokenConfig — конфигурация токена, фиксируемая при создании."""

from typing import Final

from pydantic import BaseModel, Field

from src.core.math.fees import FEE_BPS_MAX, FEE_BPS_MIN
from src.core.math.numerical_safeguards import MAX_UINT256

# Стандартная точность fungible токена
DEFAULT_DECIMALS: Final[int] = 18

# 10**77 < MAX_UINT256 < 10**78
MAX_DECIMALS: Final[int] = 77


class TokenConfig(BaseModel):
    """
    Конфигурация токена.

    reflective выбирает режим баланса один раз; после создания токена
    режим не меняется.
    """

    initial_supply: int = Field(
        ..., ge=0, le=MAX_UINT256, description="Начальный supply (минимальные единицы)"
    )
    fee_bps: int = Field(
        0, ge=FEE_BPS_MIN, le=FEE_BPS_MAX, description="Начальный fee rate (bps)"
    )
    reflective: bool = Field(True, description="Reflective режим (r-space)")
    decimals: int = Field(
        DEFAULT_DECIMALS, ge=0, le=MAX_DECIMALS, description="Десятичная точность"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_whole_tokens(
        cls,
        whole_tokens: int,
        decimals: int = DEFAULT_DECIMALS,
        **kwargs,
    ) -> "TokenConfig":
        """
        Конфигурация из supply в целых токенах.

        Examples:
            >>> TokenConfig.from_whole_tokens(1_000_000).initial_supply == 10**24
            True
        """
        return cls(
            initial_supply=whole_tokens * 10**decimals, decimals=decimals, **kwargs
        )

    def units(self, whole_tokens: int) -> int:
        """Количество минимальных единиц в whole_tokens токенах."""
        return whole_tokens * 10**self.decimals
