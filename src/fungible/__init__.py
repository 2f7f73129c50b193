"""Fungible token boundary around the reflection core."""

from .config import DEFAULT_DECIMALS, TokenConfig
from .reflect_token import ZERO_ADDRESS, ReflectToken, validate_address

__all__ = [
    "DEFAULT_DECIMALS",
    "TokenConfig",
    "ZERO_ADDRESS",
    "ReflectToken",
    "validate_address",
]
