"""Pydantic models for pool state exposed to off-chain readers."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from cpamm.constants import FEE_SCALING, U64_MAX


def validate_u64(value: Any) -> int:
    """Validate that a value is a u64, accepting ints or decimal strings.

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("U64 cannot be a boolean")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"U64 must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"U64 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"U64 cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"U64 overflow: {value} > 2^64-1")
    return value


# 64-bit unsigned integer (validated)
U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer"),
]


class PoolSnapshot(BaseModel):
    """Point-in-time view of a pool's reserves and share supply."""

    pool_id: str
    token_type: str
    base_asset: str
    reserve_base: U64
    reserve_token: U64
    share_supply: U64
    fee_bps: int = Field(ge=0, lt=FEE_SCALING, description="Fee in tenths of a percent")

    model_config = ConfigDict(frozen=True)

    @property
    def invariant(self) -> int:
        """Constant-product invariant reserve_base * reserve_token."""
        return self.reserve_base * self.reserve_token

    @property
    def is_inert(self) -> bool:
        """True when no shares are outstanding."""
        return self.share_supply == 0
