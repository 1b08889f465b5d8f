"""Constant-product pricing.

The pool retains the swap fee: the full input is added to the input
reserve while only the post-fee amount is priced against the curve.

Formula:
    input_after_fee = input_amount * (1000 - fee_bps)
    output = (input_after_fee * output_reserve) / (input_reserve * 1000 + input_after_fee)

Since the denominator is strictly greater than input_after_fee whenever
input_reserve > 0, output is strictly less than output_reserve for any
finite input.
"""

from __future__ import annotations

from enum import Enum

from cpamm.constants import FEE_SCALING
from cpamm.errors import InvalidAmount, InvalidFee
from cpamm.safe_int import S


class Direction(str, Enum):
    """Which reserve the swap input is deposited into."""

    BASE_TO_TOKEN = "base_to_token"
    TOKEN_TO_BASE = "token_to_base"

    @property
    def reversed(self) -> Direction:
        """The opposite swap direction."""
        if self is Direction.BASE_TO_TOKEN:
            return Direction.TOKEN_TO_BASE
        return Direction.BASE_TO_TOKEN


def validate_fee(fee_bps: int) -> int:
    """Check a fee rate is within [0, FEE_SCALING).

    Returns:
        The validated fee

    Raises:
        InvalidFee: If the fee is outside range or not an integer
    """
    if not isinstance(fee_bps, int) or isinstance(fee_bps, bool):
        raise InvalidFee(f"Fee must be an integer, got {type(fee_bps).__name__}")
    if not 0 <= fee_bps < FEE_SCALING:
        raise InvalidFee(f"Fee {fee_bps} outside [0, {FEE_SCALING})")
    return fee_bps


def fee_multiplier(fee_bps: int) -> int:
    """Fee multiplier for the pricing formula (FEE_SCALING - fee_bps).

    For fee_bps=3 (0.3%), this returns 997.
    """
    return FEE_SCALING - validate_fee(fee_bps)


def get_input_price(
    input_amount: int,
    input_reserve: int,
    output_reserve: int,
    fee_bps: int,
) -> int:
    """Calculate the output for selling input_amount into a pool.

    Every intermediate product is checked against the 128-bit working width,
    the result against 64 bits.

    Args:
        input_amount: Amount deposited into the input reserve
        input_reserve: Current reserve of the input asset
        output_reserve: Current reserve of the output asset
        fee_bps: Fee rate in tenths of a percent

    Returns:
        Output amount, floored

    Raises:
        InvalidAmount: If input_amount is zero
        InvalidFee: If fee_bps is outside [0, 1000)
        Overflow: If an intermediate product does not fit u128
    """
    if input_amount <= 0:
        raise InvalidAmount(f"Swap input must be positive, got {input_amount}")

    amount_in_with_fee = (S(input_amount) * S(fee_multiplier(fee_bps))).checked_u128()
    numerator = (amount_in_with_fee * S(output_reserve)).checked_u128()
    denominator = (S(input_reserve) * S(FEE_SCALING)).checked_u128() + amount_in_with_fee
    denominator.checked_u128()

    return (numerator // denominator).to_u64()


def reserves_for(direction: Direction, reserve_base: int, reserve_token: int) -> tuple[int, int]:
    """Order reserves as (input_reserve, output_reserve) for a direction."""
    if direction is Direction.BASE_TO_TOKEN:
        return reserve_base, reserve_token
    return reserve_token, reserve_base
