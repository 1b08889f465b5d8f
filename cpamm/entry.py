"""Caller-facing operations.

Each function runs one pool operation and delivers the resulting coins to
the caller through the Settlement collaborator. The pool call is atomic;
delivery happens only after it has committed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from cpamm.pool import Pool, create_pool
from cpamm.pricing import Direction

if TYPE_CHECKING:
    from cpamm.assets import CallerContext, Coin, Settlement
    from cpamm.capability import CreationCapability
    from cpamm.config import EngineConfig
    from cpamm.registry import PoolRegistry

logger = structlog.get_logger()


def _deliver(settlement: Settlement, ctx: CallerContext, *coins: Coin) -> None:
    for coin in coins:
        settlement.transfer(coin, ctx.sender)


def create_pool_and_deliver(
    cap: CreationCapability,
    base: Coin,
    token: Coin,
    initial_shares: int,
    fee_bps: int,
    ctx: CallerContext,
    settlement: Settlement,
    *,
    registry: PoolRegistry | None = None,
    config: EngineConfig | None = None,
) -> Pool:
    """Create a pool and send the initial shares to the caller."""
    pool, shares = create_pool(
        cap, base, token, initial_shares, fee_bps, registry=registry, config=config
    )
    _deliver(settlement, ctx, shares)
    return pool


def swap_and_deliver(
    pool: Pool,
    coin: Coin,
    direction: Direction | str,
    ctx: CallerContext,
    settlement: Settlement,
) -> int:
    """Swap and send the output to the caller, returning the output amount."""
    output = pool.swap(coin, direction)
    amount = output.value()
    _deliver(settlement, ctx, output)
    return amount


def add_liquidity_and_deliver(
    pool: Pool,
    base: Coin,
    token: Coin,
    ctx: CallerContext,
    settlement: Settlement,
) -> int:
    """Add liquidity and send the minted shares to the caller.

    Returns:
        Number of shares minted (possibly zero)
    """
    shares = pool.add_liquidity(base, token)
    minted = shares.value()
    _deliver(settlement, ctx, shares)
    return minted


def remove_liquidity_and_deliver(
    pool: Pool,
    shares: Coin,
    ctx: CallerContext,
    settlement: Settlement,
    amount: int | None = None,
) -> tuple[int, int]:
    """Burn shares and send both withdrawn assets to the caller.

    Returns:
        (base_out, token_out)
    """
    base, token = pool.remove_liquidity(shares, amount)
    amounts = base.value(), token.value()
    _deliver(settlement, ctx, base, token)
    logger.debug(
        "withdrawal_delivered",
        pool=pool.pool_id[-8:],
        recipient=ctx.sender,
        base_out=amounts[0],
        token_out=amounts[1],
    )
    return amounts
