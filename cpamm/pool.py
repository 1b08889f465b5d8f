"""Constant-product liquidity pool.

A Pool[T] trades the numeraire (base) asset against asset T. Liquidity
providers hold shares minted by the pool's own ShareSupply; swaps never
change the share supply.

Every operation runs under the pool's lock and follows the same shape:
validate inputs, compute every new value (all width checks included),
then consume the input coins and commit. A call that raises leaves the
pool and the caller's coins exactly as they were.
"""

from __future__ import annotations

import threading
import uuid
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from cpamm.assets import Coin, ShareSupply, take
from cpamm.capability import require_capability
from cpamm.config import DEFAULT_CONFIG, EngineConfig
from cpamm.errors import AssetMismatch, EmptyPool, InvalidAmount
from cpamm.models import PoolSnapshot
from cpamm.pricing import Direction, get_input_price, reserves_for, validate_fee
from cpamm.registry import DEFAULT_REGISTRY, PoolRegistry
from cpamm.safe_int import S

if TYPE_CHECKING:
    from cpamm.capability import CreationCapability

logger = structlog.get_logger()

T = TypeVar("T")


def _new_pool_id() -> str:
    return "0x" + uuid.uuid4().hex


def share_asset_for(token_type: str, pool_id: str) -> str:
    """Asset tag of the shares minted by one pool."""
    return f"LSP<{token_type}>@{pool_id}"


class Pool(Generic[T]):
    """Liquidity pool for the (base, T) market.

    T is the traded asset; since Python generics are erased at runtime the
    asset identity is also kept as the token_type tag and checked against
    every coin passed in.
    """

    def __init__(
        self,
        token_type: str,
        fee_bps: int,
        base_asset: str = DEFAULT_CONFIG.base_asset,
        pool_id: str | None = None,
    ) -> None:
        """Create an empty pool. Use create_pool() to create a seeded one."""
        if token_type == base_asset:
            raise AssetMismatch(f"Pool cannot trade {base_asset} against itself")
        self.pool_id = pool_id or _new_pool_id()
        self.token_type = token_type
        self.base_asset = base_asset
        self.fee_bps = validate_fee(fee_bps)
        self._reserve_base = 0
        self._reserve_token = 0
        self._shares = ShareSupply(share_asset_for(token_type, self.pool_id))
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return (
            f"Pool(id={self.pool_id[-8:]}, {self.base_asset}/{self.token_type}, "
            f"reserves=({self._reserve_base}, {self._reserve_token}), "
            f"shares={self.share_supply}, fee_bps={self.fee_bps})"
        )

    @property
    def reserve_base(self) -> int:
        return self._reserve_base

    @property
    def reserve_token(self) -> int:
        return self._reserve_token

    @property
    def share_supply(self) -> int:
        """Outstanding shares, as reported by the pool's minting authority."""
        return self._shares.total_supply()

    @property
    def share_asset(self) -> str:
        return self._shares.asset

    def get_amounts(self) -> tuple[int, int, int]:
        """Return (reserve_base, reserve_token, share_supply) read atomically."""
        with self._lock:
            return self._reserve_base, self._reserve_token, self.share_supply

    def invariant(self) -> int:
        """Constant-product invariant reserve_base * reserve_token."""
        with self._lock:
            return self._reserve_base * self._reserve_token

    def snapshot(self) -> PoolSnapshot:
        """Serializable view of the current pool state."""
        with self._lock:
            return PoolSnapshot(
                pool_id=self.pool_id,
                token_type=self.token_type,
                base_asset=self.base_asset,
                reserve_base=self._reserve_base,
                reserve_token=self._reserve_token,
                share_supply=self.share_supply,
                fee_bps=self.fee_bps,
            )

    def _asset_for(self, direction: Direction) -> tuple[str, str]:
        """Return (input_asset, output_asset) for a swap direction."""
        if direction is Direction.BASE_TO_TOKEN:
            return self.base_asset, self.token_type
        return self.token_type, self.base_asset

    def _expect(self, coin: Coin, asset: str) -> int:
        if coin.asset != asset:
            raise AssetMismatch(f"Expected {asset} coin, got {coin.asset}")
        return coin.value()

    # --- Pricing ---

    def quote(self, amount: int, direction: Direction | str) -> int:
        """Output a swap of amount would produce right now, without swapping.

        Raises:
            InvalidAmount: If amount is zero
            Overflow: If an intermediate product does not fit u128
        """
        direction = Direction(direction)
        with self._lock:
            input_reserve, output_reserve = reserves_for(
                direction, self._reserve_base, self._reserve_token
            )
            return get_input_price(amount, input_reserve, output_reserve, self.fee_bps)

    # --- Swap ---

    def swap(self, coin: Coin, direction: Direction | str) -> Coin:
        """Sell coin into the pool, returning the output asset.

        The full input is added to the input reserve; the fee stays in the
        pool and grows the invariant.

        Raises:
            AssetMismatch: If coin is not the input asset for direction
            InvalidAmount: If coin holds zero
            Overflow: If the input reserve would exceed u64
        """
        direction = Direction(direction)
        input_asset, output_asset = self._asset_for(direction)

        with self._lock:
            amount = self._expect(coin, input_asset)
            if amount == 0:
                raise InvalidAmount("Swap input must be positive")

            input_reserve, output_reserve = reserves_for(
                direction, self._reserve_base, self._reserve_token
            )
            output = get_input_price(amount, input_reserve, output_reserve, self.fee_bps)
            new_input_reserve = (S(input_reserve) + amount).to_u64()
            new_output_reserve = output_reserve - output

            take(coin)
            if direction is Direction.BASE_TO_TOKEN:
                self._reserve_base, self._reserve_token = new_input_reserve, new_output_reserve
            else:
                self._reserve_token, self._reserve_base = new_input_reserve, new_output_reserve

        logger.debug(
            "swap_executed",
            pool=self.pool_id[-8:],
            direction=direction.value,
            amount_in=amount,
            amount_out=output,
        )
        return Coin(output_asset, output)

    def swap_base(self, base: Coin) -> Coin:
        """Swap base for T."""
        return self.swap(base, Direction.BASE_TO_TOKEN)

    def swap_token(self, token: Coin) -> Coin:
        """Swap T for base."""
        return self.swap(token, Direction.TOKEN_TO_BASE)

    # --- Liquidity ---

    def add_liquidity(self, base: Coin, token: Coin) -> Coin:
        """Deposit both assets and mint shares.

        Shares are priced on the base contribution only:
            shares_minted = base_in * share_supply // reserve_base
        The token deposit is added to the reserve in full but does not affect
        the share count. A deposit that rounds to zero shares still succeeds
        and mints a zero-valued share coin.

        Raises:
            AssetMismatch: If either coin carries the wrong asset
            InvalidAmount: If either deposit is zero
            EmptyPool: If no shares are outstanding
            Overflow: If a reserve or the share supply would exceed u64
        """
        with self._lock:
            base_in = self._expect(base, self.base_asset)
            token_in = self._expect(token, self.token_type)
            if base_in == 0 or token_in == 0:
                raise InvalidAmount(
                    f"Deposits must be positive, got base={base_in} token={token_in}"
                )

            supply = self.share_supply
            if supply == 0:
                raise EmptyPool(f"Pool {self.pool_id} has no outstanding shares")

            minted = ((S(base_in) * supply).checked_u128() // self._reserve_base).to_u64()
            new_reserve_base = (S(self._reserve_base) + base_in).to_u64()
            new_reserve_token = (S(self._reserve_token) + token_in).to_u64()
            self._shares.check_mint(minted)

            take(base)
            take(token)
            self._reserve_base = new_reserve_base
            self._reserve_token = new_reserve_token
            shares = self._shares.mint(minted)

        if minted == 0:
            logger.warning(
                "zero_shares_minted",
                pool=self.pool_id[-8:],
                base_in=base_in,
                token_in=token_in,
            )
        logger.debug(
            "liquidity_added",
            pool=self.pool_id[-8:],
            base_in=base_in,
            token_in=token_in,
            shares_minted=minted,
        )
        return shares

    def remove_liquidity(self, shares: Coin, amount: int | None = None) -> tuple[Coin, Coin]:
        """Burn shares and withdraw the proportional part of both reserves.

            base_out  = reserve_base  * shares_in // share_supply
            token_out = reserve_token * shares_in // share_supply

        Args:
            shares: Share coin minted by this pool
            amount: Shares to burn; the whole coin when None. A partial burn
                leaves the remainder in the caller's coin.

        Returns:
            (base coin, token coin)

        Raises:
            AssetMismatch: If the shares belong to another pool
            InvalidAmount: If zero shares would be burned
            InsufficientShares: If amount exceeds the coin's value
        """
        with self._lock:
            burn = self._shares.check_burn(shares, amount)
            if burn == 0:
                raise InvalidAmount("Must burn a positive number of shares")

            supply = self.share_supply
            base_out = ((S(self._reserve_base) * burn).checked_u128() // supply).to_u64()
            token_out = ((S(self._reserve_token) * burn).checked_u128() // supply).to_u64()

            burned = shares if burn == shares.value() else shares.split(burn)
            self._shares.burn(burned)
            self._reserve_base -= base_out
            self._reserve_token -= token_out
            drained = self.share_supply == 0

        logger.debug(
            "liquidity_removed",
            pool=self.pool_id[-8:],
            shares_burned=burn,
            base_out=base_out,
            token_out=token_out,
        )
        if drained:
            logger.info("pool_drained", pool=self.pool_id[-8:])
        return Coin(self.base_asset, base_out), Coin(self.token_type, token_out)


def create_pool(
    cap: CreationCapability,
    base: Coin,
    token: Coin,
    initial_shares: int,
    fee_bps: int,
    *,
    registry: PoolRegistry | None = None,
    config: EngineConfig | None = None,
) -> tuple[Pool, Coin]:
    """Create and publish a new pool seeded with both deposits.

    initial_shares is chosen by the creator and is not derived from the
    deposit ratio; it fixes the initial share price.

    Args:
        cap: Creation capability, checked by reference only
        base: Initial base deposit
        token: Initial deposit of the traded asset; its asset tag becomes
            the pool's token_type
        initial_shares: Shares minted to the creator
        fee_bps: Fee rate in tenths of a percent, immutable afterwards
        registry: Registry to publish into (default: DEFAULT_REGISTRY)
        config: Engine configuration (default: DEFAULT_CONFIG)

    Returns:
        (pool, initial share coin)

    Raises:
        InvalidCapability: If cap is not a CreationCapability
        InvalidAmount: If a deposit or initial_shares is zero
        InvalidFee: If fee_bps is outside [0, 1000)
        AssetMismatch: If base is not the configured base asset
    """
    require_capability(cap)
    config = config or DEFAULT_CONFIG
    registry = registry if registry is not None else DEFAULT_REGISTRY

    if base.asset != config.base_asset:
        raise AssetMismatch(f"Expected {config.base_asset} coin, got {base.asset}")
    base_in = base.value()
    token_in = token.value()
    if base_in == 0 or token_in == 0:
        raise InvalidAmount(f"Deposits must be positive, got base={base_in} token={token_in}")
    validate_fee(fee_bps)
    if S(initial_shares).to_u64() == 0:
        raise InvalidAmount("Pool must mint at least one share")

    pool: Pool = Pool(token.asset, fee_bps, base_asset=config.base_asset)
    take(base)
    take(token)
    pool._reserve_base = base_in
    pool._reserve_token = token_in
    shares = pool._shares.mint(initial_shares)

    registry.publish(pool)
    logger.info(
        "pool_created",
        pool=pool.pool_id[-8:],
        token_type=pool.token_type,
        base_in=base_in,
        token_in=token_in,
        initial_shares=initial_shares,
        fee_bps=fee_bps,
    )
    return pool, shares
