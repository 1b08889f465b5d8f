"""Asset handle adapters.

The ledger that owns real assets lives outside the engine. This module
gives the engine the handle semantics it relies on:
- a Coin is exclusively owned; once moved into a pool or merged into
  another coin it is consumed and any further use raises ConsumedAsset
- split/join move value between handles of the same asset, never create it
- a ShareSupply is the only authority that can mint or burn a pool's shares

CallerContext and Settlement describe the collaborators that resolve the
caller identity and deliver outputs; the engine never implements them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cpamm.errors import (
    AssetMismatch,
    ConsumedAsset,
    InsufficientBalance,
    InsufficientShares,
    InvalidAmount,
)
from cpamm.safe_int import S


@runtime_checkable
class AssetHandle(Protocol):
    """Opaque handle on an amount of one asset."""

    @property
    def asset(self) -> str: ...

    def value(self) -> int: ...


@runtime_checkable
class CallerContext(Protocol):
    """Resolves the identity outputs are ultimately delivered to."""

    @property
    def sender(self) -> str: ...


@runtime_checkable
class Settlement(Protocol):
    """Delivers asset handles to an account."""

    def transfer(self, coin: Coin, recipient: str) -> None: ...


class Coin:
    """Exclusively owned amount of a single asset.

    Attributes:
        asset: Asset type tag (e.g. "BASE", "USDC", "LSP<USDC>@<pool id>")
    """

    __slots__ = ("_asset", "_value", "_consumed")

    def __init__(self, asset: str, value: int) -> None:
        if not asset:
            raise AssetMismatch("Coin requires a non-empty asset tag")
        self._asset = asset
        self._value = S(value).to_u64()
        self._consumed = False

    def __repr__(self) -> str:
        state = " consumed" if self._consumed else ""
        return f"Coin({self._asset!r}, {self._value}{state})"

    @property
    def asset(self) -> str:
        return self._asset

    @property
    def consumed(self) -> bool:
        """True once the coin has been moved away."""
        return self._consumed

    def value(self) -> int:
        """Amount held by this coin."""
        self._ensure_live()
        return self._value

    @classmethod
    def zero(cls, asset: str) -> Coin:
        """Create an empty coin of the given asset."""
        return cls(asset, 0)

    def split(self, amount: int) -> Coin:
        """Move amount out of this coin into a new coin.

        Raises:
            InsufficientBalance: If amount exceeds this coin's value
        """
        self._ensure_live()
        if amount < 0:
            raise InvalidAmount(f"Cannot split negative amount {amount}")
        if amount > self._value:
            raise InsufficientBalance(f"Cannot split {amount} from coin holding {self._value}")
        self._value -= amount
        return Coin(self._asset, amount)

    def join(self, other: Coin) -> Coin:
        """Merge other into this coin, consuming other.

        Raises:
            AssetMismatch: If the coins hold different assets
        """
        self._ensure_live()
        other._ensure_live()
        if other is self:
            raise ConsumedAsset("Cannot join a coin with itself")
        if other.asset != self._asset:
            raise AssetMismatch(f"Cannot join {other.asset} into {self._asset}")
        self._value = (S(self._value) + other._value).to_u64()
        other._take()
        return self

    def destroy_zero(self) -> None:
        """Consume an empty coin.

        Raises:
            InvalidAmount: If the coin still holds value
        """
        self._ensure_live()
        if self._value != 0:
            raise InvalidAmount(f"Cannot destroy coin holding {self._value}")
        self._consumed = True

    def _take(self) -> int:
        """Consume the coin, returning the value it held."""
        self._ensure_live()
        amount = self._value
        self._value = 0
        self._consumed = True
        return amount

    def _ensure_live(self) -> None:
        if self._consumed:
            raise ConsumedAsset(f"Coin of {self._asset} was already consumed")


def take(coin: Coin) -> int:
    """Consume a coin on behalf of a pool and return its value."""
    return coin._take()


class ShareSupply:
    """Minting authority for one pool's liquidity shares.

    The asset tag is unique per pool, so shares minted by one pool cannot
    be burned against another.
    """

    def __init__(self, asset: str) -> None:
        self._asset = asset
        self._total = 0

    def __repr__(self) -> str:
        return f"ShareSupply({self._asset!r}, total={self._total})"

    @property
    def asset(self) -> str:
        return self._asset

    def total_supply(self) -> int:
        return self._total

    def check_mint(self, amount: int) -> int:
        """Return the supply after minting amount, without minting.

        Raises:
            Overflow: If the new supply exceeds u64
        """
        return (S(self._total) + amount).to_u64()

    def check_burn(self, coin: Coin, amount: int | None = None) -> int:
        """Validate a burn without performing it.

        Returns:
            Number of shares that would be burned

        Raises:
            AssetMismatch: If the coin is not this pool's share
            InsufficientShares: If amount exceeds the coin or the supply
        """
        if coin.asset != self._asset:
            raise AssetMismatch(f"Shares of {coin.asset} cannot be burned by {self._asset}")
        held = coin.value()
        burn = held if amount is None else amount
        if burn < 0:
            raise InvalidAmount(f"Cannot burn negative amount {burn}")
        if burn > held:
            raise InsufficientShares(f"Cannot burn {burn} shares from coin holding {held}")
        if burn > self._total:
            raise InsufficientShares(f"Cannot burn {burn} shares, total supply is {self._total}")
        return burn

    def mint(self, amount: int) -> Coin:
        """Mint amount shares into a new coin."""
        self._total = self.check_mint(amount)
        return Coin(self._asset, amount)

    def burn(self, coin: Coin) -> int:
        """Burn the whole coin, returning the amount burned."""
        amount = self.check_burn(coin)
        take(coin)
        self._total -= amount
        return amount
