"""Engine error classes.

Every failure is a local validation error raised synchronously to the
immediate caller. Nothing is retried and a failed call leaves no state
change behind.
"""


class AmmError(Exception):
    """Base error for pool operations."""

    pass


class InvalidAmount(AmmError):
    """A required input quantity is zero."""

    pass


class InvalidFee(AmmError):
    """Fee parameter outside [0, 1000)."""

    pass


class InsufficientShares(AmmError):
    """Attempt to burn more shares than are held or outstanding."""

    pass


class Overflow(AmmError, ArithmeticError):
    """An intermediate product or stored value exceeds its integer width."""

    pass


class EmptyPool(AmmError):
    """Pool has no outstanding shares to price a deposit against."""

    pass


class AssetMismatch(AmmError):
    """Asset handle does not carry the asset the operation expects."""

    pass


class InsufficientBalance(AmmError):
    """Split amount exceeds the value of the asset handle."""

    pass


class ConsumedAsset(AmmError):
    """Asset handle was already moved into a pool or merged away."""

    pass


class InvalidCapability(AmmError):
    """Creation capability is missing or forged."""

    pass


class CapabilityAlreadyIssued(AmmError):
    """The creation capability can only be issued once per process."""

    pass


class PoolNotFound(AmmError, KeyError):
    """No pool is published under the requested id."""

    pass
