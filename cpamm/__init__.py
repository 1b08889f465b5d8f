"""Constant-product AMM engine."""

from cpamm.assets import AssetHandle, CallerContext, Coin, Settlement, ShareSupply
from cpamm.capability import CreationCapability, issue_creation_capability
from cpamm.config import DEFAULT_CONFIG, EngineConfig, load_config
from cpamm.errors import (
    AmmError,
    AssetMismatch,
    CapabilityAlreadyIssued,
    ConsumedAsset,
    EmptyPool,
    InsufficientBalance,
    InsufficientShares,
    InvalidAmount,
    InvalidCapability,
    InvalidFee,
    Overflow,
    PoolNotFound,
)
from cpamm.models import PoolSnapshot
from cpamm.pool import Pool, create_pool
from cpamm.pricing import Direction, get_input_price
from cpamm.registry import DEFAULT_REGISTRY, PoolRegistry

__version__ = "0.1.0"
__all__ = [
    # Pool
    "Pool",
    "create_pool",
    "Direction",
    "get_input_price",
    "PoolSnapshot",
    # Registry
    "PoolRegistry",
    "DEFAULT_REGISTRY",
    # Assets and collaborators
    "AssetHandle",
    "CallerContext",
    "Coin",
    "Settlement",
    "ShareSupply",
    "CreationCapability",
    "issue_creation_capability",
    # Config
    "EngineConfig",
    "DEFAULT_CONFIG",
    "load_config",
    # Errors
    "AmmError",
    "AssetMismatch",
    "CapabilityAlreadyIssued",
    "ConsumedAsset",
    "EmptyPool",
    "InsufficientBalance",
    "InsufficientShares",
    "InvalidAmount",
    "InvalidCapability",
    "InvalidFee",
    "Overflow",
    "PoolNotFound",
    "__version__",
]
