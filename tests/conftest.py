"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from cpamm.assets import Coin
from cpamm.capability import CreationCapability, issue_creation_capability
from cpamm.pool import Pool, create_pool
from cpamm.registry import PoolRegistry
from tests.helpers import (
    REF_FEE_BPS,
    REF_RESERVE_BASE,
    REF_RESERVE_TOKEN,
    REF_SHARES,
    USDC,
    make_deposit,
)

PoolFactory = Callable[..., tuple[Pool, Coin]]


@pytest.fixture(scope="session")
def creation_cap() -> CreationCapability:
    """The process-wide creation capability (issued once per test session)."""
    return issue_creation_capability()


@pytest.fixture
def registry() -> PoolRegistry:
    """Fresh registry so tests never publish into DEFAULT_REGISTRY."""
    return PoolRegistry()


@pytest.fixture
def make_pool(creation_cap: CreationCapability, registry: PoolRegistry) -> PoolFactory:
    """Factory for seeded pools.

    Usage:
        pool, shares = make_pool(base_in=1000, token_in=500, shares=100, fee_bps=3)
    """

    def _make(
        base_in: int = REF_RESERVE_BASE,
        token_in: int = REF_RESERVE_TOKEN,
        shares: int = REF_SHARES,
        fee_bps: int = REF_FEE_BPS,
        token: str = USDC,
    ) -> tuple[Pool, Coin]:
        base, tok = make_deposit(base_in, token_in, token=token)
        return create_pool(creation_cap, base, tok, shares, fee_bps, registry=registry)

    return _make


@pytest.fixture
def reference_pool(make_pool: PoolFactory) -> tuple[Pool, Coin]:
    """Pool with base=1e9, token=1e6, 1000 shares and a 0.3% fee."""
    return make_pool()
