"""Registry of published pools.

Publishing a pool makes it a shared, globally addressable object: any
caller holding the pool id can look it up and trade against it.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import structlog

from cpamm.errors import PoolNotFound

if TYPE_CHECKING:
    from cpamm.pool import Pool

logger = structlog.get_logger()


class PoolRegistry:
    """Thread-safe store of pools keyed by pool id.

    A secondary index by token type lists every pool trading a given asset
    against base; several pools may exist for the same market.
    """

    def __init__(self) -> None:
        self._pools: dict[str, Pool] = {}
        self._pools_by_token: dict[str, list[Pool]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pools)

    def __contains__(self, pool_id: object) -> bool:
        with self._lock:
            return pool_id in self._pools

    def publish(self, pool: Pool) -> str:
        """Publish a pool, returning its id.

        Raises:
            ValueError: If a different pool is already published under the id
        """
        with self._lock:
            existing = self._pools.get(pool.pool_id)
            if existing is pool:
                return pool.pool_id
            if existing is not None:
                raise ValueError(f"Pool id {pool.pool_id} is already published")
            self._pools[pool.pool_id] = pool
            self._pools_by_token.setdefault(pool.token_type, []).append(pool)

        logger.debug("pool_published", pool=pool.pool_id[-8:], token_type=pool.token_type)
        return pool.pool_id

    def get(self, pool_id: str) -> Pool:
        """Look up a published pool.

        Raises:
            PoolNotFound: If no pool is published under pool_id
        """
        with self._lock:
            pool = self._pools.get(pool_id)
        if pool is None:
            raise PoolNotFound(pool_id)
        return pool

    def pools_for_token(self, token_type: str) -> list[Pool]:
        """All pools trading token_type against base, in publication order."""
        with self._lock:
            return list(self._pools_by_token.get(token_type, []))


# Process-wide registry used when create_pool() is not given one
DEFAULT_REGISTRY = PoolRegistry()
