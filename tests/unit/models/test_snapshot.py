"""Tests for PoolSnapshot."""

import pytest
from pydantic import ValidationError

from cpamm.assets import Coin
from cpamm.constants import U64_MAX
from cpamm.models import PoolSnapshot
from cpamm.pricing import Direction
from tests.helpers import BASE, USDC


def _snapshot(**overrides) -> PoolSnapshot:
    data = {
        "pool_id": "0x1",
        "token_type": USDC,
        "base_asset": BASE,
        "reserve_base": 1000,
        "reserve_token": 2000,
        "share_supply": 10,
        "fee_bps": 3,
    }
    data.update(overrides)
    return PoolSnapshot(**data)


class TestPoolSnapshot:
    """Tests for the snapshot model."""

    def test_from_pool(self, reference_pool):
        pool, _ = reference_pool
        snap = pool.snapshot()
        assert snap.pool_id == pool.pool_id
        assert snap.token_type == USDC
        assert (snap.reserve_base, snap.reserve_token, snap.share_supply) == pool.get_amounts()
        assert snap.fee_bps == 3
        assert snap.invariant == pool.invariant()
        assert not snap.is_inert

    def test_snapshot_is_point_in_time(self, reference_pool):
        pool, _ = reference_pool
        snap = pool.snapshot()
        pool.swap(Coin(BASE, 5_000_000), Direction.BASE_TO_TOKEN)
        assert snap.reserve_base == 1_000_000_000
        assert pool.snapshot().reserve_base == 1_005_000_000

    def test_accepts_decimal_strings(self):
        snap = _snapshot(reserve_base="123")
        assert snap.reserve_base == 123

    def test_u64_bounds(self):
        assert _snapshot(reserve_token=U64_MAX).reserve_token == U64_MAX
        with pytest.raises(ValidationError):
            _snapshot(reserve_token=U64_MAX + 1)
        with pytest.raises(ValidationError):
            _snapshot(share_supply=-1)
        with pytest.raises(ValidationError):
            _snapshot(reserve_base="abc")
        with pytest.raises(ValidationError):
            _snapshot(reserve_base=True)

    def test_fee_bounds(self):
        with pytest.raises(ValidationError):
            _snapshot(fee_bps=1000)

    def test_frozen(self):
        snap = _snapshot()
        with pytest.raises(ValidationError):
            snap.reserve_base = 5  # type: ignore[misc]

    def test_json_round_trip(self):
        snap = _snapshot()
        assert PoolSnapshot.model_validate_json(snap.model_dump_json()) == snap
