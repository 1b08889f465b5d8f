"""Property checks for pool arithmetic.

Each property is swept over a seeded random sample of pools and inputs
plus a grid of boundary values, so failures are reproducible.
"""

import random

import pytest

from cpamm.assets import Coin
from cpamm.constants import FEE_SCALING, U64_MAX
from cpamm.errors import Overflow
from cpamm.pricing import Direction, get_input_price
from tests.helpers import BASE, USDC, make_deposit

SEED = 20240917
SAMPLES = 200

BOUNDARY_VALUES = [1, 2, 3, 999, 1000, 10**6, 10**9, 2**32, 2**63, U64_MAX - 1, U64_MAX]
BOUNDARY_FEES = [0, 1, 3, 500, 999]


def _random_cases(seed: int, count: int) -> list[tuple[int, int, int, int]]:
    """(reserve_base, reserve_token, amount, fee_bps) tuples that cannot overflow u128."""
    rng = random.Random(seed)
    cases = []
    for _ in range(count):
        reserve_base = rng.randint(1, 10**12)
        reserve_token = rng.randint(1, 10**12)
        amount = rng.randint(1, 10**12)
        fee = rng.choice([0, 1, 3, 30, 999, rng.randint(0, FEE_SCALING - 1)])
        cases.append((reserve_base, reserve_token, amount, fee))
    return cases


CASES = _random_cases(SEED, SAMPLES)


def _direction_asset(direction: Direction) -> str:
    return BASE if direction is Direction.BASE_TO_TOKEN else USDC


class TestSwapProperties:
    """Invariant growth, conservation and quote equivalence."""

    @pytest.mark.parametrize("direction", list(Direction))
    def test_invariant_never_decreases(self, make_pool, direction):
        for reserve_base, reserve_token, amount, fee in CASES:
            pool, _ = make_pool(base_in=reserve_base, token_in=reserve_token, shares=1, fee_bps=fee)
            k_before = pool.invariant()

            pool.swap(Coin(_direction_asset(direction), amount), direction)

            k_after = pool.invariant()
            if fee > 0:
                assert k_after > k_before
            else:
                assert k_after >= k_before

    @pytest.mark.parametrize("direction", list(Direction))
    def test_input_reserve_conserved(self, make_pool, direction):
        for reserve_base, reserve_token, amount, fee in CASES:
            pool, _ = make_pool(base_in=reserve_base, token_in=reserve_token, shares=1, fee_bps=fee)

            out = pool.swap(Coin(_direction_asset(direction), amount), direction).value()

            if direction is Direction.BASE_TO_TOKEN:
                assert pool.reserve_base == reserve_base + amount
                assert pool.reserve_token == reserve_token - out
            else:
                assert pool.reserve_token == reserve_token + amount
                assert pool.reserve_base == reserve_base - out

    @pytest.mark.parametrize("direction", list(Direction))
    def test_quote_equals_swap(self, make_pool, direction):
        for reserve_base, reserve_token, amount, fee in CASES:
            pool, _ = make_pool(base_in=reserve_base, token_in=reserve_token, shares=7, fee_bps=fee)

            quoted = pool.quote(amount, direction)
            assert pool.get_amounts() == (reserve_base, reserve_token, 7)

            out = pool.swap(Coin(_direction_asset(direction), amount), direction)
            assert out.value() == quoted

    def test_fee_free_swap_with_exact_division_keeps_invariant(self, make_pool):
        """Equality is reachable with fee 0: 100 into (100, 100) returns 50."""
        pool, _ = make_pool(base_in=100, token_in=100, shares=1, fee_bps=0)
        pool.swap(Coin(BASE, 100), Direction.BASE_TO_TOKEN)
        assert pool.get_amounts()[:2] == (200, 50)
        assert pool.invariant() == 100 * 100


class TestPricingBounds:
    """Monotonic pricing and the output < reserve bound."""

    def test_output_monotonic_in_input(self):
        rng = random.Random(SEED + 1)
        for reserve_base, reserve_token, _, fee in CASES[:50]:
            amounts = sorted(rng.randint(1, 10**12) for _ in range(20))
            outputs = [get_input_price(a, reserve_base, reserve_token, fee) for a in amounts]
            assert outputs == sorted(outputs)

    def test_output_monotonic_small_steps(self):
        """Consecutive inputs never lower the output."""
        previous = 0
        for amount in range(1, 3000):
            out = get_input_price(amount, 1000, 1000, 3)
            assert out >= previous
            previous = out

    def test_output_below_reserve_random(self):
        for reserve_base, reserve_token, amount, fee in CASES:
            assert get_input_price(amount, reserve_base, reserve_token, fee) < reserve_token
            assert get_input_price(amount, reserve_token, reserve_base, fee) < reserve_base

    @pytest.mark.parametrize("fee", BOUNDARY_FEES)
    def test_output_below_reserve_boundaries(self, fee):
        """For every representable input the bound holds or the call overflows.

        Algebraically: denominator = R_in*1000 + x*f > x*f when R_in >= 1,
        so x*f*R_out / denominator < R_out.
        """
        for amount in BOUNDARY_VALUES:
            for reserve_in in BOUNDARY_VALUES:
                for reserve_out in BOUNDARY_VALUES:
                    x_f = amount * (FEE_SCALING - fee)
                    exact = (x_f * reserve_out) // (reserve_in * FEE_SCALING + x_f)
                    assert exact < reserve_out
                    try:
                        out = get_input_price(amount, reserve_in, reserve_out, fee)
                    except Overflow:
                        continue
                    assert out == exact

    def test_fee_999_still_prices(self):
        """The highest fee keeps 0.1% of input in play."""
        assert get_input_price(10**9, 10**9, 10**9, 999) == (10**9 * 10**9) // (10**12 + 10**9)


class TestLiquidityProperties:
    """Redemption round-trip bounds."""

    def test_add_then_remove_never_returns_more(self, make_pool):
        rng = random.Random(SEED + 2)
        for reserve_base, reserve_token, _, fee in CASES:
            shares = rng.randint(1, 10**9)
            pool, _ = make_pool(
                base_in=reserve_base, token_in=reserve_token, shares=shares, fee_bps=fee
            )
            base_in = rng.randint(1, reserve_base)
            # Token deposit at or above the pool ratio, rounded up
            token_in = max(1, -(-base_in * reserve_token // reserve_base))

            minted = pool.add_liquidity(*make_deposit(base_in, token_in))
            if minted.value() == 0:
                continue
            base_out, token_out = pool.remove_liquidity(minted)

            assert base_out.value() <= base_in
            assert token_out.value() <= token_in

    def test_round_trip_restores_share_supply(self, reference_pool):
        pool, _ = reference_pool
        minted = pool.add_liquidity(*make_deposit(10_000_000, 10_000))
        pool.remove_liquidity(minted)
        assert pool.share_supply == 1000

    def test_reserves_positive_while_shares_outstanding(self, make_pool):
        """Partial withdrawals never empty a reserve while shares remain."""
        rng = random.Random(SEED + 3)
        for reserve_base, reserve_token, _, fee in CASES[:50]:
            pool, shares = make_pool(
                base_in=reserve_base, token_in=reserve_token, shares=1000, fee_bps=fee
            )
            while shares.value() > 1:
                pool.remove_liquidity(shares, rng.randint(1, shares.value() - 1))
                assert pool.share_supply > 0
                assert pool.reserve_base > 0
                assert pool.reserve_token > 0
