"""Tests for the Pool record."""

from tests.helpers.constants import SUI, USDC
from tests.helpers.factories import make_pool


class TestPool:
    def test_key_uses_canonical_assets(self):
        assert make_pool(USDC, SUI).key == "LP-0x1a5e::usdc::USDC-0x2::sui::SUI"

    def test_new_pool_is_empty(self):
        pool = make_pool()
        assert pool.is_empty
        assert pool.reserves() == (0, 0, 0)

    def test_scaling_factors_follow_decimals(self):
        pool = make_pool(USDC, SUI)
        assert pool.scaling_factor_x == 1_000
        assert pool.scaling_factor_y == 1

    def test_reserves_tuple(self):
        pool = make_pool(reserve_x=10, reserve_y=20, share_supply=5_000, locked_shares=1_000)
        assert pool.reserves() == (10, 20, 5_000)
        assert not pool.is_empty

    def test_circulating_shares_exclude_locked(self):
        pool = make_pool(reserve_x=10, reserve_y=20, share_supply=5_000, locked_shares=1_000)
        assert pool.circulating_shares == 4_000
