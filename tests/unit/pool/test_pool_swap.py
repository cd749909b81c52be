"""Tests for swapping staked tokens for base tokens."""

import pytest

from lp_pool import LpPool, PoolError, SwapQuote
from lp_pool.safe_int import UINT64_MAX, Underflow
from tests.helpers import make_pool


@pytest.fixture
def swap_pool() -> LpPool:
    """price=100, fee 1-2%, target 1000, holding 1000 base and 100 staked."""
    return make_pool(token_reserve=1000, staked_token_reserve=100)


class TestSwap:
    """Tests for LpPool.swap."""

    def test_swap_with_sufficient_liquidity(self, swap_pool):
        """gross=1000, ratio=100, fee 2% = 20, net 980."""
        assert swap_pool.swap(10).value == 980
        assert swap_pool.token_reserve == 0
        assert swap_pool.staked_token_reserve == 110

    def test_swap_leaves_supply_alone(self):
        pool = make_pool(token_reserve=1000, staked_token_reserve=100, lp_token_supply=1000)
        assert pool.swap(10).value == 980
        assert pool.lp_token_supply == 1000

    def test_fee_uses_pre_swap_reserve(self):
        """Reserve 2000 against target 1000 puts the fee at 3% before the swap."""
        pool = make_pool(token_reserve=2000)
        assert pool.swap(10).value == 970
        assert pool.token_reserve == 1000

    def test_fee_stays_in_reserve(self):
        """The reserve drops by the gross amount, the fee is never paid out."""
        pool = make_pool(token_reserve=5000)
        net = pool.swap(10).value
        assert 5000 - pool.token_reserve == 1000
        assert net < 1000

    def test_swap_with_insufficient_liquidity(self):
        pool = LpPool.init(100, 1, 2, 1000).unwrap()
        pool.deposit(1000)
        result = pool.swap(11)
        assert result.error is PoolError.INSUFFICIENT_LIQUIDITY
        assert pool.token_reserve == 1000
        assert pool.staked_token_reserve == 0

    def test_swap_with_zero_provided(self, swap_pool):
        result = swap_pool.swap(0)
        assert result.error is PoolError.PROPERTY_MUST_BE_GREATER_THAN_ZERO

    def test_swap_with_zero_token_reserve(self):
        pool = LpPool.init(100, 1, 2, 1000).unwrap()
        assert pool.swap(10).error is PoolError.INSUFFICIENT_LIQUIDITY

    def test_gross_beyond_uint64_is_insufficient_liquidity(self):
        pool = make_pool(price=UINT64_MAX, token_reserve=UINT64_MAX)
        assert pool.swap(2).error is PoolError.INSUFFICIENT_LIQUIDITY

    def test_fee_above_gross_rejected(self):
        """An unclamped fee curve can reach past 100%."""
        pool = make_pool(price=1, fee_min=1, fee_max=60, liquidity_target=100, token_reserve=200)
        before = pool.snapshot()
        result = pool.swap(10)
        assert result.error is PoolError.FEE_EXCEEDS_AMOUNT
        assert pool.snapshot() == before

    def test_staked_reserve_overflow_rejected(self):
        pool = make_pool(price=1, token_reserve=10, staked_token_reserve=UINT64_MAX)
        assert pool.swap(1).error is PoolError.ARITHMETIC_OVERFLOW
        assert pool.token_reserve == 10


class TestQuoteSwap:
    """Tests for LpPool.quote_swap."""

    def test_quote_breakdown(self, swap_pool):
        quote = swap_pool.quote_swap(10).value
        assert quote == SwapQuote(staked_amount=10, gross_amount=1000, fee_percentage=2, fee=20)
        assert quote.net_amount == 980

    def test_quote_does_not_mutate(self, swap_pool):
        before = swap_pool.snapshot()
        swap_pool.quote_swap(10)
        assert swap_pool.snapshot() == before

    def test_quote_matches_swap(self):
        pool = make_pool(price=7, fee_min=2, fee_max=9, liquidity_target=3000, token_reserve=4321)
        quote = pool.quote_swap(55).value
        assert pool.swap(55).value == quote.net_amount

    def test_quote_errors_match_swap(self, swap_pool):
        assert swap_pool.quote_swap(0).error is PoolError.PROPERTY_MUST_BE_GREATER_THAN_ZERO
        assert swap_pool.quote_swap(11).error is PoolError.INSUFFICIENT_LIQUIDITY

    def test_net_amount_is_checked(self):
        """A fee larger than the gross amount never yields a negative payout."""
        quote = SwapQuote(staked_amount=1, gross_amount=5, fee_percentage=200, fee=10)
        with pytest.raises(Underflow):
            quote.net_amount


class TestSampleSequence:
    """The deposit/deposit/swap/withdraw sequence used by the demo."""

    def test_sample(self):
        pool = LpPool.init(5, 1, 9, 1000).unwrap()
        assert pool.deposit(10).value == 10
        assert pool.deposit(20).value == 6
        assert pool.swap(3).value == 15
        assert pool.withdraw(10).value == (9, 1)
        assert pool.token_reserve == 6
        assert pool.staked_token_reserve == 2
        assert pool.lp_token_supply == 6
