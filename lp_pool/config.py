"""Pool configuration."""

from __future__ import annotations

from dataclasses import astuple, dataclass

from lp_pool.result import PoolError, PoolResult
from lp_pool.safe_int import S


@dataclass(frozen=True)
class PoolConfig:
    """Fixed parameters of a pool, set once at construction.

    Attributes:
        price: Base-token units paid per staked-token unit
        fee_min: Swap fee (whole percent) when the base reserve is empty
        fee_max: Swap fee (whole percent) when the base reserve equals the target
        liquidity_target: Base reserve level at which the fee reaches fee_max
    """

    price: int
    fee_min: int
    fee_max: int
    liquidity_target: int

    def validate(self) -> PoolResult:
        """Check the construction invariants.

        Zero values are reported before fee ordering, so ``(0, 5, 1, 1000)``
        fails with PROPERTY_MUST_BE_GREATER_THAN_ZERO.

        Returns:
            PoolResult holding this config, or the first violated rule
        """
        values = [S(v) for v in astuple(self)]
        if any(v <= 0 for v in values):
            return PoolResult.with_error(PoolError.PROPERTY_MUST_BE_GREATER_THAN_ZERO)
        if not all(v.is_uint64() for v in values):
            return PoolResult.with_error(PoolError.ARITHMETIC_OVERFLOW, f"config {self}")
        if self.fee_min >= self.fee_max:
            return PoolResult.with_error(
                PoolError.FEE_MAX_MUST_BE_GREATER_THAN_FEE_MIN,
                f"fee_min={self.fee_min} fee_max={self.fee_max}",
            )
        return PoolResult.ok(self)


# Pool used by the demonstration entry point
DEMO_POOL_CONFIG = PoolConfig(price=5, fee_min=1, fee_max=9, liquidity_target=1000)
