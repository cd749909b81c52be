"""Staked-token liquidity pool engine."""

from lp_pool.config import PoolConfig
from lp_pool.fees import fee_percentage
from lp_pool.models import PoolState
from lp_pool.pool import LpPool, SwapQuote
from lp_pool.result import PoolError, PoolOperationError, PoolResult

__version__ = "0.1.0"
__all__ = [
    "LpPool",
    "SwapQuote",
    "PoolConfig",
    "PoolState",
    "PoolError",
    "PoolResult",
    "PoolOperationError",
    "fee_percentage",
    "__version__",
]
