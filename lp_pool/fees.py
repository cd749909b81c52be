"""Dynamic swap fee curve.

The fee grows linearly with the base-token reserve, in whole-percent steps:

    liquidity_ratio = reserve * 100 // target
    fee_percentage  = fee_min + liquidity_ratio * (fee_max - fee_min) // 100

An empty reserve pays fee_min and a reserve at the target pays fee_max. The
curve is not clamped, so a reserve above the target keeps climbing past
fee_max. Both floor divisions are applied in that order; computing the ratio
at higher precision changes results at step boundaries.
"""

from __future__ import annotations

from lp_pool.safe_int import S

PERCENT = 100


def liquidity_ratio(token_reserve: int, liquidity_target: int) -> int:
    """Base reserve as a whole-percent fraction of the liquidity target.

    Raises:
        DivisionByZero: If liquidity_target is zero
    """
    return ((S(token_reserve) * PERCENT) // S(liquidity_target)).value


def fee_percentage(token_reserve: int, liquidity_target: int, fee_min: int, fee_max: int) -> int:
    """Swap fee percentage for the given base reserve.

    Args:
        token_reserve: Current base-token reserve
        liquidity_target: Reserve at which the fee reaches fee_max
        fee_min: Fee (percent) at an empty reserve
        fee_max: Fee (percent) at the target reserve

    Returns:
        Fee in whole percent, fee_min or above (unbounded above fee_max)
    """
    ratio = S(liquidity_ratio(token_reserve, liquidity_target))
    spread = S(fee_max) - S(fee_min)
    return (S(fee_min) + (ratio * spread) // PERCENT).value


def fee_amount(gross_amount: int, percentage: int) -> int:
    """Fee charged on a gross amount, floored to a whole token unit."""
    return ((S(gross_amount) * S(percentage)) // PERCENT).value
