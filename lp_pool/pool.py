"""Staked-token liquidity pool.

The pool holds a base token and its staked derivative. Liquidity providers
deposit the base token and receive LP tokens; swappers sell the staked token
for the base token at a fixed price minus a fee that depends on how much base
liquidity is left (see lp_pool.fees).

All arithmetic is integer-only. Products are computed exactly and floored,
and every quantity stored in the pool must fit in uint64.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from lp_pool.config import PoolConfig
from lp_pool.fees import fee_amount, fee_percentage
from lp_pool.models import PoolState
from lp_pool.result import PoolError, PoolResult
from lp_pool.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapQuote:
    """Pricing of a staked-token -> base-token swap against current state."""

    staked_amount: int
    gross_amount: int
    fee_percentage: int
    fee: int

    @property
    def net_amount(self) -> int:
        """Base tokens paid out to the swapper."""
        return (S(self.gross_amount) - self.fee).value


def _check_amount(amount: int) -> PoolResult | None:
    """Validate an operation input, returning an error result if it is unusable."""
    value = S(amount)
    if value <= 0:
        return PoolResult.with_error(PoolError.PROPERTY_MUST_BE_GREATER_THAN_ZERO)
    if not value.is_uint64():
        return PoolResult.with_error(PoolError.ARITHMETIC_OVERFLOW, f"amount={amount}")
    return None


@dataclass
class LpPool:
    """Liquidity pool state and operations.

    Use LpPool.init() to build a validated pool. Operations mutate the
    instance in place and return a PoolResult; a failed operation leaves the
    state untouched. The pool does no locking, callers sharing one instance
    across threads must serialize access themselves.
    """

    config: PoolConfig
    token_reserve: int = 0
    staked_token_reserve: int = 0
    lp_token_supply: int = 0

    @classmethod
    def init(cls, price: int, fee_min: int, fee_max: int, liquidity_target: int) -> PoolResult:
        """Create an empty pool.

        Returns:
            PoolResult holding the new LpPool, or PROPERTY_MUST_BE_GREATER_THAN_ZERO
            if any argument is zero, or FEE_MAX_MUST_BE_GREATER_THAN_FEE_MIN if
            fee_min >= fee_max
        """
        config = PoolConfig(price, fee_min, fee_max, liquidity_target)
        validated = config.validate()
        if validated.is_error:
            logger.debug("pool_init_rejected", config=str(config), error=validated.error.value)
            return validated
        return PoolResult.ok(cls(config=config))

    @property
    def price(self) -> int:
        return self.config.price

    @property
    def fee_min(self) -> int:
        return self.config.fee_min

    @property
    def fee_max(self) -> int:
        return self.config.fee_max

    @property
    def liquidity_target(self) -> int:
        return self.config.liquidity_target

    # --- Liquidity accounting ---

    def deposit(self, amount: int) -> PoolResult:
        """Add base-token liquidity and mint LP tokens.

        The reserve is credited before the mint ratio is taken:
        ``minted = amount * supply // (reserve + amount)``. The first deposit
        into an empty pool mints exactly ``amount``.

        Returns:
            PoolResult holding the minted LP token amount
        """
        rejected = _check_amount(amount)
        if rejected is not None:
            logger.debug("deposit_rejected", amount=amount, error=rejected.error.value)
            return rejected

        new_reserve = S(self.token_reserve) + amount
        if self.lp_token_supply == 0:
            minted = S(amount)
        else:
            minted = (S(amount) * self.lp_token_supply) // new_reserve
        new_supply = S(self.lp_token_supply) + minted

        if not (new_reserve.is_uint64() and new_supply.is_uint64()):
            logger.debug("deposit_rejected", amount=amount, error=PoolError.ARITHMETIC_OVERFLOW.value)
            return PoolResult.with_error(
                PoolError.ARITHMETIC_OVERFLOW,
                f"reserve={new_reserve} supply={new_supply}",
            )

        self.token_reserve = new_reserve.value
        self.lp_token_supply = new_supply.value
        logger.info(
            "liquidity_added",
            amount=amount,
            minted=minted.value,
            token_reserve=self.token_reserve,
            lp_token_supply=self.lp_token_supply,
        )
        return PoolResult.ok(minted.value)

    def withdraw(self, lp_amount: int) -> PoolResult:
        """Burn LP tokens for a proportional share of both reserves.

        Returns:
            PoolResult holding ``(token_amount, staked_token_amount)``
        """
        rejected = _check_amount(lp_amount)
        if rejected is None and lp_amount > self.lp_token_supply:
            rejected = PoolResult.with_error(
                PoolError.INSUFFICIENT_LIQUIDITY,
                f"lp_amount={lp_amount} supply={self.lp_token_supply}",
            )
        if rejected is not None:
            logger.debug("withdraw_rejected", lp_amount=lp_amount, error=rejected.error.value)
            return rejected

        supply = S(self.lp_token_supply)
        token_amount = (S(lp_amount) * self.token_reserve) // supply
        staked_token_amount = (S(lp_amount) * self.staked_token_reserve) // supply

        if token_amount > self.token_reserve or staked_token_amount > self.staked_token_reserve:
            logger.warning(
                "withdraw_exceeds_reserves",
                lp_amount=lp_amount,
                token_amount=token_amount.value,
                staked_token_amount=staked_token_amount.value,
            )
            return PoolResult.with_error(PoolError.INSUFFICIENT_LIQUIDITY)

        self.token_reserve = (S(self.token_reserve) - token_amount).value
        self.staked_token_reserve = (S(self.staked_token_reserve) - staked_token_amount).value
        self.lp_token_supply = (supply - lp_amount).value
        logger.info(
            "liquidity_removed",
            lp_amount=lp_amount,
            token_amount=token_amount.value,
            staked_token_amount=staked_token_amount.value,
            lp_token_supply=self.lp_token_supply,
        )
        return PoolResult.ok((token_amount.value, staked_token_amount.value))

    # --- Swap engine ---

    def calculate_fee_percentage(self) -> int:
        """Current swap fee percentage, from the base reserve before any swap."""
        return fee_percentage(self.token_reserve, self.liquidity_target, self.fee_min, self.fee_max)

    def quote_swap(self, staked_amount: int) -> PoolResult:
        """Price a swap without executing it.

        Returns:
            PoolResult holding a SwapQuote, with the same errors swap() would give
        """
        rejected = _check_amount(staked_amount)
        if rejected is not None:
            return rejected

        gross = S(staked_amount) * self.price
        percentage = self.calculate_fee_percentage()
        fee = fee_amount(gross.value, percentage)

        if gross > self.token_reserve:
            return PoolResult.with_error(
                PoolError.INSUFFICIENT_LIQUIDITY,
                f"gross={gross} token_reserve={self.token_reserve}",
            )
        if fee > gross:
            return PoolResult.with_error(
                PoolError.FEE_EXCEEDS_AMOUNT,
                f"fee={fee} gross={gross} fee_percentage={percentage}",
            )
        if not (S(self.staked_token_reserve) + staked_amount).is_uint64():
            return PoolResult.with_error(
                PoolError.ARITHMETIC_OVERFLOW,
                f"staked_token_reserve={self.staked_token_reserve} staked_amount={staked_amount}",
            )

        return PoolResult.ok(
            SwapQuote(
                staked_amount=staked_amount,
                gross_amount=gross.value,
                fee_percentage=percentage,
                fee=fee,
            )
        )

    def swap(self, staked_amount: int) -> PoolResult:
        """Sell staked tokens to the pool for base tokens.

        The gross amount ``staked_amount * price`` leaves the base reserve; the
        fee is withheld from the payout and so stays in the pool.

        Returns:
            PoolResult holding the net base-token amount paid out
        """
        quoted = self.quote_swap(staked_amount)
        if quoted.is_error:
            logger.debug("swap_rejected", staked_amount=staked_amount, error=quoted.error.value)
            return quoted

        quote: SwapQuote = quoted.value
        self.token_reserve = (S(self.token_reserve) - quote.gross_amount).value
        self.staked_token_reserve = (S(self.staked_token_reserve) + staked_amount).value
        logger.info(
            "swap_executed",
            staked_amount=staked_amount,
            gross_amount=quote.gross_amount,
            fee_percentage=quote.fee_percentage,
            fee=quote.fee,
            net_amount=quote.net_amount,
            token_reserve=self.token_reserve,
        )
        return PoolResult.ok(quote.net_amount)

    def snapshot(self) -> PoolState:
        """Read-only view of the current pool state."""
        return PoolState(
            token_reserve=self.token_reserve,
            staked_token_reserve=self.staked_token_reserve,
            lp_token_supply=self.lp_token_supply,
            price=self.price,
            fee_min=self.fee_min,
            fee_max=self.fee_max,
            liquidity_target=self.liquidity_target,
        )
