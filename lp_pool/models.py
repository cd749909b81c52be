"""Pydantic models for data crossing the pool boundary.

Scenario files replayed by the demo are parsed into these models, and pool
snapshots are rendered from them. The pool itself works on plain ints.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from lp_pool.config import PoolConfig
from lp_pool.safe_int import UINT64_MAX


def validate_uint64(value: Any) -> int:
    """Validate that a value is a uint64, given as int or decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within uint64 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint64 cannot be a boolean")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint64 must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Uint64 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint64 cannot be negative: {value}")
    if value > UINT64_MAX:
        raise ValueError(f"Uint64 overflow: {value} > 2^64-1")
    return value


# 64-bit unsigned integer, accepted as int or decimal string
Uint64 = Annotated[int, BeforeValidator(validate_uint64)]


class PoolState(BaseModel):
    """Snapshot of a pool's reserves, supply and configuration."""

    model_config = ConfigDict(frozen=True)

    token_reserve: Uint64
    staked_token_reserve: Uint64
    lp_token_supply: Uint64
    price: Uint64
    fee_min: Uint64
    fee_max: Uint64
    liquidity_target: Uint64


class PoolParams(BaseModel):
    """Pool parameters as written in a scenario file.

    Zero values pass here on purpose; the pool reports them as a
    construction error.
    """

    price: Uint64
    fee_min: Uint64
    fee_max: Uint64
    liquidity_target: Uint64

    def to_config(self) -> PoolConfig:
        return PoolConfig(
            price=self.price,
            fee_min=self.fee_min,
            fee_max=self.fee_max,
            liquidity_target=self.liquidity_target,
        )


class DepositOp(BaseModel):
    op: Literal["deposit"]
    amount: Uint64


class WithdrawOp(BaseModel):
    op: Literal["withdraw"]
    lp_amount: Uint64


class SwapOp(BaseModel):
    op: Literal["swap"]
    staked_amount: Uint64


Operation = Annotated[DepositOp | WithdrawOp | SwapOp, Field(discriminator="op")]


class Scenario(BaseModel):
    """A pool configuration plus an ordered list of operations to replay."""

    pool: PoolParams
    operations: list[Operation] = Field(default_factory=list)
