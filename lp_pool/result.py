"""Pool operation result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PoolError(Enum):
    """Types of pool operation errors."""

    PROPERTY_MUST_BE_GREATER_THAN_ZERO = "property_must_be_greater_than_zero"
    FEE_MAX_MUST_BE_GREATER_THAN_FEE_MIN = "fee_max_must_be_greater_than_fee_min"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    ARITHMETIC_OVERFLOW = "arithmetic_overflow"
    FEE_EXCEEDS_AMOUNT = "fee_exceeds_amount"

    @property
    def message(self) -> str:
        """Human-readable description of the error."""
        return _MESSAGES[self]

    def __str__(self) -> str:
        return self.message


_MESSAGES = {
    PoolError.PROPERTY_MUST_BE_GREATER_THAN_ZERO: "Property must be greater than zero",
    PoolError.FEE_MAX_MUST_BE_GREATER_THAN_FEE_MIN: "Fee max must be greater than fee min",
    PoolError.INSUFFICIENT_LIQUIDITY: "Insufficient liquidity",
    PoolError.ARITHMETIC_OVERFLOW: "Amount exceeds uint64 range",
    PoolError.FEE_EXCEEDS_AMOUNT: "Fee exceeds swap amount",
}


class PoolOperationError(Exception):
    """Raised by PoolResult.unwrap() when the result holds an error."""

    def __init__(self, error: PoolError, detail: str | None = None):
        self.error = error
        self.detail = detail
        message = error.message if detail is None else f"{error.message}: {detail}"
        super().__init__(message)


@dataclass(frozen=True)
class PoolResult:
    """Result of a pool operation.

    Every pool operation returns one of these instead of raising, so callers
    can branch on failure without exception handling. A failed operation
    never changes pool state.

    Attributes:
        value: The operation's output (minted amount, withdrawn pair, net swap
            amount, a new pool...), or None on failure.
        error: If the operation failed, the type of error that occurred.
        error_detail: Optional human-readable detail about the error.

    Examples:
        result = pool.deposit(200)
        if result.is_ok:
            minted = result.value

        result = pool.deposit(0)
        assert result.error is PoolError.PROPERTY_MUST_BE_GREATER_THAN_ZERO
    """

    value: Any = None
    error: PoolError | None = None
    error_detail: str | None = None

    @property
    def is_ok(self) -> bool:
        """True if the operation succeeded."""
        return self.error is None

    @property
    def is_error(self) -> bool:
        """True if the operation failed."""
        return self.error is not None

    def unwrap(self) -> Any:
        """Return the value, raising PoolOperationError if the result is an error."""
        if self.error is not None:
            raise PoolOperationError(self.error, self.error_detail)
        return self.value

    @classmethod
    def ok(cls, value: Any) -> PoolResult:
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def with_error(cls, error: PoolError, detail: str | None = None) -> PoolResult:
        """Create an error result."""
        return cls(error=error, error_detail=detail)
