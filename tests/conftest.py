"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from lp_pool.pool import LpPool


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test applied (the demo configures it)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def pool() -> LpPool:
    """Empty pool with price=100, fee range 5-10%, target 1000."""
    pool: LpPool = LpPool.init(100, 5, 10, 1000).unwrap()
    return pool
