#!/usr/bin/env python3
"""Demonstrate the liquidity pool with a few sample operations.

Usage:
    # Replay the built-in sample
    python -m lp_pool.demo

    # Replay a scenario file and print the final state as JSON
    python -m lp_pool.demo --scenario scenario.json --json

Scenario file format:
    {
        "pool": {"price": 5, "fee_min": 1, "fee_max": 9, "liquidity_target": 1000},
        "operations": [
            {"op": "deposit", "amount": 10},
            {"op": "swap", "staked_amount": 3},
            {"op": "withdraw", "lp_amount": 10}
        ]
    }

The log level defaults to LP_POOL_LOG_LEVEL (WARNING if unset); --verbose
forces DEBUG. Logs go to stderr so stdout only carries results.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from lp_pool.config import DEMO_POOL_CONFIG, PoolConfig
from lp_pool.models import DepositOp, Operation, Scenario, SwapOp
from lp_pool.pool import LpPool
from lp_pool.result import PoolResult

logger = structlog.get_logger()

LOG_LEVEL_ENV = "LP_POOL_LOG_LEVEL"


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for console output on stderr."""
    if verbose:
        log_level = logging.DEBUG
    else:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        log_level = logging.getLevelNamesMapping().get(level_name, logging.WARNING)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def build_pool(config: PoolConfig) -> LpPool | None:
    """Create a pool from config, printing the error if it is invalid."""
    result = LpPool.init(config.price, config.fee_min, config.fee_max, config.liquidity_target)
    if result.is_error:
        print(f"Error: invalid pool config: {result.error}")
        return None
    pool: LpPool = result.value
    return pool


def run_sample(pool: LpPool) -> None:
    """Run the fixed sample sequence and print each result."""
    print("---")
    print(f"Minted 1 :: {pool.deposit(10).unwrap()}")
    print(f"Minted 2 :: {pool.deposit(20).unwrap()}")
    print(f"Tokens received from swap 1: {pool.swap(3).unwrap()}")
    tokens_returned, staked_tokens_returned = pool.withdraw(10).unwrap()
    print(f"Tokens returned: {tokens_returned}, Staked Tokens returned: {staked_tokens_returned}")


def apply_operation(pool: LpPool, operation: Operation) -> PoolResult:
    """Dispatch one scenario operation to the pool."""
    if isinstance(operation, DepositOp):
        return pool.deposit(operation.amount)
    if isinstance(operation, SwapOp):
        return pool.swap(operation.staked_amount)
    return pool.withdraw(operation.lp_amount)


def format_operation(operation: Operation) -> str:
    """Render an operation as ``op(arg=value, ...)`` for printing."""
    args = ", ".join(f"{k}={v}" for k, v in operation.model_dump(exclude={"op"}).items())
    return f"{operation.op}({args})"


def run_scenario(pool: LpPool, scenario: Scenario) -> int:
    """Replay scenario operations in order, continuing past failures.

    Returns:
        Number of operations that failed
    """
    failures = 0
    for operation in scenario.operations:
        result = apply_operation(pool, operation)
        if result.is_error:
            failures += 1
            print(f"{format_operation(operation)} -> error: {result.error}")
        else:
            print(f"{format_operation(operation)} -> {result.value}")
    return failures


def load_scenario(path: Path) -> Scenario:
    """Parse and validate a scenario file.

    Raises:
        OSError: If the file cannot be read
        ValidationError: If the content does not match the scenario schema
    """
    return Scenario.model_validate_json(path.read_text())


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Liquidity pool demonstration")
    parser.add_argument(
        "--scenario",
        type=Path,
        default=None,
        help="JSON scenario file to replay instead of the built-in sample",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final pool state as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.scenario is None:
        pool = build_pool(DEMO_POOL_CONFIG)
        if pool is None:
            return 1
        run_sample(pool)
    else:
        try:
            scenario = load_scenario(args.scenario)
        except OSError as err:
            logger.error("scenario_unreadable", path=str(args.scenario), error=str(err))
            print(f"Error: cannot read scenario file: {args.scenario}")
            return 1
        except ValidationError as err:
            logger.error("scenario_invalid", path=str(args.scenario), errors=err.error_count())
            print(f"Error: invalid scenario file: {args.scenario}")
            print(err)
            return 1

        pool = build_pool(scenario.pool.to_config())
        if pool is None:
            return 1
        failures = run_scenario(pool, scenario)
        logger.info("scenario_complete", operations=len(scenario.operations), failures=failures)

    if args.json:
        print(pool.snapshot().model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
