"""Test helpers module for shared test utilities."""

from tests.helpers.factories import make_pool

__all__ = ["make_pool"]
