"""Test helpers module for shared test utilities.

- constants: Asset identifiers, addresses and common amounts
- factories: Registry and pool factory functions
"""

from tests.helpers.constants import (
    ALICE,
    ASSET_DECIMALS,
    BOOTSTRAP_SUI,
    BOOTSTRAP_USDC,
    BTC,
    MALLORY,
    OWNER,
    SUI,
    USDC,
    USDT,
)
from tests.helpers.factories import bootstrap_pool, make_pool, make_registry, register_pool

__all__ = [
    # Constants
    "USDC",
    "SUI",
    "USDT",
    "BTC",
    "ASSET_DECIMALS",
    "OWNER",
    "ALICE",
    "MALLORY",
    "BOOTSTRAP_USDC",
    "BOOTSTRAP_SUI",
    # Factories
    "make_registry",
    "register_pool",
    "make_pool",
    "bootstrap_pool",
]
