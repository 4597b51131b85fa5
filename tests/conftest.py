"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from weighted_amm.admin import AdminCap
from weighted_amm.pools import Pool, PoolRegistry
from weighted_amm.pools.registry import _reset_registry
from tests.helpers.constants import OWNER
from tests.helpers.factories import bootstrap_pool, make_registry, register_pool

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def scenarios_dir() -> Path:
    """Return the scenario fixtures directory path."""
    return SCENARIOS_DIR


@pytest.fixture(autouse=True)
def fresh_process_registry() -> Iterator[None]:
    """Start and finish every test without a process-wide registry."""
    _reset_registry()
    yield
    _reset_registry()


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo logging configuration (e.g. by the CLI) bound to per-test captured streams."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def owner() -> str:
    return OWNER


@pytest.fixture
def registry_and_cap() -> tuple[PoolRegistry, AdminCap]:
    """A fresh registry and its admin credential."""
    return make_registry()


@pytest.fixture
def registry(registry_and_cap: tuple[PoolRegistry, AdminCap]) -> PoolRegistry:
    return registry_and_cap[0]


@pytest.fixture
def admin_cap(registry_and_cap: tuple[PoolRegistry, AdminCap]) -> AdminCap:
    return registry_and_cap[1]


@pytest.fixture
def empty_pool(registry: PoolRegistry) -> Pool:
    """A registered 50/50 USDC/SUI pool with no liquidity."""
    return register_pool(registry)


@pytest.fixture
def funded_pool(registry: PoolRegistry, empty_pool: Pool) -> Pool:
    """The 50/50 USDC/SUI pool after a 1 USDC + 1 SUI bootstrap deposit."""
    return bootstrap_pool(registry)
