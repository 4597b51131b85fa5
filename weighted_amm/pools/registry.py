"""Pool registry for weighted two-asset pools.

This module provides PoolRegistry, which owns every pool of the exchange:
- registration, gated by a whitelist of addresses
- canonical pair keys, so (A, B) and (B, A) resolve to one pool
- exclusive mutable handles for deposits
- the global flags (paused, fee multiplier) and their credential-gated updates

The process-wide registry is created once through initialize(), which also
mints the administrative credential.
"""

from __future__ import annotations

import secrets
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from weighted_amm.admin import AdminCap
from weighted_amm.assets import (
    DEFAULT_ORDERING,
    AssetId,
    PairOrdering,
    canonical_key,
    require_ordered,
    sort_pair,
)
from weighted_amm.config import DEFAULT_CONFIG, EngineConfig
from weighted_amm.constants import WEIGHT_SCALE
from weighted_amm.errors import (
    AlreadyInitializedError,
    InvalidCredentialError,
    NotInitializedError,
    PoolAlreadyRegisteredError,
    PoolBusyError,
    PoolNotRegisteredError,
    UnauthorizedError,
    WeightsSumInvalidError,
)
from weighted_amm.liquidity import LiquidityEngine, ProvideResult
from weighted_amm.math.scaling import scaling_factor
from weighted_amm.models import PoolSnapshot, RegistryStatus
from weighted_amm.pools.pool import Pool

logger = structlog.get_logger()


class PoolRegistry:
    """Registry of weighted pools keyed by canonical pair.

    Use PoolRegistry.create() (or the process-wide initialize()) rather than
    the constructor, so that the registry and its credential come into
    existence together.
    """

    def __init__(
        self,
        registry_id: str,
        owner: str,
        ordering: PairOrdering | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.id = registry_id
        self._ordering: PairOrdering = ordering or DEFAULT_ORDERING
        self._config = config or DEFAULT_CONFIG
        self._pools: dict[str, Pool] = {}
        # One lock per pool; held for the duration of a single deposit
        self._pool_locks: dict[str, threading.Lock] = {}
        # Serializes registration against concurrent registration
        self._registry_lock = threading.Lock()
        self._whitelist: set[str] = {owner}
        self._paused = False
        self._fee_multiplier = self._config.default_fee_multiplier
        self._admin_cap = AdminCap(registry_id=registry_id, holder=owner)
        self._engine = LiquidityEngine(self, self._config)

    @classmethod
    def create(
        cls,
        owner: str,
        *,
        ordering: PairOrdering | None = None,
        config: EngineConfig | None = None,
    ) -> tuple[PoolRegistry, AdminCap]:
        """Create an empty registry and its administrative credential.

        The owner starts out whitelisted and holds the credential.

        Args:
            owner: Address of the deploying account
            ordering: Pair ordering oracle (default: byte-wise tag order)
            config: Engine configuration (default: DEFAULT_CONFIG)

        Returns:
            Tuple of (registry, admin_cap)
        """
        registry = cls(secrets.token_hex(16), owner, ordering=ordering, config=config)
        logger.info("registry_created", registry_id=registry.id, owner=owner)
        return registry, registry._admin_cap

    @property
    def ordering(self) -> PairOrdering:
        return self._ordering

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def engine(self) -> LiquidityEngine:
        return self._engine

    # --- Registration and lookup ---

    def register(
        self,
        caller: str,
        weight_x: int,
        weight_y: int,
        decimals_x: int,
        decimals_y: int,
        asset_x: AssetId,
        asset_y: AssetId,
    ) -> str:
        """Register a new weighted pool for (asset_x, asset_y).

        Args:
            caller: Address requesting the registration
            weight_x: Weight of X in basis points
            weight_y: Weight of Y in basis points
            decimals_x: Declared decimals of X, in [0, 9]
            decimals_y: Declared decimals of Y, in [0, 9]
            asset_x: First asset; must sort before asset_y
            asset_y: Second asset

        Returns:
            Canonical key of the new pool

        Raises:
            UnauthorizedError: If caller is not whitelisted
            SameAssetError: If both assets are the same
            PoolAlreadyRegisteredError: If the pair already has a pool, in
                either order
            PairMustBeOrderedError: If the pair is not in canonical order
            WeightsSumInvalidError: If weights are not positive ints summing to 10000
            DecimalsInvalidError: If either decimals value is outside [0, 9]
        """
        with self._registry_lock:
            if caller not in self._whitelist:
                logger.debug("register_unauthorized", caller=caller)
                raise UnauthorizedError(f"Caller {caller} is not whitelisted")

            # Duplicates are detected in either order before the order check
            key = canonical_key(asset_x, asset_y, self._ordering)
            if key in self._pools:
                raise PoolAlreadyRegisteredError(f"Pool {key} already registered")

            require_ordered(asset_x, asset_y, self._ordering)

            for weight in (weight_x, weight_y):
                if isinstance(weight, bool) or not isinstance(weight, int):
                    raise WeightsSumInvalidError(
                        f"Weights must be int, got {type(weight).__name__}"
                    )
            if weight_x + weight_y != WEIGHT_SCALE:
                raise WeightsSumInvalidError(
                    f"Weights must sum to {WEIGHT_SCALE}, got {weight_x} + {weight_y}"
                )
            if weight_x <= 0 or weight_y <= 0:
                raise WeightsSumInvalidError(
                    f"Weights must be positive, got {weight_x} and {weight_y}"
                )

            scaling_factor_x = scaling_factor(decimals_x)
            scaling_factor_y = scaling_factor(decimals_y)

            pool = Pool(
                registry_id=self.id,
                asset_x=asset_x,
                asset_y=asset_y,
                weight_x=weight_x,
                weight_y=weight_y,
                decimals_x=decimals_x,
                decimals_y=decimals_y,
                scaling_factor_x=scaling_factor_x,
                scaling_factor_y=scaling_factor_y,
            )
            self._pools[key] = pool
            self._pool_locks[key] = threading.Lock()

        logger.info(
            "pool_registered",
            key=key,
            caller=caller,
            weight_x=weight_x,
            weight_y=weight_y,
            decimals_x=decimals_x,
            decimals_y=decimals_y,
        )
        return key

    @contextmanager
    def resolve_mut(self, asset_x: AssetId, asset_y: AssetId) -> Iterator[Pool]:
        """Hand out the exclusive mutable handle to a pool.

        Usage:
            with registry.resolve_mut(x, y) as pool:
                ...

        Raises:
            PairMustBeOrderedError: If the pair is not in canonical order
            PoolNotRegisteredError: If no pool exists for the pair
            PoolBusyError: If another handle to the pool is live
        """
        require_ordered(asset_x, asset_y, self._ordering)
        key = canonical_key(asset_x, asset_y, self._ordering)
        pool = self._pools.get(key)
        if pool is None:
            raise PoolNotRegisteredError(f"Pool {key} not registered")

        lock = self._pool_locks[key]
        if not lock.acquire(blocking=False):
            raise PoolBusyError(f"Pool {key} is already checked out")
        try:
            yield pool
        finally:
            lock.release()

    def is_registered(self, asset_a: AssetId, asset_b: AssetId) -> bool:
        """Check whether a pool exists for the pair (order independent)."""
        return canonical_key(asset_a, asset_b, self._ordering) in self._pools

    def get_pool(self, asset_a: AssetId, asset_b: AssetId) -> Pool | None:
        """Get the pool for a pair (order independent), for reading.

        Returns:
            Pool if registered, None otherwise
        """
        return self._pools.get(canonical_key(asset_a, asset_b, self._ordering))

    def get_reserves(self, asset_a: AssetId, asset_b: AssetId) -> tuple[int, int, int]:
        """Return (reserve_x, reserve_y, share_supply) in canonical order.

        Raises:
            PoolNotRegisteredError: If no pool exists for the pair
        """
        pool = self.get_pool(asset_a, asset_b)
        if pool is None:
            first, second = sort_pair(asset_a, asset_b, self._ordering)
            raise PoolNotRegisteredError(f"No pool for {first}/{second}")
        return pool.reserves()

    @property
    def pool_count(self) -> int:
        """Return the number of registered pools."""
        return len(self._pools)

    def pool_keys(self) -> list[str]:
        """Return all canonical pool keys, sorted."""
        return sorted(self._pools)

    # --- Deposits ---

    def provide(
        self,
        asset_x: AssetId,
        asset_y: AssetId,
        amount_x: int,
        min_x: int,
        amount_y: int,
        min_y: int,
    ) -> ProvideResult:
        """Deposit liquidity into the pool for (asset_x, asset_y).

        Resolves the pool exclusively and delegates to the LiquidityEngine.

        Raises:
            PairMustBeOrderedError: If the pair is not in canonical order
            PoolNotRegisteredError: If no pool exists for the pair
            PoolBusyError: If another handle to the pool is live
            AmmError: Any rejection raised by LiquidityEngine.provide,
                SystemPausedError included
        """
        with self.resolve_mut(asset_x, asset_y) as pool:
            return self._engine.provide(pool, amount_x, min_x, amount_y, min_y)

    # --- Flags read by the engine and the swap path ---

    def is_paused(self) -> bool:
        return self._paused

    def fee_multiplier(self) -> int:
        return self._fee_multiplier

    def is_whitelisted(self, address: str) -> bool:
        return address in self._whitelist

    # --- Administration (credential-gated) ---

    def _check_cap(self, cap: AdminCap) -> None:
        if cap is not self._admin_cap:
            raise InvalidCredentialError("Credential is not valid for this registry")

    def pause(self, cap: AdminCap) -> None:
        """Reject deposits until resume() is called."""
        self._check_cap(cap)
        self._paused = True
        logger.info("registry_paused", registry_id=self.id)

    def resume(self, cap: AdminCap) -> None:
        """Accept deposits again."""
        self._check_cap(cap)
        self._paused = False
        logger.info("registry_resumed", registry_id=self.id)

    def add_whitelist(self, cap: AdminCap, address: str) -> None:
        """Allow address to register pools."""
        self._check_cap(cap)
        self._whitelist.add(address)
        logger.info("whitelist_added", address=address)

    def remove_whitelist(self, cap: AdminCap, address: str) -> None:
        """Revoke address's permission to register pools (no-op if absent)."""
        self._check_cap(cap)
        self._whitelist.discard(address)
        logger.info("whitelist_removed", address=address)

    def update_fee(self, cap: AdminCap, value: int) -> None:
        """Set the fee multiplier consumed by the swap path.

        Raises:
            InvalidCredentialError: If cap is not current
            FeeOutOfRangeError: If value is not in [10, 1000)
        """
        self._check_cap(cap)
        self._fee_multiplier = self._config.check_fee(value)
        logger.info("fee_updated", fee_multiplier=value)

    def transfer_admin(self, cap: AdminCap, new_holder: str) -> AdminCap:
        """Move the administrative role to new_holder.

        The presented cap is revoked; only the returned cap is accepted
        afterwards.
        """
        self._check_cap(cap)
        self._admin_cap = AdminCap(registry_id=self.id, holder=new_holder)
        logger.info("admin_transferred", previous=cap.holder, holder=new_holder)
        return self._admin_cap

    # --- Views ---

    def snapshot(self, asset_a: AssetId, asset_b: AssetId) -> PoolSnapshot:
        """Serializable view of one pool.

        Raises:
            PoolNotRegisteredError: If no pool exists for the pair
        """
        pool = self.get_pool(asset_a, asset_b)
        if pool is None:
            raise PoolNotRegisteredError(f"No pool for {asset_a}/{asset_b}")
        return PoolSnapshot.from_pool(pool)

    def snapshots(self) -> list[PoolSnapshot]:
        """Serializable views of every pool, sorted by key."""
        return [PoolSnapshot.from_pool(self._pools[key]) for key in self.pool_keys()]

    def status(self) -> RegistryStatus:
        """Serializable view of the registry flags."""
        return RegistryStatus(
            registry_id=self.id,
            paused=self._paused,
            fee_multiplier=self._fee_multiplier,
            pool_count=self.pool_count,
            whitelist=sorted(self._whitelist),
        )


# =============================================================================
# Process-wide registry
# =============================================================================

_registry: PoolRegistry | None = None
_init_lock = threading.Lock()


def initialize(
    owner: str,
    *,
    ordering: PairOrdering | None = None,
    config: EngineConfig | None = None,
) -> tuple[PoolRegistry, AdminCap]:
    """Create the process-wide registry and its credential, exactly once.

    Raises:
        AlreadyInitializedError: If called a second time
    """
    global _registry
    with _init_lock:
        if _registry is not None:
            raise AlreadyInitializedError(f"Registry {_registry.id} already initialized")
        registry, cap = PoolRegistry.create(owner, ordering=ordering, config=config)
        _registry = registry
    return registry, cap


def get_registry() -> PoolRegistry:
    """Return the process-wide registry.

    Raises:
        NotInitializedError: If initialize() has not been called
    """
    if _registry is None:
        raise NotInitializedError("Registry not initialized")
    return _registry


def _reset_registry() -> None:
    """Forget the process-wide registry (test isolation only)."""
    global _registry
    with _init_lock:
        _registry = None
