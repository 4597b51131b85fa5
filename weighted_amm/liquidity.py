"""Liquidity provisioning for weighted pools.

LiquidityEngine.provide turns a desired two-sided deposit into the amounts
the pool actually accepts, the shares it mints and the refunds owed back.
Every check runs before the pool is touched, so a rejected deposit leaves
reserves and supply exactly as they were.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import structlog

from weighted_amm.config import DEFAULT_CONFIG, EngineConfig
from weighted_amm.errors import (
    BootstrapLiquidityTooLowError,
    InsufficientCoinXError,
    InsufficientCoinYError,
    MintedLiquidityZeroError,
    OverLimitError,
    PoolValueExceedsCapError,
    SystemPausedError,
    ZeroAmountError,
)
from weighted_amm.math.weighted_math import (
    compute_incremental_shares,
    compute_initial_shares,
    optimal_counter_amount,
)
from weighted_amm.safe_int import S, check_u64

if TYPE_CHECKING:
    from weighted_amm.pools.pool import Pool

logger = structlog.get_logger()


class RegistryFlags(Protocol):
    """Read-only view of the registry flags consumed by deposits."""

    def is_paused(self) -> bool: ...


@dataclass
class ProvideResult:
    """Outcome of a successful deposit."""

    shares_minted: int
    amount_x_used: int
    amount_y_used: int
    refund_x: int
    refund_y: int
    # Shares locked forever by this deposit (non-zero only for the first one)
    locked_shares: int = 0


class LiquidityEngine:
    """Orchestrates deposits into weighted pools."""

    def __init__(self, flags: RegistryFlags, config: EngineConfig | None = None) -> None:
        self._flags = flags
        self._config = config or DEFAULT_CONFIG

    def provide(
        self,
        pool: Pool,
        amount_x_in: int,
        min_x: int,
        amount_y_in: int,
        min_y: int,
    ) -> ProvideResult:
        """Deposit up to (amount_x_in, amount_y_in) into pool.

        An empty pool takes both amounts as offered. A live pool takes the
        largest deposit that keeps its price: it first tries to use all of X
        and solve for Y, and only if that needs more Y than offered does it use
        all of Y and solve for X. Whatever is not taken is refunded.

        Args:
            pool: Pool to deposit into (caller holds the exclusive handle)
            amount_x_in: X offered
            min_x: Least X the caller accepts being used
            amount_y_in: Y offered
            min_y: Least Y the caller accepts being used

        Returns:
            ProvideResult with shares, used amounts and refunds

        Raises:
            SystemPausedError: If the registry is paused
            ZeroAmountError: If either offered amount is zero
            IntegerOverflowError: If an input is outside u64 or a share count
                does not fit u64
            InsufficientCoinXError: If the X actually used is below min_x
            InsufficientCoinYError: If the Y actually used is below min_y
            OverLimitError: If the solved X exceeds what was offered
            BootstrapLiquidityTooLowError: If a first deposit mints no more
                than the locked minimum
            MintedLiquidityZeroError: If a later deposit mints nothing
            PoolValueExceedsCapError: If a reserve would reach the pool cap
        """
        if self._flags.is_paused():
            raise SystemPausedError("Deposits are paused")

        check_u64(amount_x_in, "amount_x_in")
        check_u64(amount_y_in, "amount_y_in")
        check_u64(min_x, "min_x")
        check_u64(min_y, "min_y")
        if amount_x_in == 0 or amount_y_in == 0:
            raise ZeroAmountError("Both deposit amounts must be positive")

        reserve_x, reserve_y, supply = pool.reserves()
        bootstrap = reserve_x == 0 and reserve_y == 0

        if bootstrap:
            optimal_x, optimal_y = amount_x_in, amount_y_in
        else:
            optimal_x, optimal_y = self._optimal_amounts(
                pool, amount_x_in, min_x, amount_y_in, min_y
            )

        if bootstrap:
            raw_shares = compute_initial_shares(
                pool.weight_x,
                pool.weight_y,
                pool.scaling_factor_x,
                pool.scaling_factor_y,
                optimal_x,
                optimal_y,
            )
            locked = self._config.minimum_liquidity
            if raw_shares <= locked:
                logger.debug(
                    "provide_bootstrap_too_low",
                    pool=pool.key,
                    shares=raw_shares,
                    minimum=locked,
                )
                raise BootstrapLiquidityTooLowError(
                    f"Initial deposit mints {raw_shares} shares, needs more than {locked}"
                )
            minted = raw_shares - locked
            new_supply = raw_shares
        else:
            x_shares = compute_incremental_shares(
                supply,
                optimal_x,
                pool.weight_x,
                pool.weight_y,
                pool.scaling_factor_x,
                reserve_x,
            )
            y_shares = compute_incremental_shares(
                supply,
                optimal_y,
                pool.weight_y,
                pool.weight_x,
                pool.scaling_factor_y,
                reserve_y,
            )
            # The less favourable side decides
            minted = S(x_shares).min(y_shares).to_u64()
            if minted == 0:
                logger.debug(
                    "provide_zero_minted",
                    pool=pool.key,
                    x_shares=x_shares,
                    y_shares=y_shares,
                )
                raise MintedLiquidityZeroError("Deposit mints zero shares")
            locked = 0
            new_supply = (S(supply) + minted).to_u64()

        new_reserve_x = reserve_x + optimal_x
        new_reserve_y = reserve_y + optimal_y
        cap = self._config.max_pool_value
        if new_reserve_x >= cap or new_reserve_y >= cap:
            logger.debug(
                "provide_pool_full",
                pool=pool.key,
                reserve_x=new_reserve_x,
                reserve_y=new_reserve_y,
            )
            raise PoolValueExceedsCapError(f"Pool {pool.key} would exceed {cap}")

        # Commit
        pool.reserve_x = new_reserve_x
        pool.reserve_y = new_reserve_y
        pool.share_supply = new_supply
        if bootstrap:
            pool.locked_shares = locked

        result = ProvideResult(
            shares_minted=minted,
            amount_x_used=optimal_x,
            amount_y_used=optimal_y,
            refund_x=amount_x_in - optimal_x,
            refund_y=amount_y_in - optimal_y,
            locked_shares=locked,
        )
        logger.info(
            "liquidity_provided",
            pool=pool.key,
            bootstrap=bootstrap,
            shares=minted,
            amount_x=optimal_x,
            amount_y=optimal_y,
            refund_x=result.refund_x,
            refund_y=result.refund_y,
        )
        return result

    def _optimal_amounts(
        self,
        pool: Pool,
        amount_x_in: int,
        min_x: int,
        amount_y_in: int,
        min_y: int,
    ) -> tuple[int, int]:
        """Find the binding side of a deposit into a live pool.

        Returns:
            Tuple of (optimal_x, optimal_y)
        """
        candidate_y = optimal_counter_amount(
            amount_x_in,
            pool.reserve_x,
            pool.weight_x,
            pool.scaling_factor_x,
            pool.reserve_y,
            pool.weight_y,
            pool.scaling_factor_y,
        )
        if candidate_y <= amount_y_in:
            if candidate_y < min_y:
                raise InsufficientCoinYError(f"Optimal Y {candidate_y} below minimum {min_y}")
            return amount_x_in, candidate_y

        candidate_x = optimal_counter_amount(
            amount_y_in,
            pool.reserve_y,
            pool.weight_y,
            pool.scaling_factor_y,
            pool.reserve_x,
            pool.weight_x,
            pool.scaling_factor_x,
        )
        if candidate_x > amount_x_in:
            raise OverLimitError(f"Optimal X {candidate_x} exceeds desired {amount_x_in}")
        if candidate_x < min_x:
            raise InsufficientCoinXError(f"Optimal X {candidate_x} below minimum {min_x}")
        return candidate_x, amount_y_in
