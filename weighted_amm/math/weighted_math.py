"""Weighted pool liquidity math.

Core functions for issuing LP shares against a two-asset weighted pool
whose value function is

    V = nx^(wx / 10000) * ny^(wy / 10000)

where nx, ny are reserves normalized onto the 9-decimal basis.

Rounding rule: every amount the pool asks a depositor for and every share
count it mints rounds down. The depositor, never the pool, absorbs the
remainder.
"""

from weighted_amm.constants import WEIGHT_SCALE
from weighted_amm.errors import AmmError
from weighted_amm.safe_int import S

from .fixed_point import Bfp
from .scaling import normalize, scale_up


class ZeroWeightError(AmmError):
    """Asset weight must be positive."""

    pass


class ZeroBalanceError(AmmError):
    """Reserve or amount must be positive for this formula."""

    pass


def _weight_exponent(weight: int, total: int = WEIGHT_SCALE) -> Bfp:
    if weight <= 0:
        raise ZeroWeightError(f"weight must be positive, got {weight}")
    return Bfp.from_ratio(weight, total)


def compute_initial_shares(
    weight_x: int,
    weight_y: int,
    scale_x: int,
    scale_y: int,
    amount_x: int,
    amount_y: int,
) -> int:
    """Calculate the share issuance of the first deposit into a pool.

    The bootstrap deposit defines the pool, so shares equal the weighted
    invariant of the deposited amounts.

    Formula:
        shares = floor(nx^(wx / 10000) * ny^(wy / 10000))

    Args:
        weight_x: Weight of X in basis points (must be positive)
        weight_y: Weight of Y in basis points (must be positive)
        scale_x: Scaling factor of X
        scale_y: Scaling factor of Y
        amount_x: Raw X amount deposited (must be positive)
        amount_y: Raw Y amount deposited (must be positive)

    Returns:
        Share count (before the minimum liquidity is locked)

    Raises:
        ZeroWeightError: If either weight is zero
        ZeroBalanceError: If either amount is zero
        IntegerOverflowError: If the share count does not fit u64
    """
    exponent_x = _weight_exponent(weight_x)
    exponent_y = _weight_exponent(weight_y)

    if amount_x <= 0:
        raise ZeroBalanceError("amount_x must be positive")
    if amount_y <= 0:
        raise ZeroBalanceError("amount_y must be positive")

    # Each factor rounded down, then the product rounded down
    powered_x = scale_up(amount_x, scale_x).pow_down(exponent_x)
    powered_y = scale_up(amount_y, scale_y).pow_down(exponent_y)
    invariant = powered_x.mul_down(powered_y)

    return S(invariant.to_int()).to_u64()


def compute_incremental_shares(
    current_supply: int,
    amount_added: int,
    weight_self: int,
    weight_other: int,
    scale_self: int,
    reserve_self: int,
) -> int:
    """Calculate shares minted for one side of a deposit into a live pool.

    The deposit grows this side's normalized reserve by the ratio
    r = (reserve + amount) / reserve. Assuming the other side is matched in
    the same proportion, the weighted invariant grows by

        g = r^(w_self / W) * r^(w_other / W),   W = w_self + w_other

    and the pool mints supply * (g - 1). The engine computes this for both
    sides and keeps the smaller result.

    Args:
        current_supply: Outstanding shares (including locked ones)
        amount_added: Raw amount of this asset accepted by the pool
        weight_self: Weight of this asset in basis points
        weight_other: Weight of the other asset in basis points
        scale_self: Scaling factor of this asset
        reserve_self: Current raw reserve of this asset (must be positive)

    Returns:
        Shares attributable to this side, rounded down

    Raises:
        ZeroWeightError: If either weight is zero
        ZeroBalanceError: If reserve_self is zero
        IntegerOverflowError: If the result leaves the 128-bit working domain
            or does not fit u64
    """
    total_weight = weight_self + weight_other
    exponent_self = _weight_exponent(weight_self, total_weight)
    exponent_other = _weight_exponent(weight_other, total_weight)

    if reserve_self <= 0:
        raise ZeroBalanceError("reserve_self must be positive")
    if amount_added <= 0 or current_supply <= 0:
        return 0

    normalized_reserve = normalize(reserve_self, scale_self)
    normalized_amount = normalize(amount_added, scale_self)
    ratio = Bfp.from_ratio(normalized_reserve + normalized_amount, normalized_reserve)

    growth = ratio.pow_down(exponent_self).mul_down(ratio.pow_down(exponent_other))
    gain = growth.sub(Bfp(Bfp.ONE))

    wide = (S(current_supply) * gain.value) // Bfp.ONE
    return S(wide.to_u128()).to_u64()


def optimal_counter_amount(
    amount_self_desired: int,
    reserve_self: int,
    weight_self: int,
    scale_self: int,
    reserve_other: int,
    weight_other: int,
    scale_other: int,
) -> int:
    """Calculate the other-asset amount that matches a desired deposit.

    The pool's weighted spot price of self in terms of other, on the
    normalized basis, is

        p = (reserve_other * s_other / w_other) / (reserve_self * s_self / w_self)

    A deposit leaves p unchanged only if it keeps
    (reserve_other / w_other / s_other) : (reserve_self / w_self / s_self) fixed.
    Weights and scaling factors never change, so that is the proportional
    amount, converted back to the other asset's raw units:

        amount_other = floor(amount_self * reserve_other / reserve_self)

    Args:
        amount_self_desired: Raw amount of the asset the caller leads with
        reserve_self: Current raw reserve of that asset (must be positive)
        weight_self: Its weight in basis points
        scale_self: Its scaling factor
        reserve_other: Current raw reserve of the other asset (must be positive)
        weight_other: The other weight in basis points
        scale_other: The other scaling factor

    Returns:
        Raw amount of the other asset, rounded down (may exceed u64; the
        caller compares it against what was offered)

    Raises:
        ZeroWeightError: If either weight is zero
        ZeroBalanceError: If either reserve is zero
    """
    if weight_self <= 0 or weight_other <= 0:
        raise ZeroWeightError("weights must be positive")
    if reserve_self <= 0:
        raise ZeroBalanceError("reserve_self must be positive")
    if reserve_other <= 0:
        raise ZeroBalanceError("reserve_other must be positive")

    # Weighted spot price as an exact fraction on the normalized basis
    price_num = S(normalize(reserve_other, scale_other)) * weight_self
    price_den = S(normalize(reserve_self, scale_self)) * weight_other

    # Value-matching amount, re-weighted so the price stays put
    counter_num = S(normalize(amount_self_desired, scale_self)) * price_num * weight_other
    counter_den = price_den * weight_self
    normalized_counter = counter_num // counter_den

    return (normalized_counter // scale_other).value
