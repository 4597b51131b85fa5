"""Decimal scaling helpers.

Assets declare between 0 and 9 decimals. Each amount is multiplied by its
scaling factor, 10^(9 - decimals), to put every asset on a common 9-decimal
basis before the weighted formulas run.
"""

from weighted_amm.constants import MAX_DECIMALS, NORMALIZED_DECIMALS
from weighted_amm.errors import DecimalsInvalidError

from .fixed_point import Bfp


class InvalidScalingFactorError(DecimalsInvalidError):
    """Scaling factor must be positive."""

    pass


def scaling_factor(decimals: int) -> int:
    """Scaling factor for an asset with the given decimal precision.

    Args:
        decimals: Declared decimals of the asset, in [0, 9]

    Returns:
        10^(9 - decimals)

    Raises:
        DecimalsInvalidError: If decimals is outside [0, 9]
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise DecimalsInvalidError(f"Decimals must be int, got {type(decimals).__name__}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise DecimalsInvalidError(f"Decimals must be in [0, {MAX_DECIMALS}], got {decimals}")
    return 10 ** (NORMALIZED_DECIMALS - decimals)


def normalize(amount: int, factor: int) -> int:
    """Write a raw amount onto the common 9-decimal basis.

    Raises:
        InvalidScalingFactorError: If factor <= 0
    """
    if factor <= 0:
        raise InvalidScalingFactorError(f"Scaling factor must be positive, got {factor}")
    return amount * factor


def scale_up(amount: int, factor: int) -> Bfp:
    """Normalized amount as an 18-decimal fixed-point value."""
    return Bfp.from_int(normalize(amount, factor))
