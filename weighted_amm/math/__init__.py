"""Numeric primitives for the weighted AMM.

- Bfp: 18-decimal fixed-point arithmetic with deterministic powers
- scaling: decimal normalization onto the 9-decimal basis
- weighted_math: share issuance and optimal deposit amounts
"""

from weighted_amm.math.fixed_point import Bfp
from weighted_amm.math.scaling import normalize, scale_up, scaling_factor
from weighted_amm.math.weighted_math import (
    ZeroBalanceError,
    ZeroWeightError,
    compute_incremental_shares,
    compute_initial_shares,
    optimal_counter_amount,
)

__all__ = [
    "Bfp",
    "normalize",
    "scale_up",
    "scaling_factor",
    "compute_initial_shares",
    "compute_incremental_shares",
    "optimal_counter_amount",
    "ZeroWeightError",
    "ZeroBalanceError",
]
