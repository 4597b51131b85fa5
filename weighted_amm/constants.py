"""Protocol constants for the weighted AMM.

Centralizes the numeric domain and pool parameters shared by the math,
the pool registry and the liquidity engine.
"""

# Public amounts are unsigned 64-bit; share math may widen to 128 bits
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Weights are basis points and the two weights of a pool sum to WEIGHT_SCALE
WEIGHT_SCALE = 10_000

# Every asset is normalized onto a common 9-decimal basis
NORMALIZED_DECIMALS = 9
MAX_DECIMALS = NORMALIZED_DECIMALS

# Reserves stay below this cap to leave headroom for fee/weight multiplication
MAX_POOL_VALUE = U64_MAX // WEIGHT_SCALE

# Shares permanently locked by the first deposit into a pool
MINIMUM_LIQUIDITY = 1_000

# Canonical pool key: "LP-" + first asset + "-" + second asset
LP_KEY_PREFIX = "LP-"
LP_KEY_SEPARATOR = "-"

# Fee multiplier in basis points, consumed by the swap path
# 10 = 0.1%, 1000 = 10% (upper bound is exclusive)
MIN_FEE_MULTIPLIER = 10
MAX_FEE_MULTIPLIER = 1_000
DEFAULT_FEE_MULTIPLIER = 30
