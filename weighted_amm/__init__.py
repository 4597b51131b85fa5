"""Weighted AMM - pool registry and liquidity provisioning engine."""

from weighted_amm.assets import AssetId, BytewiseOrdering, PairOrdering, canonical_key
from weighted_amm.liquidity import LiquidityEngine, ProvideResult
from weighted_amm.pools import Pool, PoolRegistry, get_registry, initialize

__version__ = "0.1.0"
__all__ = [
    "AssetId",
    "BytewiseOrdering",
    "PairOrdering",
    "canonical_key",
    "Pool",
    "PoolRegistry",
    "LiquidityEngine",
    "ProvideResult",
    "initialize",
    "get_registry",
    "__version__",
]
