"""Weighted two-asset pool."""

from __future__ import annotations

from dataclasses import dataclass

from weighted_amm.assets import AssetId
from weighted_amm.constants import LP_KEY_PREFIX, LP_KEY_SEPARATOR


@dataclass
class Pool:
    """One weighted reserve pair plus its LP share supply.

    Assets are stored in canonical order. Weights and decimals are fixed at
    registration; reserves and supply change only through deposits.

    Attributes:
        registry_id: Owning registry (back-reference only)
        asset_x: First asset in canonical order
        asset_y: Second asset in canonical order
        weight_x: Weight of X in basis points
        weight_y: Weight of Y in basis points (weight_x + weight_y == 10000)
        decimals_x: Declared decimals of X
        decimals_y: Declared decimals of Y
        scaling_factor_x: 10^(9 - decimals_x)
        scaling_factor_y: 10^(9 - decimals_y)
        reserve_x: Raw X balance held by the pool
        reserve_y: Raw Y balance held by the pool
        share_supply: Total shares outstanding, locked ones included
        locked_shares: Shares removed from circulation by the first deposit
    """

    registry_id: str
    asset_x: AssetId
    asset_y: AssetId
    weight_x: int
    weight_y: int
    decimals_x: int
    decimals_y: int
    scaling_factor_x: int
    scaling_factor_y: int
    reserve_x: int = 0
    reserve_y: int = 0
    share_supply: int = 0
    locked_shares: int = 0

    @property
    def key(self) -> str:
        """Canonical registry key of this pool."""
        return f"{LP_KEY_PREFIX}{self.asset_x}{LP_KEY_SEPARATOR}{self.asset_y}"

    @property
    def is_empty(self) -> bool:
        """True until the first deposit lands."""
        return self.reserve_x == 0 and self.reserve_y == 0

    @property
    def circulating_shares(self) -> int:
        """Shares held by providers (supply minus the locked minimum)."""
        return self.share_supply - self.locked_shares

    def reserves(self) -> tuple[int, int, int]:
        """Return (reserve_x, reserve_y, share_supply)."""
        return self.reserve_x, self.reserve_y, self.share_supply
