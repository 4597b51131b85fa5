"""Asset identifiers and canonical pair ordering.

Assets are identified by explicit runtime values (AssetId) that callers
supply, never discovered by reflection. A pair is stored once, under the key
of its canonically ordered form:

    "LP-" + str(first) + "-" + str(second)

Which asset comes first is decided by a PairOrdering oracle, so registration
and lookup agree whatever order the caller passes the assets in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from weighted_amm.constants import LP_KEY_PREFIX, LP_KEY_SEPARATOR
from weighted_amm.errors import PairMustBeOrderedError, SameAssetError


@dataclass(frozen=True)
class AssetId:
    """Stable identifier of an asset type (e.g. "0x2::sui::SUI")."""

    tag: str

    def __post_init__(self) -> None:
        if not isinstance(self.tag, str) or not self.tag:
            raise ValueError("AssetId tag must be a non-empty string")
        # Keys join tags with the separator, so a tag may not contain it
        if LP_KEY_SEPARATOR in self.tag:
            raise ValueError(f"AssetId tag must not contain '{LP_KEY_SEPARATOR}': {self.tag!r}")

    def __str__(self) -> str:
        return self.tag


@runtime_checkable
class PairOrdering(Protocol):
    """Deterministic total order over asset identifiers."""

    def order(self, a: AssetId, b: AssetId) -> bool:
        """Return True if a sorts before b.

        Raises:
            SameAssetError: If a and b are the same asset
        """
        ...


class BytewiseOrdering:
    """Orders assets by the UTF-8 bytes of their tags, smaller first."""

    def order(self, a: AssetId, b: AssetId) -> bool:
        left = a.tag.encode("utf-8")
        right = b.tag.encode("utf-8")
        if left == right:
            raise SameAssetError(f"Same asset on both sides: {a}")
        return left < right


DEFAULT_ORDERING = BytewiseOrdering()


def sort_pair(
    a: AssetId, b: AssetId, ordering: PairOrdering = DEFAULT_ORDERING
) -> tuple[AssetId, AssetId]:
    """Return (first, second) in canonical order."""
    if ordering.order(a, b):
        return a, b
    return b, a


def require_ordered(
    asset_x: AssetId, asset_y: AssetId, ordering: PairOrdering = DEFAULT_ORDERING
) -> None:
    """Raise unless (asset_x, asset_y) is already canonical.

    Raises:
        SameAssetError: If both sides are the same asset
        PairMustBeOrderedError: If the caller passed the pair reversed
    """
    if not ordering.order(asset_x, asset_y):
        raise PairMustBeOrderedError(f"Pair must be ordered: {asset_y} sorts before {asset_x}")


def canonical_key(a: AssetId, b: AssetId, ordering: PairOrdering = DEFAULT_ORDERING) -> str:
    """Pool key for a pair, identical for (a, b) and (b, a)."""
    first, second = sort_pair(a, b, ordering)
    return f"{LP_KEY_PREFIX}{first}{LP_KEY_SEPARATOR}{second}"
