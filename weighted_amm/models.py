"""Pydantic models for pool views and scenario files.

Snapshots are what the exchange exposes to its host: reserves, weights and
supply of each pool plus the registry flags. Scenario models describe a
sequence of registry calls to replay (see weighted_amm.scenario).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Discriminator, Field, Tag

from weighted_amm.assets import AssetId
from weighted_amm.constants import U64_MAX

if TYPE_CHECKING:
    from weighted_amm.pools.pool import Pool


def validate_uint64(value: Any) -> int:
    """Validate that a value is a u64, given as int or decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint64 must be an integer, got bool")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint64 must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Uint64 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint64 cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"Uint64 overflow: {value} > 2^64-1")
    return value


# 64-bit unsigned integer (accepts decimal strings for large values in JSON)
Uint64 = Annotated[
    int,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer"),
]



def validate_asset_tag(value: Any) -> str:
    """Validate an asset tag with the same rules as AssetId.

    Raises:
        ValueError: If value is not a non-empty string free of the key separator
    """
    if not isinstance(value, str):
        raise ValueError(f"Asset tag must be a string, got {type(value).__name__}")
    return AssetId(value).tag


# Asset tag as it appears in scenario files
AssetTag = Annotated[
    str,
    BeforeValidator(validate_asset_tag),
    Field(description="Asset type tag"),
]

class PoolSnapshot(BaseModel):
    """Read-only view of one pool."""

    key: str
    asset_x: str = Field(alias="assetX")
    asset_y: str = Field(alias="assetY")
    weight_x: int = Field(alias="weightX", ge=0, le=10_000)
    weight_y: int = Field(alias="weightY", ge=0, le=10_000)
    decimals_x: int = Field(alias="decimalsX", ge=0, le=9)
    decimals_y: int = Field(alias="decimalsY", ge=0, le=9)
    reserve_x: Uint64 = Field(alias="reserveX")
    reserve_y: Uint64 = Field(alias="reserveY")
    share_supply: Uint64 = Field(alias="shareSupply")
    locked_shares: Uint64 = Field(alias="lockedShares")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_pool(cls, pool: Pool) -> PoolSnapshot:
        return cls(
            key=pool.key,
            asset_x=str(pool.asset_x),
            asset_y=str(pool.asset_y),
            weight_x=pool.weight_x,
            weight_y=pool.weight_y,
            decimals_x=pool.decimals_x,
            decimals_y=pool.decimals_y,
            reserve_x=pool.reserve_x,
            reserve_y=pool.reserve_y,
            share_supply=pool.share_supply,
            locked_shares=pool.locked_shares,
        )


class RegistryStatus(BaseModel):
    """Registry flags and size."""

    registry_id: str = Field(alias="registryId")
    paused: bool
    fee_multiplier: int = Field(alias="feeMultiplier")
    pool_count: int = Field(alias="poolCount", ge=0)
    whitelist: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


# =============================================================================
# Scenario steps
# =============================================================================


class RegisterStep(BaseModel):
    """Register a pool. Values are passed through so the registry can reject them."""

    action: Literal["register"] = "register"
    caller: str
    asset_x: AssetTag = Field(alias="assetX")
    asset_y: AssetTag = Field(alias="assetY")
    weight_x: int = Field(alias="weightX")
    weight_y: int = Field(alias="weightY")
    decimals_x: int = Field(alias="decimalsX")
    decimals_y: int = Field(alias="decimalsY")

    model_config = {"populate_by_name": True}


class ProvideStep(BaseModel):
    """Deposit into a registered pool."""

    action: Literal["provide"] = "provide"
    asset_x: AssetTag = Field(alias="assetX")
    asset_y: AssetTag = Field(alias="assetY")
    amount_x: Uint64 = Field(alias="amountX")
    min_x: Uint64 = Field(default=0, alias="minX")
    amount_y: Uint64 = Field(alias="amountY")
    min_y: Uint64 = Field(default=0, alias="minY")

    model_config = {"populate_by_name": True}


class PauseStep(BaseModel):
    action: Literal["pause"] = "pause"


class ResumeStep(BaseModel):
    action: Literal["resume"] = "resume"


class WhitelistStep(BaseModel):
    """Add (or with remove=true, revoke) a registration permission."""

    action: Literal["whitelist"] = "whitelist"
    address: str
    remove: bool = False


class UpdateFeeStep(BaseModel):
    action: Literal["update_fee"] = "update_fee"
    value: int


def _get_step_action(v: Any) -> str:
    """Discriminator function for the Step union type."""
    if isinstance(v, dict):
        return str(v.get("action", ""))
    return str(v.action)


Step = Annotated[
    Annotated[RegisterStep, Tag("register")]
    | Annotated[ProvideStep, Tag("provide")]
    | Annotated[PauseStep, Tag("pause")]
    | Annotated[ResumeStep, Tag("resume")]
    | Annotated[WhitelistStep, Tag("whitelist")]
    | Annotated[UpdateFeeStep, Tag("update_fee")],
    Discriminator(_get_step_action),
]


class Scenario(BaseModel):
    """A sequence of registry calls made against a fresh registry.

    Administrative steps run with the owner's credential.
    """

    owner: str
    fee_multiplier: int | None = Field(default=None, alias="feeMultiplier")
    steps: list[Step] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class StepOutcome(BaseModel):
    """Result of replaying one scenario step."""

    index: int
    action: str
    ok: bool
    error: str | None = None
    detail: str | None = None
    result: dict[str, int] | None = None
