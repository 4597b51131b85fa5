"""Replay a scenario of registry calls against a fresh registry.

Each step runs to completion or is rejected; a rejection is recorded and the
replay moves on to the next step, just as a host would keep processing
later transactions after one aborts.
"""

from __future__ import annotations

import json
from dataclasses import asdict, replace
from pathlib import Path

import structlog

from weighted_amm.admin import AdminCap
from weighted_amm.assets import AssetId
from weighted_amm.config import DEFAULT_CONFIG, EngineConfig
from weighted_amm.errors import AmmError
from weighted_amm.models import (
    PauseStep,
    ProvideStep,
    RegisterStep,
    ResumeStep,
    Scenario,
    Step,
    StepOutcome,
    UpdateFeeStep,
    WhitelistStep,
)
from weighted_amm.pools.registry import PoolRegistry

logger = structlog.get_logger()


def load_scenario(path: Path) -> Scenario:
    """Load and validate a scenario JSON file."""
    with open(path) as f:
        data = json.load(f)
    return Scenario.model_validate(data)


def run_scenario(
    scenario: Scenario, config: EngineConfig | None = None
) -> tuple[PoolRegistry, list[StepOutcome]]:
    """Replay every step of scenario against a new registry.

    Args:
        scenario: Validated scenario
        config: Engine configuration (default: DEFAULT_CONFIG, with the
            scenario's fee multiplier if it sets one)

    Returns:
        Tuple of (registry after the last step, one outcome per step)
    """
    config = config or DEFAULT_CONFIG
    if scenario.fee_multiplier is not None:
        config = replace(config, default_fee_multiplier=scenario.fee_multiplier)

    registry, cap = PoolRegistry.create(scenario.owner, config=config)
    outcomes: list[StepOutcome] = []

    for index, step in enumerate(scenario.steps):
        try:
            result = _apply(registry, cap, step)
        except AmmError as err:
            logger.debug(
                "scenario_step_rejected",
                index=index,
                action=step.action,
                error=type(err).__name__,
            )
            outcomes.append(
                StepOutcome(
                    index=index,
                    action=step.action,
                    ok=False,
                    error=type(err).__name__,
                    detail=str(err),
                )
            )
            continue
        outcomes.append(StepOutcome(index=index, action=step.action, ok=True, result=result))

    logger.info(
        "scenario_complete",
        steps=len(outcomes),
        rejected=sum(1 for o in outcomes if not o.ok),
        pools=registry.pool_count,
    )
    return registry, outcomes


def _apply(registry: PoolRegistry, cap: AdminCap, step: Step) -> dict[str, int] | None:
    if isinstance(step, RegisterStep):
        registry.register(
            step.caller,
            step.weight_x,
            step.weight_y,
            step.decimals_x,
            step.decimals_y,
            AssetId(step.asset_x),
            AssetId(step.asset_y),
        )
        return None
    if isinstance(step, ProvideStep):
        result = registry.provide(
            AssetId(step.asset_x),
            AssetId(step.asset_y),
            step.amount_x,
            step.min_x,
            step.amount_y,
            step.min_y,
        )
        return asdict(result)
    if isinstance(step, PauseStep):
        registry.pause(cap)
    elif isinstance(step, ResumeStep):
        registry.resume(cap)
    elif isinstance(step, WhitelistStep):
        if step.remove:
            registry.remove_whitelist(cap, step.address)
        else:
            registry.add_whitelist(cap, step.address)
    elif isinstance(step, UpdateFeeStep):
        registry.update_fee(cap, step.value)
    else:
        raise TypeError(f"Unknown step type: {type(step)}")
    return None
