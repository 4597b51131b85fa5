"""Tests for pydantic snapshot and scenario models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from weighted_amm.constants import U64_MAX
from weighted_amm.models import (
    PauseStep,
    PoolSnapshot,
    ProvideStep,
    RegisterStep,
    Scenario,
    Uint64,
    UpdateFeeStep,
    WhitelistStep,
)
from tests.helpers.factories import make_pool

uint64 = TypeAdapter(Uint64)


class TestUint64:
    def test_accepts_int_and_string(self):
        assert uint64.validate_python(5) == 5
        assert uint64.validate_python(str(U64_MAX)) == U64_MAX

    @pytest.mark.parametrize("value", [-1, U64_MAX + 1, "abc", True, 1.5])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            uint64.validate_python(value)


class TestPoolSnapshot:
    def test_from_pool(self):
        pool = make_pool(reserve_x=10, reserve_y=20, share_supply=5_000, locked_shares=1_000)
        snapshot = PoolSnapshot.from_pool(pool)
        assert snapshot.key == pool.key
        assert snapshot.asset_x == str(pool.asset_x)
        assert snapshot.share_supply == 5_000

    def test_dumps_camel_case(self):
        data = PoolSnapshot.from_pool(make_pool()).model_dump(by_alias=True)
        assert set(data) == {
            "key",
            "assetX",
            "assetY",
            "weightX",
            "weightY",
            "decimalsX",
            "decimalsY",
            "reserveX",
            "reserveY",
            "shareSupply",
            "lockedShares",
        }


class TestScenario:
    def test_steps_parsed_by_action(self):
        scenario = Scenario.model_validate(
            {
                "owner": "0xowner",
                "feeMultiplier": 40,
                "steps": [
                    {
                        "action": "register",
                        "caller": "0xowner",
                        "assetX": "0x1a5e::usdc::USDC",
                        "assetY": "0x2::sui::SUI",
                        "weightX": 5000,
                        "weightY": 5000,
                        "decimalsX": 6,
                        "decimalsY": 9,
                    },
                    {
                        "action": "provide",
                        "assetX": "0x1a5e::usdc::USDC",
                        "assetY": "0x2::sui::SUI",
                        "amountX": "1000000",
                        "amountY": 1000000000,
                    },
                    {"action": "pause"},
                    {"action": "whitelist", "address": "0xa11ce", "remove": True},
                    {"action": "update_fee", "value": 50},
                ],
            }
        )
        assert scenario.fee_multiplier == 40
        kinds = [type(step) for step in scenario.steps]
        assert kinds == [RegisterStep, ProvideStep, PauseStep, WhitelistStep, UpdateFeeStep]
        provide = scenario.steps[1]
        assert provide.amount_x == 1_000_000
        assert provide.min_x == 0
        assert scenario.steps[3].remove

    def test_unknown_action_rejected(self):
        with pytest.raises(ValidationError):
            Scenario.model_validate({"owner": "0xowner", "steps": [{"action": "swap"}]})

    def test_provide_amount_validated(self):
        with pytest.raises(ValidationError):
            ProvideStep.model_validate(
                {"assetX": "a", "assetY": "b", "amountX": -1, "amountY": 1}
            )

    @pytest.mark.parametrize("tag", ["", "a-b", 7])
    def test_malformed_asset_tag_rejected(self, tag):
        """Asset tags follow AssetId rules, so replay never builds a bad id."""
        step = {
            "action": "register",
            "caller": "0xowner",
            "assetX": tag,
            "assetY": "0x2::sui::SUI",
            "weightX": 5000,
            "weightY": 5000,
            "decimalsX": 6,
            "decimalsY": 9,
        }
        with pytest.raises(ValidationError):
            Scenario.model_validate({"owner": "0xowner", "steps": [step]})

    def test_provide_asset_tag_validated(self):
        with pytest.raises(ValidationError):
            ProvideStep.model_validate({"assetX": "", "assetY": "b", "amountX": 1, "amountY": 1})
