"""Integration tests for scenario replay and the command-line entry point."""

import json

import pytest
from pydantic import ValidationError

from weighted_amm.cli import main
from weighted_amm.config import EngineConfig
from weighted_amm.models import Scenario
from weighted_amm.scenario import load_scenario, run_scenario
from tests.helpers.constants import SUI, USDC, USDT


@pytest.fixture
def basic_scenario(scenarios_dir) -> Scenario:
    return load_scenario(scenarios_dir / "basic.json")


class TestRunScenario:
    """Tests for run_scenario() against the basic fixture."""

    def test_outcomes(self, basic_scenario):
        _, outcomes = run_scenario(basic_scenario)

        assert [o.index for o in outcomes] == list(range(10))
        assert [o.ok for o in outcomes] == [
            True,  # register USDC/SUI
            False,  # unlisted caller
            True,  # whitelist
            True,  # register SUI/USDT
            True,  # bootstrap
            True,  # follow-up deposit
            True,  # pause
            False,  # deposit while paused
            True,  # resume
            False,  # fee out of range
        ]
        assert outcomes[1].error == "UnauthorizedError"
        assert outcomes[7].error == "SystemPausedError"
        assert outcomes[9].error == "FeeOutOfRangeError"

    def test_provide_results_recorded(self, basic_scenario):
        _, outcomes = run_scenario(basic_scenario)
        follow_up = outcomes[5].result
        assert follow_up is not None
        assert follow_up["amount_x_used"] == 100_000
        assert follow_up["amount_y_used"] == 100_000_000
        assert follow_up["refund_y"] == 400_000_000
        assert outcomes[4].result["locked_shares"] == 1_000

    def test_final_state(self, basic_scenario):
        registry, _ = run_scenario(basic_scenario)
        assert registry.pool_count == 2
        assert registry.get_reserves(SUI, USDC)[:2] == (1_100_000, 1_100_000_000)
        assert registry.get_reserves(SUI, USDT)[:2] == (0, 0)
        assert not registry.is_paused()
        assert registry.fee_multiplier() == 25

    def test_config_fee_overridden_by_scenario(self, basic_scenario):
        registry, _ = run_scenario(basic_scenario, EngineConfig(default_fee_multiplier=100))
        assert registry.fee_multiplier() == 25

    def test_empty_scenario(self):
        registry, outcomes = run_scenario(Scenario(owner="0xowner"))
        assert outcomes == []
        assert registry.pool_count == 0
        assert registry.fee_multiplier() == 30


    def test_malformed_file_rejected_on_load(self, tmp_path):
        """A bad asset tag fails validation instead of aborting replay midway."""
        path = tmp_path / "bad.json"
        steps = [
            {"action": "pause"},
            {
                "action": "provide",
                "assetX": "",
                "assetY": "0x2::sui::SUI",
                "amountX": 1,
                "amountY": 1,
            },
        ]
        path.write_text(json.dumps({"owner": "0xowner", "steps": steps}))
        with pytest.raises(ValidationError):
            load_scenario(path)


class TestCli:
    """Tests for the weighted-amm command."""

    def test_json_output(self, scenarios_dir, capsys):
        code = main([str(scenarios_dir / "basic.json"), "--json"])

        payload = json.loads(capsys.readouterr().out)
        # Some steps are rejected on purpose
        assert code == 1
        assert len(payload["outcomes"]) == 10
        assert payload["status"]["feeMultiplier"] == 25
        assert payload["status"]["poolCount"] == 2
        keys = [pool["key"] for pool in payload["pools"]]
        assert keys == sorted(keys)
        usdc_sui = next(p for p in payload["pools"] if p["assetX"] == str(USDC))
        assert usdc_sui["reserveX"] == 1_100_000

    def test_text_output(self, scenarios_dir, capsys):
        main([str(scenarios_dir / "basic.json")])
        out = capsys.readouterr().out
        assert "[1] register: rejected (UnauthorizedError)" in out
        assert "LP-0x1a5e::usdc::USDC-0x2::sui::SUI: reserves=(1100000, 1100000000)" in out

    def test_all_ok_exit_code(self, tmp_path, capsys):
        path = tmp_path / "ok.json"
        path.write_text(json.dumps({"owner": "0xowner", "steps": [{"action": "pause"}]}))
        assert main([str(path), "-v"]) == 0
        assert "[0] pause: ok" in capsys.readouterr().out
