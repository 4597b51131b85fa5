"""Command-line entry point: replay a scenario file and print the outcome.

Usage:
    python -m weighted_amm.cli path/to/scenario.json [--verbose] [--json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog

from weighted_amm.config import config_from_env
from weighted_amm.scenario import load_scenario, run_scenario


def configure_logging(level: str) -> None:
    """Configure structlog rendering for command-line use."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        # stdout carries the report
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Replay weighted AMM registry calls from a scenario file",
    )
    parser.add_argument("scenario", type=Path, help="Scenario JSON file")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log at debug level (overrides WEIGHTED_AMM_LOG_LEVEL)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print outcomes and final pool snapshots as JSON",
    )
    args = parser.parse_args(argv)

    config = config_from_env()
    configure_logging("debug" if args.verbose else config.log_level)

    scenario = load_scenario(args.scenario)
    registry, outcomes = run_scenario(scenario, config)

    if args.json:
        payload = {
            "outcomes": [o.model_dump(exclude_none=True) for o in outcomes],
            "pools": [s.model_dump(by_alias=True) for s in registry.snapshots()],
            "status": registry.status().model_dump(by_alias=True),
        }
        print(json.dumps(payload, indent=2))
    else:
        for outcome in outcomes:
            status = "ok" if outcome.ok else f"rejected ({outcome.error})"
            print(f"[{outcome.index}] {outcome.action}: {status}")
        for snapshot in registry.snapshots():
            print(
                f"{snapshot.key}: reserves=({snapshot.reserve_x}, {snapshot.reserve_y}) "
                f"supply={snapshot.share_supply}"
            )

    return 0 if all(o.ok for o in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
