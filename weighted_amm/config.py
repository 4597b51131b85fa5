"""Engine configuration."""

import os
from dataclasses import dataclass

from weighted_amm.constants import (
    DEFAULT_FEE_MULTIPLIER,
    MAX_FEE_MULTIPLIER,
    MAX_POOL_VALUE,
    MIN_FEE_MULTIPLIER,
    MINIMUM_LIQUIDITY,
)
from weighted_amm.errors import FeeOutOfRangeError


@dataclass(frozen=True)
class EngineConfig:
    """Centralized configuration for the registry and liquidity engine.

    Attributes:
        minimum_liquidity: Shares locked forever by a pool's first deposit
            (default: 1,000)
        max_pool_value: Exclusive upper bound on each reserve
            (default: U64_MAX // 10,000)
        default_fee_multiplier: Fee in basis points a new registry starts with
            (default: 30)
        min_fee_multiplier: Lowest accepted fee, inclusive (default: 10)
        max_fee_multiplier: Highest accepted fee, exclusive (default: 1,000)
        log_level: Level used by entry points that configure logging
    """

    minimum_liquidity: int = MINIMUM_LIQUIDITY
    max_pool_value: int = MAX_POOL_VALUE

    default_fee_multiplier: int = DEFAULT_FEE_MULTIPLIER
    min_fee_multiplier: int = MIN_FEE_MULTIPLIER
    max_fee_multiplier: int = MAX_FEE_MULTIPLIER

    log_level: str = "info"

    def __post_init__(self) -> None:
        self.check_fee(self.default_fee_multiplier)

    def check_fee(self, value: int) -> int:
        """Validate a fee multiplier against the configured bounds.

        Raises:
            FeeOutOfRangeError: If value is not in [min, max)
        """
        if not self.min_fee_multiplier <= value < self.max_fee_multiplier:
            raise FeeOutOfRangeError(
                f"Fee multiplier must be in [{self.min_fee_multiplier}, "
                f"{self.max_fee_multiplier}), got {value}"
            )
        return value


def config_from_env() -> EngineConfig:
    """Build configuration from environment variables with defaults.

    - WEIGHTED_AMM_FEE_MULTIPLIER: initial fee multiplier (default: 30)
    - WEIGHTED_AMM_LOG_LEVEL: log level for entry points (default: info)
    """
    fee = int(os.environ.get("WEIGHTED_AMM_FEE_MULTIPLIER", str(DEFAULT_FEE_MULTIPLIER)))
    log_level = os.environ.get("WEIGHTED_AMM_LOG_LEVEL", "info").lower()
    return EngineConfig(default_fee_multiplier=fee, log_level=log_level)


# Default configuration instance
DEFAULT_CONFIG = EngineConfig()
