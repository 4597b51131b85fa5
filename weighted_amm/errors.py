"""Weighted AMM error classes.

Every failure aborts the whole call with no partial mutation, so each
error kind is its own class and callers can tell them apart.
"""


class AmmError(Exception):
    """Base error for pool registry and liquidity operations."""

    pass


# --- Input validation ---


class ZeroAmountError(AmmError):
    """Deposit amounts must be strictly positive."""

    pass


class IntegerOverflowError(AmmError, ArithmeticError):
    """Value does not fit the target unsigned width."""

    pass


# --- Pair identity ---


class SameAssetError(AmmError):
    """A pair needs two distinct assets."""

    pass


class PairMustBeOrderedError(AmmError):
    """Assets were not supplied in canonical order."""

    pass


# --- Registry ---


class PoolAlreadyRegisteredError(AmmError):
    """A pool for this pair already exists (in either order)."""

    pass


class PoolNotRegisteredError(AmmError):
    """No pool exists for this pair."""

    pass


class WeightsSumInvalidError(AmmError):
    """Weights must both be positive and sum to exactly 10000 basis points."""

    pass


class DecimalsInvalidError(AmmError):
    """Asset decimals must be in [0, 9]."""

    pass


class UnauthorizedError(AmmError):
    """Caller is not whitelisted for pool registration."""

    pass


class PoolBusyError(AmmError):
    """An exclusive handle to this pool is already live."""

    pass


# --- Administration ---


class SystemPausedError(AmmError):
    """Deposits are rejected while the registry is paused."""

    pass


class InvalidCredentialError(AmmError):
    """Administrative credential is not the registry's current one."""

    pass


class FeeOutOfRangeError(AmmError):
    """Fee multiplier must be in [10, 1000)."""

    pass


class AlreadyInitializedError(AmmError):
    """The process-wide registry was already created."""

    pass


class NotInitializedError(AmmError):
    """The process-wide registry has not been created yet."""

    pass


# --- Liquidity provisioning ---


class InsufficientCoinXError(AmmError):
    """Optimal X amount is below the caller's minimum."""

    pass


class InsufficientCoinYError(AmmError):
    """Optimal Y amount is below the caller's minimum."""

    pass


class OverLimitError(AmmError):
    """Optimal X amount exceeds the desired X amount (inconsistent search)."""

    pass


class BootstrapLiquidityTooLowError(AmmError):
    """First deposit does not mint more than the locked minimum liquidity."""

    pass


class MintedLiquidityZeroError(AmmError):
    """Deposit would mint zero shares."""

    pass


class PoolValueExceedsCapError(AmmError):
    """Reserves would reach MAX_POOL_VALUE."""

    pass
