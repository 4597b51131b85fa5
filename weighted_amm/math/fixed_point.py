"""18-decimal fixed-point arithmetic (Bfp) with logarithm-based powers.

Weighted invariants raise normalized reserves to fractional weights, so the
math needs a deterministic integer power function. This module carries the
Balancer LogExpMath approach: x^y = exp(y * ln(x)), with ln and exp built from
fixed tables of e^(2^k) and short Taylor series, all in integer arithmetic.
Results are bit-exact across platforms.

All values are stored as integers scaled by 10^18.
"""

from __future__ import annotations

from typing import ClassVar

from weighted_amm.errors import AmmError

__all__ = [
    "Bfp",
    "FixedPointError",
    "BaseOutOfBounds",
    "ExponentOutOfBounds",
    "ProductOutOfBounds",
    "pow_raw",
    "exp",
    "ONE_18",
]

ONE_18 = 10**18
ONE_20 = 10**20
ONE_36 = 10**36

MAX_NATURAL_EXPONENT = 130 * ONE_18
MIN_NATURAL_EXPONENT = -41 * ONE_18

# ln is computed with 36 decimals inside (0.9, 1.1)
LN_36_LOWER_BOUND = ONE_18 - 10**17
LN_36_UPPER_BOUND = ONE_18 + 10**17

MILD_EXPONENT_BOUND = (1 << 254) // ONE_20

# (x, e^x) pairs at 18 decimals: x = 2^7, 2^6
_LARGE_TERMS: tuple[tuple[int, int], ...] = (
    (128 * ONE_18, 38877084059945950922200000000000000000000000000000000000),
    (64 * ONE_18, 6235149080811616882910000000),
)

# (x, e^x) pairs at 20 decimals: x = 2^5 down to 2^-4
_MEDIUM_TERMS: tuple[tuple[int, int], ...] = (
    (3_200_000_000_000_000_000_000, 7_896_296_018_268_069_516_100_000_000_000_000),
    (1_600_000_000_000_000_000_000, 888_611_052_050_787_263_676_000_000),
    (800_000_000_000_000_000_000, 298_095_798_704_172_827_474_000),
    (400_000_000_000_000_000_000, 5_459_815_003_314_423_907_810),
    (200_000_000_000_000_000_000, 738_905_609_893_065_022_723),
    (100_000_000_000_000_000_000, 271_828_182_845_904_523_536),
    (50_000_000_000_000_000_000, 164_872_127_070_012_814_685),
    (25_000_000_000_000_000_000, 128_402_541_668_774_148_407),
    (12_500_000_000_000_000_000, 113_314_845_306_682_631_683),
    (6_250_000_000_000_000_000, 106_449_445_891_785_942_956),
)

# exp only reduces by the first eight medium terms
_EXP_MEDIUM_TERMS = _MEDIUM_TERMS[:8]


class FixedPointError(AmmError, ArithmeticError):
    """Base error for fixed-point power computations."""

    pass


class BaseOutOfBounds(FixedPointError):
    """Base does not fit the signed 256-bit range used by ln."""

    pass


class ExponentOutOfBounds(FixedPointError):
    """Exponent is outside the range the power function supports."""

    pass


class ProductOutOfBounds(FixedPointError):
    """y * ln(x) falls outside the domain of exp."""

    pass


def _div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero.

    Python's // floors toward negative infinity; the reference arithmetic
    truncates, which differs only when the operands have opposite signs.
    """
    if b == 0:
        raise ZeroDivisionError("Division by zero in _div_trunc")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def _ln(a: int) -> int:
    """Natural logarithm of a positive 18-decimal value."""
    if a < ONE_18:
        return -_ln((ONE_18 * ONE_18) // a)

    total = 0
    for x_n, a_n in _LARGE_TERMS:
        if a >= a_n * ONE_18:
            a //= a_n
            total += x_n

    # Continue at 20 decimals
    total *= 100
    a *= 100

    for x_n, a_n in _MEDIUM_TERMS:
        if a >= a_n:
            a = (a * ONE_20) // a_n
            total += x_n

    # ln(a) = 2 * arctanh(z), z = (a - 1) / (a + 1)
    z = ((a - ONE_20) * ONE_20) // (a + ONE_20)
    z_squared = (z * z) // ONE_20
    term = z
    series = term
    for divisor in range(3, 12, 2):
        term = (term * z_squared) // ONE_20
        series += term // divisor

    return (total + series * 2) // 100


def _ln_36(x: int) -> int:
    """Natural logarithm with 36-decimal output, for x close to one."""
    x *= ONE_18

    z = _div_trunc((x - ONE_36) * ONE_36, x + ONE_36)
    z_squared = _div_trunc(z * z, ONE_36)
    term = z
    series = term
    for divisor in range(3, 16, 2):
        term = _div_trunc(term * z_squared, ONE_36)
        series += _div_trunc(term, divisor)

    return series * 2


def exp(x: int) -> int:
    """e^x for an 18-decimal exponent.

    Raises:
        ExponentOutOfBounds: If x is outside [-41, 130]
    """
    if not (MIN_NATURAL_EXPONENT <= x <= MAX_NATURAL_EXPONENT):
        raise ExponentOutOfBounds(f"Exponent {x} outside valid range")

    if x < 0:
        return (ONE_18 * ONE_18) // exp(-x)

    first_an = 1
    for x_n, a_n in _LARGE_TERMS:
        if x >= x_n:
            x -= x_n
            first_an = a_n
            break

    x *= 100

    product = ONE_20
    for x_n, a_n in _EXP_MEDIUM_TERMS:
        if x >= x_n:
            x -= x_n
            product = (product * a_n) // ONE_20

    # Taylor series up to x^12 / 12!
    series = ONE_20 + x
    term = x
    for divisor in range(2, 13):
        term = ((term * x) // ONE_20) // divisor
        series += term

    return (((product * series) // ONE_20) * first_an) // 100


def pow_raw(x: int, y: int) -> int:
    """x^y for non-negative 18-decimal operands.

    Raises:
        BaseOutOfBounds: If x >= 2^255
        ExponentOutOfBounds: If y exceeds the mild exponent bound
        ProductOutOfBounds: If y * ln(x) is outside the domain of exp
    """
    if y == 0:
        return ONE_18
    if x == 0:
        return 0

    if x >= (1 << 255):
        raise BaseOutOfBounds(f"Base {x} too large")
    if y >= MILD_EXPONENT_BOUND:
        raise ExponentOutOfBounds(f"Exponent {y} exceeds bound")

    if LN_36_LOWER_BOUND < x < LN_36_UPPER_BOUND:
        ln_36_x = _ln_36(x)
        whole = _div_trunc(ln_36_x, ONE_18)
        fraction = ln_36_x - whole * ONE_18
        logx_times_y = whole * y + _div_trunc(fraction * y, ONE_18)
    else:
        logx_times_y = _ln(x) * y

    logx_times_y = _div_trunc(logx_times_y, ONE_18)

    if not (MIN_NATURAL_EXPONENT <= logx_times_y <= MAX_NATURAL_EXPONENT):
        raise ProductOutOfBounds(f"Product {logx_times_y} outside valid range")

    return exp(logx_times_y)


class Bfp:
    """18-decimal fixed-point number stored as int.

    Example: 1.5 is stored as 1_500_000_000_000_000_000
    """

    ONE: ClassVar[int] = ONE_18
    # pow results carry at most 10^-14 relative error
    MAX_POW_RELATIVE_ERROR: ClassVar[int] = 10000

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int) -> None:
        self.value = value

    @classmethod
    def from_int(cls, i: int) -> Bfp:
        """Create from integer (will be scaled by 10^18)."""
        return cls(i * cls.ONE)

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int) -> Bfp:
        """Create numerator / denominator, rounded down."""
        if denominator == 0:
            raise ZeroDivisionError("Bfp ratio with zero denominator")
        return cls((numerator * cls.ONE) // denominator)

    def to_int(self) -> int:
        """Integer part, rounded down."""
        return self.value // self.ONE

    def mul_down(self, other: Bfp) -> Bfp:
        """Multiply with floor rounding."""
        return Bfp((self.value * other.value) // self.ONE)

    def sub(self, other: Bfp) -> Bfp:
        """Subtract other from self. Clamps to 0 if result would be negative."""
        return Bfp(max(0, self.value - other.value))

    def pow_down(self, exponent: Bfp) -> Bfp:
        """self^exponent, rounded down by the maximum power error."""
        raw = pow_raw(self.value, exponent.value)
        max_error = self._pow_error(raw)
        if raw < max_error:
            return Bfp(0)
        return Bfp(raw - max_error)

    def _pow_error(self, raw: int) -> int:
        # mul_up(raw, MAX_POW_RELATIVE_ERROR) + 1
        product = raw * self.MAX_POW_RELATIVE_ERROR
        rounded = ((product - 1) // self.ONE + 1) if product > 0 else 0
        return rounded + 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: Bfp) -> bool:
        return self.value < other.value

    def __le__(self, other: Bfp) -> bool:
        return self.value <= other.value

    def __repr__(self) -> str:
        return f"Bfp({self.value})"
