"""Checked integer wrapper for pool and share arithmetic.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
on reserves and shares safe by default:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Narrowing to u64 / u128 raises IntegerOverflowError

Python ints never overflow, so the integer widths of the exchange are
enforced explicitly at the points where a value leaves the wide domain.

Usage pattern:
    from weighted_amm.safe_int import S

    def proportional(amount: int, reserve_out: int, reserve_in: int) -> int:
        wide = S(amount) * S(reserve_out) // S(reserve_in)  # raises if reserve_in == 0
        return wide.to_u64()  # raises if the result does not fit
"""

from __future__ import annotations

from weighted_amm.constants import U64_MAX, U128_MAX
from weighted_amm.errors import IntegerOverflowError


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def to_u64(self) -> int:
        """Narrow to an unsigned 64-bit value.

        Raises:
            IntegerOverflowError: If value is negative or exceeds 2^64-1
        """
        return _narrow(self._value, U64_MAX, "u64")

    def to_u128(self) -> int:
        """Narrow to an unsigned 128-bit value.

        Raises:
            IntegerOverflowError: If value is negative or exceeds 2^128-1
        """
        return _narrow(self._value, U128_MAX, "u128")


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


def _narrow(value: int, limit: int, width: str) -> int:
    if value < 0:
        raise IntegerOverflowError(f"Negative value cannot be {width}: {value}")
    if value > limit:
        raise IntegerOverflowError(f"Value exceeds {width} max: {value}")
    return value


def check_u64(value: int, name: str = "value") -> int:
    """Validate a public amount, returning it unchanged.

    Raises:
        IntegerOverflowError: If value is not an int in [0, 2^64-1]
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise IntegerOverflowError(f"{name} outside u64 range: {value}")
    return value


# Convenience alias for concise code
S = SafeInt
