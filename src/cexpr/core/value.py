"""
Tagged numeric value for the cexpr expression language.

A Value is either a signed 32-bit integer or an IEEE single-precision
float. Binary operators promote Int/Int to Int and anything involving a
Float to Float. Remainder, shift and bitwise operators only accept
Int/Int operands; comparisons and logical operators produce Int 0/1.

Usage:
    from cexpr.core.value import Value

    a = Value.of_int(3)
    b = Value.of_float(2.0)
    (a + b).is_float       # True, data == 5.0
    a.lt(b)                # Value.of_int(0)
"""

from __future__ import annotations

import math
import struct
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from cexpr.core.errors import DivisionByZeroError, InvalidOperandsError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MASK = 0xFFFFFFFF


def wrap_int32(n: int) -> int:
    """Reduce an arbitrary Python int to signed 32-bit two's complement."""
    return ((n - INT32_MIN) & UINT32_MASK) + INT32_MIN


def round_float32(x: float) -> float:
    """Round a double to the nearest IEEE single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        # Finite double whose float32 rounding overflows
        return math.copysign(math.inf, x)


class ValueKind(StrEnum):
    """Type tag of a Value."""

    INT = "int"
    FLOAT = "float"


@dataclass(frozen=True, slots=True)
class Value:
    """Immutable int32 | float32 value. Every operator returns a new Value."""

    kind: ValueKind
    data: int | float

    def __post_init__(self) -> None:
        if self.kind == ValueKind.INT:
            if isinstance(self.data, bool) or not isinstance(self.data, int):
                raise TypeError(f"INT value requires an int, got {type(self.data).__name__}")
            object.__setattr__(self, "data", wrap_int32(self.data))
        else:
            object.__setattr__(self, "data", round_float32(float(self.data)))

    # -- Constructors --

    @classmethod
    def of_int(cls, n: int) -> Value:
        return cls(ValueKind.INT, n)

    @classmethod
    def of_float(cls, x: float) -> Value:
        return cls(ValueKind.FLOAT, x)

    @classmethod
    def zero(cls) -> Value:
        return cls(ValueKind.INT, 0)

    @classmethod
    def from_python(cls, obj: Any) -> Value:
        """Convert a bool, int, float or Value into a Value."""
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, bool):
            return cls.of_int(int(obj))
        if isinstance(obj, int):
            return cls.of_int(obj)
        if isinstance(obj, float):
            return cls.of_float(obj)
        raise TypeError(f"Cannot convert {type(obj).__name__} to Value")

    # -- Inspection --

    @property
    def is_int(self) -> bool:
        return self.kind == ValueKind.INT

    @property
    def is_float(self) -> bool:
        return self.kind == ValueKind.FLOAT

    @property
    def is_nonzero(self) -> bool:
        return self.data != 0

    @property
    def raw(self) -> int:
        """The 32-bit pattern of the value as an unsigned int."""
        if self.is_int:
            return self.data & UINT32_MASK
        return struct.unpack("<I", struct.pack("<f", self.data))[0]

    def to_int(self) -> Value:
        """Cast to INT, truncating a float toward zero."""
        if self.is_int:
            return self
        if not math.isfinite(self.data):
            raise InvalidOperandsError(f"cannot convert {self} to int")
        return Value.of_int(math.trunc(self.data))

    def to_float(self) -> Value:
        """Cast to FLOAT."""
        if self.is_float:
            return self
        return Value.of_float(float(self.data))

    def __int__(self) -> int:
        return self.to_int().data

    def __float__(self) -> float:
        return float(self.data)

    def __bool__(self) -> bool:
        return self.is_nonzero

    def __str__(self) -> str:
        if self.is_int:
            return str(self.data)
        return f"{self.data:g}"

    def __repr__(self) -> str:
        return f"Value({self.kind.value}, {self.data!r})"

    # -- Arithmetic (Int and Float) --

    def __add__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a + b, lambda a, b: a + b)

    def __sub__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a - b, lambda a, b: a - b)

    def __mul__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a * b, lambda a, b: a * b)

    def __truediv__(self, other: Any) -> Value:
        return _binary(self, other, _int_div, _float_div)

    # -- Int only --

    def __mod__(self, other: Any) -> Value:
        return _binary(self, other, _int_mod, None)

    def __lshift__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a << (b & 0x1F), None)

    def __rshift__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a >> (b & 0x1F), None)

    def __and__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a & b, None)

    def __or__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a | b, None)

    def __xor__(self, other: Any) -> Value:
        return _binary(self, other, lambda a, b: a ^ b, None)

    # -- Logical (Int 0/1 result) --

    def logical_and(self, other: Any) -> Value:
        rhs = _coerce(other)
        return _truth(self.is_nonzero and rhs.is_nonzero)

    def logical_or(self, other: Any) -> Value:
        rhs = _coerce(other)
        return _truth(self.is_nonzero or rhs.is_nonzero)

    def logical_not(self) -> Value:
        return _truth(not self.is_nonzero)

    # -- Comparison (Int 0/1 result) --

    def eq(self, other: Any) -> Value:
        return _compare(self, other, lambda a, b: a == b)

    def ne(self, other: Any) -> Value:
        return _compare(self, other, lambda a, b: a != b)

    def lt(self, other: Any) -> Value:
        return _compare(self, other, lambda a, b: a < b)

    def le(self, other: Any) -> Value:
        return _compare(self, other, lambda a, b: a <= b)

    def gt(self, other: Any) -> Value:
        return _compare(self, other, lambda a, b: a > b)

    def ge(self, other: Any) -> Value:
        return _compare(self, other, lambda a, b: a >= b)

    # -- Unary --

    def __pos__(self) -> Value:
        return self

    def __neg__(self) -> Value:
        if self.is_int:
            return Value.of_int(-self.data)
        return Value.of_float(-self.data)

    def __invert__(self) -> Value:
        if not self.is_int:
            raise InvalidOperandsError("invalid operand to unary expression")
        return Value.of_int(~self.data)


# ---------------------------------------------------------------------------
# Operator helpers
# ---------------------------------------------------------------------------


def _coerce(obj: Any) -> Value:
    if isinstance(obj, Value):
        return obj
    return Value.from_python(obj)


def _truth(flag: bool) -> Value:
    return Value.of_int(1 if flag else 0)


def _promote(lhs: Value, rhs: Value) -> tuple[bool, int | float, int | float]:
    """Return (both_int, left, right) after numeric promotion."""
    if lhs.is_int and rhs.is_int:
        return True, lhs.data, rhs.data
    return False, lhs.to_float().data, rhs.to_float().data


def _binary(
    lhs: Value,
    other: Any,
    int_op: Callable[[int, int], int],
    float_op: Callable[[float, float], float] | None,
) -> Value:
    if not isinstance(other, (Value, int, float)):
        return NotImplemented
    rhs = _coerce(other)
    both_int, a, b = _promote(lhs, rhs)
    if both_int:
        return Value.of_int(int_op(a, b))
    if float_op is None:
        raise InvalidOperandsError()
    return Value.of_float(float_op(a, b))


def _compare(lhs: Value, other: Any, op: Callable[[Any, Any], bool]) -> Value:
    rhs = _coerce(other)
    _, a, b = _promote(lhs, rhs)
    return _truth(op(a, b))


def _int_div(a: int, b: int) -> int:
    """C division: truncates toward zero."""
    if b == 0:
        raise DivisionByZeroError()
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def _int_mod(a: int, b: int) -> int:
    """C remainder: takes the sign of the dividend."""
    if b == 0:
        raise DivisionByZeroError("integer remainder by zero")
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def _float_div(a: float, b: float) -> float:
    """IEEE division, including division by (signed) zero."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b
