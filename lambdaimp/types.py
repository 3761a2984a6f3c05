"""Runtime values for lambdaimp.

This module defines the closed set of values a program can produce: 64-bit
integers, booleans, doubles and closures. Values are immutable once built;
evaluation always creates new ones. It also holds the helpers used to name
and render values for console output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

# Marker printed in front of every line the interpreter or analyzer writes.
LAMBDA_SYMBOL = 'λ> '

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True)
class IntVal:
    """A signed 64-bit integer."""
    value: int

    def __repr__(self) -> str:
        return f"Int({self.value})"


@dataclass(frozen=True)
class BoolVal:
    value: bool

    def __repr__(self) -> str:
        return f"Bool({self.value})"


@dataclass(frozen=True)
class DoubleVal:
    """A double precision float.

    Doubles can be bound and printed, but no operator accepts them: using
    one in arithmetic, comparison or as a condition is a type error.
    """
    value: float

    def __repr__(self) -> str:
        return f"Double({self.value!r})"


@dataclass(frozen=True)
class Closure:
    """A function value.

    A closure holds only its parameter names and its body expression. It
    captures nothing from the environment it was created in: the body is
    evaluated against whatever is bound when the function is called.
    """
    params: Tuple[str, ...]
    body: Any  # an Expr node

    def __repr__(self) -> str:
        return f"Closure({list(self.params)!r}, {self.body!r})"


Value = Union[IntVal, BoolVal, DoubleVal, Closure]


def wrap_int64(x: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range.

    Python integers never overflow, so results are folded back the way a
    native 64-bit machine integer would (two's complement).
    """
    if INT64_MIN <= x <= INT64_MAX:
        return x
    return ((x - INT64_MIN) % (1 << 64)) + INT64_MIN


def from_python(x: Any) -> Value:
    """Lift a plain Python int, bool or float into a runtime value.

    Values that already are runtime values are returned unchanged.
    """
    if isinstance(x, (IntVal, BoolVal, DoubleVal, Closure)):
        return x
    # bool is a subclass of int; check it first
    if isinstance(x, bool):
        return BoolVal(x)
    if isinstance(x, int):
        return IntVal(wrap_int64(x))
    if isinstance(x, float):
        return DoubleVal(x)
    raise TypeError(f"cannot convert {type(x).__name__} to a value")


def type_name(value: Any) -> str:
    """Return the language-level kind name of a runtime value."""
    if isinstance(value, IntVal):
        return 'Int'
    if isinstance(value, BoolVal):
        return 'Bool'
    if isinstance(value, DoubleVal):
        return 'Double'
    if isinstance(value, Closure):
        return 'Closure'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Render a value the way it is printed on the console."""
    if isinstance(value, BoolVal):
        return 'True' if value.value else 'False'
    if isinstance(value, IntVal):
        return str(value.value)
    if isinstance(value, DoubleVal):
        # repr gives the shortest round-trip form
        return repr(value.value)
    if isinstance(value, Closure):
        return f"<closure ({', '.join(value.params)})>"
    return str(value)
