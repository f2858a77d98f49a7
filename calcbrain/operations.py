"""Operation variants and the immutable operation registry.

Every registered symbol maps to exactly one of four variants:

- ``Constant``: replaces the accumulator with a fixed value
- ``UnaryOperation``: applies a function to the accumulator
- ``BinaryOperation``: deferred until its second operand is known
- ``Equals``: resolves the pending binary operation

Each variant carries both a float implementation and an exact SymPy
counterpart so that the same program can be replayed in either domain.
Float implementations follow IEEE-754 results (inf / NaN) instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Union

import sympy as sp


@dataclass(frozen=True)
class Constant:
    value: float
    exact: sp.Expr


@dataclass(frozen=True)
class UnaryOperation:
    function: Callable[[float], float]
    exact: Callable[[sp.Expr], sp.Expr]


@dataclass(frozen=True)
class BinaryOperation:
    function: Callable[[float, float], float]
    exact: Callable[[sp.Expr, sp.Expr], sp.Expr]


@dataclass(frozen=True)
class Equals:
    pass


Operation = Union[Constant, UnaryOperation, BinaryOperation, Equals]


def square_root(value: float) -> float:
    """Square root returning NaN for negative input."""
    if value < 0:
        return math.nan
    return math.sqrt(value)


def cosine(value: float) -> float:
    """Cosine returning NaN for infinite input."""
    if math.isinf(value):
        return math.nan
    return math.cos(value)


def negate(value: float) -> float:
    return -value


def multiply(op1: float, op2: float) -> float:
    return op1 * op2


def divide(op1: float, op2: float) -> float:
    """Divide with IEEE-754 semantics for a zero divisor.

    Examples:
        >>> divide(1.0, 0.0)
        inf
        >>> divide(-1.0, 0.0)
        -inf
        >>> divide(0.0, 0.0)
        nan
    """
    try:
        return op1 / op2
    except ZeroDivisionError:
        if op1 == 0 or math.isnan(op1):
            return math.nan
        return math.copysign(math.inf, op1) * math.copysign(1.0, op2)


def add(op1: float, op2: float) -> float:
    return op1 + op2


def subtract(op1: float, op2: float) -> float:
    return op1 - op2


OPERATIONS: Mapping[str, Operation] = MappingProxyType(
    {
        "π": Constant(math.pi, sp.pi),
        "e": Constant(math.e, sp.E),
        "√": UnaryOperation(square_root, sp.sqrt),
        "±": UnaryOperation(negate, lambda x: -x),
        "cos": UnaryOperation(cosine, sp.cos),
        "x": BinaryOperation(multiply, lambda x, y: x * y),
        "÷": BinaryOperation(divide, lambda x, y: x / y),
        "+": BinaryOperation(add, lambda x, y: x + y),
        "−": BinaryOperation(subtract, lambda x, y: x - y),
        "=": Equals(),
    }
)


def lookup(symbol: str) -> Operation | None:
    """Return the operation registered for ``symbol``, or None."""
    return OPERATIONS.get(symbol)


def symbols_by_kind() -> dict[str, list[str]]:
    """Group registered symbols by variant name (used by help output)."""
    groups: dict[str, list[str]] = {}
    for symbol, operation in OPERATIONS.items():
        groups.setdefault(type(operation).__name__, []).append(symbol)
    return groups
