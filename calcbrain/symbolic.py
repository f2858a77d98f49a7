"""Exact replay of calculator programs with SymPy.

Replays the same accumulator / pending-operation state machine as
``CalculatorBrain`` but on SymPy values, so ``π x 2 =`` yields ``2*pi`` and
``2 √`` yields ``sqrt(2)``. Operands are converted from their shortest decimal
repr, so ``0.1`` becomes ``1/10`` rather than the nearest binary fraction.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Any, Iterable

import sympy as sp

from . import config
from .logging_config import get_logger
from .operations import BinaryOperation, Constant, Equals, UnaryOperation, lookup
from .parser import to_entry
from .types import Operand, SymbolicError

logger = get_logger("symbolic")


def to_exact(value: float) -> sp.Expr:
    """Convert a float operand to an exact SymPy number."""
    if math.isnan(value):
        return sp.nan
    if math.isinf(value):
        return sp.oo if value > 0 else -sp.oo
    fraction = Fraction(repr(value))
    return sp.Rational(fraction.numerator, fraction.denominator)


def _height(expr: sp.Basic) -> int:
    if not expr.args:
        return 0
    return 1 + max(_height(arg) for arg in expr.args)


def _check_height(height: int, max_depth: int, symbol: str) -> None:
    if height > max_depth:
        raise SymbolicError(
            f"Exact evaluation too deep at '{symbol}' (max depth {max_depth})",
            code="TOO_DEEP",
        )


def exact_value(program: Iterable[Any]) -> sp.Expr:
    """Replay ``program`` exactly and return the final accumulator.

    Args:
        program: Typed program entries or a property list

    Returns:
        SymPy expression for the accumulator

    Raises:
        SymbolicError: If SymPy fails on one of the operations, or an operation
            would nest the expression deeper than config.MAX_EXACT_DEPTH
    """
    max_depth = config.MAX_EXACT_DEPTH
    accumulator: sp.Expr = sp.Integer(0)
    pending = None
    for item in program:
        entry = to_entry(item)
        if entry is None:
            continue
        if isinstance(entry, Operand):
            accumulator = to_exact(entry.value)
            continue
        operation = lookup(entry.symbol)
        try:
            if isinstance(operation, Constant):
                accumulator = operation.exact
            elif isinstance(operation, UnaryOperation):
                _check_height(_height(accumulator) + 1, max_depth, entry.symbol)
                accumulator = operation.exact(accumulator)
            elif isinstance(operation, (BinaryOperation, Equals)):
                if pending is not None:
                    function, first_operand = pending
                    height = max(_height(first_operand), _height(accumulator)) + 1
                    _check_height(height, max_depth, entry.symbol)
                    accumulator = function(first_operand, accumulator)
                    pending = None
                if isinstance(operation, BinaryOperation):
                    pending = (operation.exact, accumulator)
        except (TypeError, ValueError, ArithmeticError, RecursionError) as e:
            logger.debug(f"Exact replay failed at {entry.symbol!r}: {e}")
            raise SymbolicError(
                f"Exact evaluation failed at '{entry.symbol}': {e}",
                code="EXACT_FAILED",
            ) from e
    return accumulator


def exact_for_result(program: Iterable[Any], value: float) -> sp.Expr | None:
    """Exact form of ``program`` when it can stand for the float ``value``.

    Returns None when the float result is inf or NaN, or when the exact value
    is not a real number (``√`` of a negative gives ``2*I``, ``1 ÷ 0`` gives
    ``zoo``), so the two never disagree.

    Raises:
        SymbolicError: Propagated from ``exact_value``
    """
    if not math.isfinite(value):
        return None
    expr = exact_value(program)
    if expr.is_real is not True:
        logger.debug(f"Dropping non-real exact value {expr}")
        return None
    return expr


def format_exact(expr: Any) -> str:
    """Render an exact value (or its ``str``) using the calculator's own symbols."""
    return str(expr).replace("sqrt", "√").replace("pi", "π")
