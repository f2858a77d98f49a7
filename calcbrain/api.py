"""Public API for CalcBrain - returns structured objects without side effects."""

from __future__ import annotations

from typing import Any, Iterable

from . import config
from .brain import CalculatorBrain
from .logging_config import get_logger
from .operations import OPERATIONS
from .parser import format_number, to_property_list, tokenize
from .symbolic import exact_for_result
from .types import CalcResult, SymbolicError, ValidationError

logger = get_logger("api")


def _result_from_brain(brain: CalculatorBrain) -> CalcResult:
    program = brain.program
    exact = None
    if config.EXACT_RESULTS:
        try:
            expr = exact_for_result(program, brain.result)
            if expr is not None:
                exact = str(expr)
        except SymbolicError as e:
            logger.info(f"Exact result unavailable: {e}")
    return CalcResult(
        ok=True,
        result=brain.result,
        approx=format_number(brain.result),
        exact=exact,
        description=brain.description,
        is_partial=brain.is_partial_result,
        program=to_property_list(program),
    )


def evaluate(text: str) -> CalcResult:
    """Run whitespace-separated calculator inputs on a fresh brain.

    Args:
        text: Inputs as typed on the keypad (e.g., "3 + 4 x 5 =")

    Returns:
        CalcResult with the accumulator, exact form and description

    Example:
        >>> from calcbrain.api import evaluate
        >>> evaluate("3 + 4 x 5 =").result
        35.0
        >>> evaluate("π x 2 =").exact
        '2*pi'
    """
    try:
        entries = tokenize(text)
    except ValidationError as e:
        return CalcResult(ok=False, error=str(e))
    if not entries:
        return CalcResult(ok=False, error="Empty input")
    brain = CalculatorBrain()
    brain.program = entries
    return _result_from_brain(brain)


def run_program(program: Iterable[Any]) -> CalcResult:
    """Replay a saved program (typed entries or property list).

    Example:
        >>> from calcbrain.api import run_program
        >>> run_program([9.0, "√"]).result
        3.0
    """
    brain = CalculatorBrain()
    brain.program = program
    return _result_from_brain(brain)


def validate_symbol(symbol: str) -> tuple[bool, str | None]:
    """Check whether ``symbol`` names a registered operation.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if symbol in OPERATIONS:
        return True, None
    return False, f"Unknown symbol: {symbol}"


def available_symbols() -> list[str]:
    """Return the registered operation symbols in registry order."""
    return list(OPERATIONS)
