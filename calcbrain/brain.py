"""Accumulator-based calculator evaluator.

The brain keeps one running value (the accumulator) and at most one deferred
binary operation. Binary operators are resolved strictly left to right:
``3 + 4 x 5 =`` evaluates to ``(3 + 4) * 5``. Every input is recorded in the
program log, which can be read back and replayed to reproduce the result.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable

from .logging_config import get_logger
from .operations import BinaryOperation, Constant, Equals, UnaryOperation, lookup
from .parser import format_number, to_entry
from .types import Operand, Operator, ProgramEntry

logger = get_logger("brain")


@dataclass(frozen=True)
class PendingBinaryOperation:
    """A binary operation waiting for its second operand."""

    function: Callable[[float, float], float]
    first_operand: float
    symbol: str
    description: str


class CalculatorBrain:
    """Evaluator owning the accumulator, pending operation and program log."""

    def __init__(self) -> None:
        self._accumulator = 0.0
        self._pending: PendingBinaryOperation | None = None
        self._internal_program: list[ProgramEntry] = []
        self._description = ""
        self._description_is_compound = False

    def set_operand(self, operand: float) -> None:
        self._accumulator = float(operand)
        self._internal_program.append(Operand(self._accumulator))
        self._description = format_number(self._accumulator)
        self._description_is_compound = False
        logger.debug("setOperand %r", self._accumulator)

    def perform_operation(self, symbol: str) -> None:
        """Dispatch ``symbol`` against the operation registry.

        The symbol is always recorded in the program log. Symbols with no
        registered operation leave the accumulator untouched.
        """
        self._internal_program.append(Operator(symbol))
        operation = lookup(symbol)
        if operation is None:
            logger.debug("Ignoring unknown symbol %r", symbol)
            return

        if isinstance(operation, Constant):
            self._accumulator = operation.value
            self._description = symbol
            self._description_is_compound = False
        elif isinstance(operation, UnaryOperation):
            self._accumulator = operation.function(self._accumulator)
            self._description = f"{symbol}({self._current_description()})"
            self._description_is_compound = False
        elif isinstance(operation, BinaryOperation):
            self._execute_pending_binary_operation()
            left = self._current_description()
            if self._description_is_compound:
                left = f"({left})"
            self._pending = PendingBinaryOperation(
                function=operation.function,
                first_operand=self._accumulator,
                symbol=symbol,
                description=left,
            )
        elif isinstance(operation, Equals):
            self._execute_pending_binary_operation()
        logger.debug("performOperation %r -> %r", symbol, self._accumulator)

    def _execute_pending_binary_operation(self) -> None:
        pending = self._pending
        if pending is None:
            return
        self._accumulator = pending.function(pending.first_operand, self._accumulator)
        self._description = (
            f"{pending.description} {pending.symbol} {self._current_description()}"
        )
        self._description_is_compound = True
        self._pending = None

    def _current_description(self) -> str:
        return self._description or format_number(self._accumulator)

    @property
    def result(self) -> float:
        return self._accumulator

    @property
    def is_partial_result(self) -> bool:
        """True while a binary operation awaits its second operand."""
        return self._pending is not None

    @property
    def description(self) -> str:
        """Human-readable rendering of the inputs behind the current value."""
        if self._pending is not None:
            return f"{self._pending.description} {self._pending.symbol} ..."
        return self._description

    @property
    def program(self) -> tuple[ProgramEntry, ...]:
        return tuple(self._internal_program)

    @program.setter
    def program(self, value: Any) -> None:
        """Clear state, then replay ``value`` entry by entry.

        Accepts typed entries (Operand / Operator) or the untyped property-list
        form (numbers and strings). Anything else is skipped.
        """
        self.clear()
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            logger.debug("Ignoring program of type %s", type(value).__name__)
            return
        for item in value:
            entry = to_entry(item)
            if entry is None:
                logger.debug("Skipping malformed program entry %r", item)
            elif isinstance(entry, Operand):
                self.set_operand(entry.value)
            else:
                self.perform_operation(entry.symbol)

    def clear(self) -> None:
        self._accumulator = 0.0
        self._pending = None
        self._internal_program.clear()
        self._description = ""
        self._description_is_compound = False

    reset = clear

    def __repr__(self) -> str:
        return (
            f"CalculatorBrain(result={self._accumulator!r}, "
            f"pending={self._pending is not None}, "
            f"program_length={len(self._internal_program)})"
        )
